"""Unit tests for keyless chunk header inspection."""

import io
import struct

import pytest

from chunkseal.core.exceptions import (
    OversizedChunkError,
    PrematureEndOfStreamError,
    TruncatedChunkError,
    TruncatedHeaderError,
)
from chunkseal.security.secretbox import HEADER_BYTES
from chunkseal.stream.encryptor import StreamEncryptor
from chunkseal.stream.headers import ChunkHeader, iter_chunk_headers
from chunkseal.stream.session import Mode, SessionContext


SMALL_BUFFER = 512


def encrypt(data: bytes) -> bytes:
    out = io.BytesIO()
    with SessionContext(bytearray(range(32)), Mode.ENCRYPT, buffer_size=SMALL_BUFFER) as session:
        StreamEncryptor(session).run(io.BytesIO(data), out)
    return out.getvalue()


def test_lists_every_chunk_and_terminal():
    headers = list(iter_chunk_headers(io.BytesIO(encrypt(b"a" * 1000)), SMALL_BUFFER))
    assert [h.declared_length for h in headers] == [480, 480, 40, 0]
    assert [h.index for h in headers] == [0, 1, 2, 3]
    assert headers[-1].terminal
    assert not headers[0].terminal
    assert sum(h.wire_size for h in headers) == len(encrypt(b"a" * 1000))


def test_empty_plaintext_has_single_terminal_header():
    headers = list(iter_chunk_headers(io.BytesIO(encrypt(b"")), SMALL_BUFFER))
    assert headers == [ChunkHeader(0, 0, 4 + HEADER_BYTES)]


def test_stops_at_terminal_chunk():
    blob = encrypt(b"xyz")
    source = io.BytesIO(blob + b"extra")
    list(iter_chunk_headers(source, SMALL_BUFFER))
    assert source.tell() == len(blob)


def test_missing_terminal():
    blob = encrypt(b"xyz")
    with pytest.raises(PrematureEndOfStreamError):
        list(iter_chunk_headers(io.BytesIO(blob[:-(4 + HEADER_BYTES)]), SMALL_BUFFER))


def test_truncations_and_oversize():
    blob = encrypt(b"xyz")
    with pytest.raises(TruncatedHeaderError):
        list(iter_chunk_headers(io.BytesIO(blob[:2]), SMALL_BUFFER))
    with pytest.raises(TruncatedChunkError):
        list(iter_chunk_headers(io.BytesIO(blob[:10]), SMALL_BUFFER))
    with pytest.raises(OversizedChunkError):
        list(iter_chunk_headers(io.BytesIO(struct.pack("<I", 10_000)), SMALL_BUFFER))


def test_headers_do_not_authenticate_payloads():
    blob = bytearray(encrypt(b"xyz"))
    blob[10] ^= 0xFF
    assert len(list(iter_chunk_headers(io.BytesIO(bytes(blob)), SMALL_BUFFER))) == 2
