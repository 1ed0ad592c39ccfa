"""Chunk framing for chunkseal streams.

Wire layout of one chunk (little-endian):

- 4 bytes: declared plaintext length ``n`` (unsigned)
- H bytes + n bytes: authenticated payload produced by
  :mod:`chunkseal.security.secretbox` (``H`` = ``HEADER_BYTES``)

A stream is any number of chunks with ``n > 0`` followed by exactly one
terminal chunk with ``n == 0``. The largest ``n`` a reader accepts is tied to
the scratch buffer size so that one whole chunk always fits in it.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass

from chunkseal.core.exceptions import ConfigurationError
from chunkseal.security.secretbox import HEADER_BYTES


LENGTH_PREFIX = struct.Struct("<I")
LENGTH_PREFIX_SIZE = LENGTH_PREFIX.size

DEFAULT_BUFFER_SIZE = 1024 * 1024  # 1 MiB
MIN_BUFFER_SIZE = 512
MAX_BUFFER_SIZE = 0x7FFFFFFF


def clamp_buffer_size(size: int) -> int:
    """Clamp a user-requested buffer size into the supported range."""
    if size < MIN_BUFFER_SIZE:
        return MIN_BUFFER_SIZE
    if size > MAX_BUFFER_SIZE:
        return MAX_BUFFER_SIZE
    return size


@dataclass(frozen=True)
class ChunkLayout:
    """Sizing rules for one scratch buffer.

    ``max_chunk_size = buffer_size - LENGTH_PREFIX_SIZE - auth_overhead``.
    Construction fails with :class:`ConfigurationError` when that leaves no
    room for plaintext.
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    auth_overhead: int = HEADER_BYTES

    def __post_init__(self) -> None:
        if self.buffer_size > MAX_BUFFER_SIZE:
            raise ConfigurationError(
                f"buffer size {self.buffer_size} exceeds maximum {MAX_BUFFER_SIZE}"
            )
        if self.max_chunk_size <= 0:
            raise ConfigurationError(
                f"buffer size {self.buffer_size} leaves no room for plaintext "
                f"(needs more than {LENGTH_PREFIX_SIZE + self.auth_overhead} bytes)"
            )

    @property
    def max_chunk_size(self) -> int:
        return self.buffer_size - LENGTH_PREFIX_SIZE - self.auth_overhead

    def payload_size(self, declared_length: int) -> int:
        return self.auth_overhead + declared_length

    def wire_size(self, declared_length: int) -> int:
        return LENGTH_PREFIX_SIZE + self.payload_size(declared_length)


def pack_length_into(buf, length: int) -> None:
    # writes the prefix at offset 0 of buf
    LENGTH_PREFIX.pack_into(buf, 0, length)


def encode_length(length: int) -> bytes:
    return LENGTH_PREFIX.pack(length)


def decode_length(data) -> int:
    (length,) = LENGTH_PREFIX.unpack_from(data, 0)
    return length
