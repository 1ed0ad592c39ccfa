"""Unit tests for secret buffer helpers."""

from chunkseal.security.memory import to_secret_buffer, zeroize


def test_zeroize_bytearray_in_place():
    buf = bytearray(b"secret")
    alias = buf
    zeroize(buf)
    assert alias == bytearray(6)
    assert len(buf) == 6


def test_zeroize_memoryview_slice():
    buf = bytearray(b"keepWIPEkeep")
    zeroize(memoryview(buf)[4:8])
    assert buf == b"keep\x00\x00\x00\x00keep"


def test_zeroize_none_is_noop():
    zeroize(None)


def test_to_secret_buffer_keeps_bytearray_identity():
    buf = bytearray(b"pw")
    assert to_secret_buffer(buf) is buf


def test_to_secret_buffer_encodes_str_as_utf8():
    assert to_secret_buffer("é") == bytearray("é".encode("utf-8"))


def test_to_secret_buffer_copies_bytes():
    out = to_secret_buffer(b"abc")
    assert isinstance(out, bytearray)
    assert out == b"abc"
