"""Best-effort wiping of secret buffers.

Only mutable buffers can be wiped. Immutable ``bytes`` copies made by the
interpreter or handed to C libraries stay in memory until collected.
"""


def zeroize(buf) -> None:
    """Overwrite a ``bytearray`` (or writable memoryview) with zeros in place."""
    if buf is None:
        return
    view = memoryview(buf)
    try:
        view[:] = bytes(len(view))
    finally:
        view.release()


def to_secret_buffer(value) -> bytearray:
    """Return ``value`` as a wipeable bytearray (str is encoded as UTF-8).

    A bytearray argument is returned as-is so the caller's buffer is the one
    that gets wiped later.
    """
    if isinstance(value, bytearray):
        return value
    if isinstance(value, str):
        return bytearray(value.encode("utf-8"))
    return bytearray(value)
