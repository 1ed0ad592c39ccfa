"""Blocking read/write helpers over binary file objects.

Sources are anything with ``readinto`` (or at least ``read``); sinks are
anything with ``write``. OS-level failures are re-raised as
:class:`StreamIOError` with the original exception chained.
"""
from __future__ import annotations

from chunkseal.core.exceptions import StreamIOError


def _read_once(source, view: memoryview) -> int:
    readinto = getattr(source, "readinto", None)
    try:
        if readinto is not None:
            n = readinto(view)
        else:
            data = source.read(len(view))
            if data is None:
                n = None
            elif len(data) > len(view):
                raise StreamIOError(
                    f"read failed: source returned {len(data)} bytes for a {len(view)}-byte request"
                )
            else:
                n = len(data)
                view[:n] = data
    except OSError as exc:
        raise StreamIOError(f"read failed: {exc}") from exc
    if n is None:
        # non-blocking source with nothing available
        raise StreamIOError("read failed: source would block")
    return n


def read_partial(source, view: memoryview) -> int:
    """Fill ``view`` with a single read; 0 means end of stream.

    A short count is not an error, it just defines how much arrived.
    """
    if len(view) == 0:
        return 0
    return _read_once(source, view)


def read_exact(source, view: memoryview) -> int:
    """Read until ``view`` is full or the source is exhausted.

    Returns the number of bytes read; less than ``len(view)`` means EOF.
    """
    total = 0
    size = len(view)
    while total < size:
        n = _read_once(source, view[total:])
        if n == 0:
            break
        total += n
    return total


def write_all(sink, data) -> None:
    """Write every byte of ``data`` or raise :class:`StreamIOError`."""
    view = memoryview(data)
    try:
        while len(view):
            n = sink.write(view)
            if n is None:
                raise StreamIOError("write failed: sink would block")
            if n <= 0:
                raise StreamIOError(f"short write ({len(view)} bytes left)")
            view = view[n:]
    except OSError as exc:
        raise StreamIOError(f"write failed: {exc}") from exc
