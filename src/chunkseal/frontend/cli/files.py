"""Open the command-line input/output, with ``-`` meaning stdin/stdout."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, BinaryIO

from chunkseal.core.exceptions import StreamIOError


STDIO = "-"


def _is_stdio(path: Optional[str]) -> bool:
    return path is None or path == STDIO


@contextmanager
def open_input(path: Optional[str]) -> Iterator[BinaryIO]:
    if _is_stdio(path):
        yield sys.stdin.buffer
        return
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise StreamIOError(f"Unable to access [{path}]: [{exc.strerror}]") from exc
    with f:
        yield f


def _finish(out: BinaryIO, close: bool) -> None:
    # buffered write errors (ENOSPC, EIO) only surface here
    try:
        out.flush()
    except OSError as exc:
        raise StreamIOError(f"write failed: {exc}") from exc
    finally:
        if close:
            try:
                out.close()
            except OSError as exc:
                raise StreamIOError(f"write failed: {exc}") from exc


@contextmanager
def open_output(path: Optional[str]) -> Iterator[BinaryIO]:
    """Yield a binary sink; regular files are created or truncated.

    Flushing and closing failures are reported as :class:`StreamIOError`.
    """
    if _is_stdio(path):
        out = sys.stdout.buffer
        close = False
    else:
        try:
            out = open(path, "wb")
        except OSError as exc:
            raise StreamIOError(f"Unable to access [{path}]: [{exc.strerror}]") from exc
        close = True
    try:
        yield out
    finally:
        _finish(out, close)
