"""Walk a ciphertext stream's framing without the key."""
from __future__ import annotations

from typing import Iterator, NamedTuple

from chunkseal.core.exceptions import (
    OversizedChunkError,
    PrematureEndOfStreamError,
    TruncatedChunkError,
    TruncatedHeaderError,
)
from chunkseal.core.framing import (
    DEFAULT_BUFFER_SIZE,
    LENGTH_PREFIX_SIZE,
    ChunkLayout,
    decode_length,
)
from chunkseal.core.streamio import read_exact


class ChunkHeader(NamedTuple):
    index: int
    declared_length: int
    wire_size: int

    @property
    def terminal(self) -> bool:
        return self.declared_length == 0


def iter_chunk_headers(source, buffer_size: int = DEFAULT_BUFFER_SIZE) -> Iterator[ChunkHeader]:
    """Yield one :class:`ChunkHeader` per chunk, ending with the terminal one.

    Payloads are skipped, not authenticated, so a clean walk only proves the
    framing is intact. Raises the same format errors as the decryptor.
    """
    layout = ChunkLayout(buffer_size)
    view = memoryview(bytearray(layout.buffer_size))
    header = view[:LENGTH_PREFIX_SIZE]
    index = 0
    while True:
        got = read_exact(source, header)
        if got == 0:
            raise PrematureEndOfStreamError(index)
        if got < LENGTH_PREFIX_SIZE:
            raise TruncatedHeaderError(index, got)
        declared = decode_length(header)
        if declared > layout.max_chunk_size:
            raise OversizedChunkError(index, declared, layout.max_chunk_size)
        expected = layout.payload_size(declared)
        got = read_exact(source, view[LENGTH_PREFIX_SIZE:LENGTH_PREFIX_SIZE + expected])
        if got != expected:
            raise TruncatedChunkError(index, expected, got)
        yield ChunkHeader(index, declared, layout.wire_size(declared))
        if declared == 0:
            return
        index += 1
