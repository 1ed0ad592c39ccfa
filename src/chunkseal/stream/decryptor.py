"""Stream decryptor: framed chunks in, plaintext out.

States: READING_HEADER -> READING_PAYLOAD -> AUTHENTICATING, then either back
to READING_HEADER for a non-empty chunk or DONE for the terminal chunk. Any
error moves the decryptor to FAILED and is re-raised.

Plaintext of chunks that authenticated before a failure has already been
written to the sink; it is genuine, the stream just ends early.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from chunkseal.core.exceptions import (
    ChunkSealError,
    OversizedChunkError,
    PrematureEndOfStreamError,
    TruncatedChunkError,
    TruncatedHeaderError,
)
from chunkseal.core.framing import LENGTH_PREFIX_SIZE, decode_length
from chunkseal.core.streamio import read_exact, write_all
from chunkseal.stream.session import SessionContext, StreamStats


logger = logging.getLogger(__name__)


class DecryptorState(Enum):
    READING_HEADER = "reading_header"
    READING_PAYLOAD = "reading_payload"
    AUTHENTICATING = "authenticating"
    DONE = "done"
    FAILED = "failed"


class StreamDecryptor:
    def __init__(self, session: SessionContext):
        self.session = session
        self.state = DecryptorState.READING_HEADER
        self.chunk_index = 0
        self.error: Optional[ChunkSealError] = None

    def run(self, source, sink) -> StreamStats:
        try:
            stats = self._run(source, sink)
        except ChunkSealError as exc:
            self.state = DecryptorState.FAILED
            self.error = exc
            logger.debug("decryption failed at chunk #%d: %s", self.chunk_index, exc)
            raise
        self.state = DecryptorState.DONE
        logger.info(
            "decrypted %d bytes from %d chunk(s)", stats.plaintext_bytes, stats.chunks
        )
        return stats

    def _run(self, source, sink) -> StreamStats:
        box = self.session.box
        layout = self.session.layout
        view = memoryview(self.session.buffer)
        header = view[:LENGTH_PREFIX_SIZE]
        stats = StreamStats()

        while True:
            self.state = DecryptorState.READING_HEADER
            got = read_exact(source, header)
            if got == 0:
                raise PrematureEndOfStreamError(self.chunk_index)
            if got < LENGTH_PREFIX_SIZE:
                raise TruncatedHeaderError(self.chunk_index, got)

            declared = decode_length(header)
            if declared > layout.max_chunk_size:
                raise OversizedChunkError(self.chunk_index, declared, layout.max_chunk_size)

            self.state = DecryptorState.READING_PAYLOAD
            expected = layout.payload_size(declared)
            payload = view[LENGTH_PREFIX_SIZE:LENGTH_PREFIX_SIZE + expected]
            got = read_exact(source, payload)
            if got != expected:
                raise TruncatedChunkError(self.chunk_index, expected, got)

            self.state = DecryptorState.AUTHENTICATING
            plaintext = box.decrypt(payload, self.chunk_index)

            stats.chunks += 1
            stats.ciphertext_bytes += layout.wire_size(declared)
            logger.debug("decrypted chunk #%d (%d bytes)", self.chunk_index, declared)

            if declared == 0:
                return stats

            write_all(sink, plaintext)
            stats.plaintext_bytes += declared
            self.chunk_index += 1
