"""Stream encryptor: plaintext in, framed chunks out."""
from __future__ import annotations

import logging

from chunkseal.core.framing import LENGTH_PREFIX_SIZE, pack_length_into
from chunkseal.core.streamio import read_partial, write_all
from chunkseal.stream.session import SessionContext, StreamStats


logger = logging.getLogger(__name__)


class StreamEncryptor:
    def __init__(self, session: SessionContext):
        self.session = session

    def run(self, source, sink) -> StreamStats:
        """
        Encrypt ``source`` to ``sink`` until EOF.

        Each read of up to ``max_chunk_size`` bytes becomes one chunk, short
        reads included. The read that returns 0 bytes produces the terminal
        chunk and ends the pass.
        """
        box = self.session.box
        layout = self.session.layout
        view = memoryview(self.session.buffer)
        plain = view[LENGTH_PREFIX_SIZE:LENGTH_PREFIX_SIZE + layout.max_chunk_size]
        stats = StreamStats()

        chunk_index = 0
        while True:
            n = read_partial(source, plain)
            sealed = box.encrypt(plain[:n], chunk_index)
            # overwrite the plaintext region with the sealed payload
            pack_length_into(view, n)
            view[LENGTH_PREFIX_SIZE:LENGTH_PREFIX_SIZE + len(sealed)] = sealed
            wire = layout.wire_size(n)
            write_all(sink, view[:wire])

            stats.chunks += 1
            stats.plaintext_bytes += n
            stats.ciphertext_bytes += wire
            logger.debug("encrypted chunk #%d (%d bytes)", chunk_index, n)

            if n == 0:
                break
            chunk_index += 1

        logger.info(
            "encrypted %d bytes into %d chunk(s)", stats.plaintext_bytes, stats.chunks
        )
        return stats
