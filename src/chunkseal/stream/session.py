"""Per-run session holding the stream key and the reusable scratch buffer.

A session lives for exactly one encrypt-or-decrypt pass. ``close()`` (or
leaving the ``with`` block) zeroes the key and the scratch buffer on every
exit path; a closed session refuses further use.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from chunkseal.core.exceptions import SessionClosedError
from chunkseal.core.framing import DEFAULT_BUFFER_SIZE, ChunkLayout
from chunkseal.security.kdf import DEFAULT_KDF_PARAMS, KdfParams, derive_key
from chunkseal.security.memory import to_secret_buffer, zeroize
from chunkseal.security.secretbox import CONTEXT, SecretBox


logger = logging.getLogger(__name__)


class Mode(Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


@dataclass
class StreamStats:
    """Counters for one pass. ``chunks`` includes the terminal chunk."""

    chunks: int = 0
    plaintext_bytes: int = 0
    ciphertext_bytes: int = 0


class SessionContext:
    def __init__(
        self,
        key,
        mode: Mode,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        context: bytes = CONTEXT,
    ):
        """Take ownership of ``key``.

        A ``bytearray`` key is kept by reference and wiped by :meth:`close`,
        including when construction itself fails.
        """
        self._key: Optional[bytearray] = to_secret_buffer(key)
        self.closed = False
        try:
            self.mode = Mode(mode)
            self.layout = ChunkLayout(buffer_size)
            self._box: Optional[SecretBox] = SecretBox(self._key, context)
        except Exception:
            self.close()
            raise
        self.buffer = bytearray(self.layout.buffer_size)

    @classmethod
    def from_password(
        cls,
        password,
        mode: Mode,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        kdf_params: KdfParams = DEFAULT_KDF_PARAMS,
        context: bytes = CONTEXT,
    ) -> "SessionContext":
        """Derive the key from ``password`` (wiped afterwards) and open a session."""
        # validate sizing before paying for Argon2
        try:
            ChunkLayout(buffer_size)
        except Exception:
            if isinstance(password, bytearray):
                zeroize(password)
            raise
        key = derive_key(password, params=kdf_params, context=context)
        return cls(key, mode, buffer_size=buffer_size, context=context)

    @property
    def box(self) -> SecretBox:
        if self.closed or self._box is None:
            raise SessionClosedError("session is closed")
        return self._box

    def run(self, source, sink) -> StreamStats:
        """Run the pass selected by :attr:`mode` from ``source`` to ``sink``."""
        # imported here: encryptor/decryptor import this module
        from chunkseal.stream.decryptor import StreamDecryptor
        from chunkseal.stream.encryptor import StreamEncryptor

        if self.mode is Mode.ENCRYPT:
            return StreamEncryptor(self).run(source, sink)
        return StreamDecryptor(self).run(source, sink)

    def close(self) -> None:
        """Wipe the key and scratch buffer. Safe to call more than once."""
        if not self.closed:
            logger.debug("closing %s session, wiping key", getattr(self, "mode", None))
        try:
            zeroize(self._key)
            zeroize(getattr(self, "buffer", None))
        finally:
            self._key = None
            self._box = None
            self.closed = True

    def __enter__(self) -> "SessionContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
