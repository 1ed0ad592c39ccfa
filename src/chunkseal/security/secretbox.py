"""Per-chunk authenticated encryption (AES-256-GCM).

Payload layout for one chunk: ``nonce(12) || ciphertext || tag(16)``, so the
fixed overhead ``HEADER_BYTES`` is 28. The nonce is random per chunk because
the key is derived deterministically from the password and would otherwise
repeat across streams. The chunk index is never sent; it is bound through the
associated data ``context(8) || uint64-LE(chunk_index)``, so a chunk that was
moved, replayed or dropped fails verification at the receiving index.
"""
from __future__ import annotations

import os
import struct

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from chunkseal.core.exceptions import AuthenticationFailedError, EncryptionError


CONTEXT = b"chnkseal"
CONTEXT_SIZE = 8
KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16
HEADER_BYTES = NONCE_SIZE + TAG_SIZE

MAX_CHUNK_INDEX = 2**64 - 1

_INDEX = struct.Struct("<Q")


def associated_data(chunk_index: int, context: bytes = CONTEXT) -> bytes:
    return context + _INDEX.pack(chunk_index)


class SecretBox:
    """AEAD bound to one key and one context tag."""

    def __init__(self, key, context: bytes = CONTEXT):
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
        if len(context) != CONTEXT_SIZE:
            raise ValueError(f"context must be {CONTEXT_SIZE} bytes, got {len(context)}")
        self.context = bytes(context)
        self._aead = AESGCM(key)

    def encrypt(self, plaintext, chunk_index: int) -> bytes:
        """Seal ``plaintext`` for ``chunk_index``; returns ``HEADER_BYTES + len(plaintext)`` bytes."""
        if not 0 <= chunk_index <= MAX_CHUNK_INDEX:
            raise EncryptionError(f"chunk index {chunk_index} out of range")
        nonce = os.urandom(NONCE_SIZE)
        try:
            sealed = self._aead.encrypt(
                nonce, bytes(plaintext), associated_data(chunk_index, self.context)
            )
        except (OverflowError, ValueError) as exc:
            raise EncryptionError(f"Encryption error on chunk #{chunk_index}: {exc}") from exc
        return nonce + sealed

    def decrypt(self, payload, chunk_index: int) -> bytes:
        """Verify and open a payload produced by :meth:`encrypt`.

        Raises :class:`AuthenticationFailedError` if the payload was altered,
        belongs to another index, or was sealed under a different key.
        """
        if len(payload) < HEADER_BYTES or not 0 <= chunk_index <= MAX_CHUNK_INDEX:
            raise AuthenticationFailedError(chunk_index)
        payload = bytes(payload)
        nonce, sealed = payload[:NONCE_SIZE], payload[NONCE_SIZE:]
        try:
            return self._aead.decrypt(
                nonce, sealed, associated_data(chunk_index, self.context)
            )
        except InvalidTag as exc:
            raise AuthenticationFailedError(chunk_index) from exc
