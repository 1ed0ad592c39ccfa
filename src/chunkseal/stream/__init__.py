"""Chunked streaming encryption: session, encryptor, decryptor and helpers."""

from .api import decrypt_bytes, decrypt_stream, encrypt_bytes, encrypt_stream
from .decryptor import DecryptorState, StreamDecryptor
from .encryptor import StreamEncryptor
from .headers import ChunkHeader, iter_chunk_headers
from .session import Mode, SessionContext, StreamStats

__all__ = [
    "decrypt_bytes",
    "decrypt_stream",
    "encrypt_bytes",
    "encrypt_stream",
    "DecryptorState",
    "StreamDecryptor",
    "StreamEncryptor",
    "ChunkHeader",
    "iter_chunk_headers",
    "Mode",
    "SessionContext",
    "StreamStats",
]
