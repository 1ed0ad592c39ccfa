"""chunkseal: password-based streaming authenticated encryption.

Plaintext is cut into length-prefixed chunks, each sealed with AES-256-GCM
under a key derived from the password with Argon2id. A zero-length chunk marks
the end of the stream, so truncation is detected on decryption.
"""

from chunkseal.core.exceptions import (
    AuthenticationFailedError,
    ChunkSealError,
    ConfigurationError,
    EncryptionError,
    KeyDerivationError,
    OversizedChunkError,
    PrematureEndOfStreamError,
    SessionClosedError,
    StreamFormatError,
    StreamIOError,
    TruncatedChunkError,
    TruncatedHeaderError,
)
from chunkseal.security.kdf import KdfParams, derive_key
from chunkseal.stream import (
    Mode,
    SessionContext,
    StreamStats,
    decrypt_bytes,
    decrypt_stream,
    encrypt_bytes,
    encrypt_stream,
    iter_chunk_headers,
)

__version__ = "0.1.0"

__all__ = [
    "AuthenticationFailedError",
    "ChunkSealError",
    "ConfigurationError",
    "EncryptionError",
    "KeyDerivationError",
    "OversizedChunkError",
    "PrematureEndOfStreamError",
    "SessionClosedError",
    "StreamFormatError",
    "StreamIOError",
    "TruncatedChunkError",
    "TruncatedHeaderError",
    "KdfParams",
    "derive_key",
    "Mode",
    "SessionContext",
    "StreamStats",
    "decrypt_bytes",
    "decrypt_stream",
    "encrypt_bytes",
    "encrypt_stream",
    "iter_chunk_headers",
]
