"""Security helpers: Argon2id key derivation, per-chunk AEAD and secret wiping."""

from .kdf import DEFAULT_KDF_PARAMS, KdfParams, derive_key
from .memory import zeroize
from .secretbox import CONTEXT, HEADER_BYTES, SecretBox

__all__ = [
    "DEFAULT_KDF_PARAMS",
    "KdfParams",
    "derive_key",
    "zeroize",
    "CONTEXT",
    "HEADER_BYTES",
    "SecretBox",
]
