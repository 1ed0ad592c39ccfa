"""Deterministic password-based key derivation (Argon2id).

There is no per-stream salt: the Argon2 salt is derived from a fixed all-zero
master key and the application context tag, so the same password always gives
the same key and nothing besides the ciphertext needs to be stored. The price
is that one precomputed dictionary works against every stream produced by this
tool.
"""
from __future__ import annotations

from dataclasses import dataclass

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from chunkseal.core.exceptions import KeyDerivationError
from chunkseal.security.memory import to_secret_buffer, zeroize
from chunkseal.security.secretbox import CONTEXT, KEY_SIZE


MASTER_KEY = bytes(32)
SALT_SIZE = 16


@dataclass(frozen=True)
class KdfParams:
    time_cost: int = 3
    memory_cost: int = 65536  # KiB
    parallelism: int = 1
    key_len: int = KEY_SIZE


DEFAULT_KDF_PARAMS = KdfParams()


def derive_salt(master_key: bytes = MASTER_KEY, context: bytes = CONTEXT) -> bytes:
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=SALT_SIZE,
        salt=master_key,
        info=b"pwhash" + context,
    )
    return hkdf.derive(b"chunkseal-salt")


def derive_key(
    password,
    params: KdfParams = DEFAULT_KDF_PARAMS,
    master_key: bytes = MASTER_KEY,
    context: bytes = CONTEXT,
) -> bytearray:
    """
    Derive the stream key from ``password``.

    ``password`` may be ``str`` (encoded as UTF-8), ``bytes`` or ``bytearray``.
    A bytearray is zeroed once the derivation finishes, successfully or not.
    Returns the key as a bytearray so the session can wipe it.
    """
    secret = to_secret_buffer(password)
    try:
        raw = hash_secret_raw(
            secret=bytes(secret),
            salt=derive_salt(master_key, context),
            time_cost=params.time_cost,
            memory_cost=params.memory_cost,
            parallelism=params.parallelism,
            hash_len=params.key_len,
            type=Type.ID,
        )
    except (HashingError, ValueError, TypeError) as exc:
        raise KeyDerivationError(f"Password hashing failed: {exc}") from exc
    finally:
        zeroize(secret)
    return bytearray(raw)


def kdf_params_to_dict(params: KdfParams) -> dict:
    return {
        "algo": "argon2id",
        "time": params.time_cost,
        "memory": params.memory_cost,
        "parallelism": params.parallelism,
        "key_len": params.key_len,
    }
