"""Unit tests for the deterministic Argon2id key derivation."""

from unittest.mock import patch

import pytest
from argon2.exceptions import HashingError

from chunkseal.core.exceptions import KeyDerivationError
from chunkseal.security.kdf import (
    DEFAULT_KDF_PARAMS,
    MASTER_KEY,
    SALT_SIZE,
    KdfParams,
    derive_key,
    derive_salt,
    kdf_params_to_dict,
)
from chunkseal.security.secretbox import CONTEXT


def test_master_key_is_all_zero_32_bytes():
    assert MASTER_KEY == b"\x00" * 32


def test_default_params():
    assert DEFAULT_KDF_PARAMS == KdfParams(time_cost=3, memory_cost=65536, parallelism=1, key_len=32)


def test_derive_salt_is_fixed():
    salt = derive_salt()
    assert len(salt) == SALT_SIZE
    assert salt == derive_salt(MASTER_KEY, CONTEXT)


def test_derive_salt_depends_on_context_and_master_key():
    assert derive_salt(context=b"othercxt") != derive_salt()
    assert derive_salt(master_key=b"\x01" * 32) != derive_salt()


def test_derive_key_is_deterministic(fast_kdf):
    """Same password, same parameters, same key: no random salt."""
    k1 = derive_key(b"correct horse", params=fast_kdf)
    k2 = derive_key(b"correct horse", params=fast_kdf)
    assert isinstance(k1, bytearray)
    assert len(k1) == 32
    assert k1 == k2


def test_derive_key_with_default_params():
    key = derive_key("default cost password")
    assert len(key) == DEFAULT_KDF_PARAMS.key_len


def test_str_and_bytes_passwords_agree(fast_kdf):
    assert derive_key("pässword", params=fast_kdf) == derive_key("pässword".encode("utf-8"), params=fast_kdf)


def test_different_passwords_give_different_keys(fast_kdf):
    assert derive_key(b"one", params=fast_kdf) != derive_key(b"two", params=fast_kdf)


def test_context_separates_keys(fast_kdf):
    assert derive_key(b"pw", params=fast_kdf) != derive_key(b"pw", params=fast_kdf, context=b"othercxt")


def test_custom_key_length(fast_kdf):
    params = KdfParams(time_cost=1, memory_cost=8, parallelism=1, key_len=64)
    assert len(derive_key(b"pw", params=params)) == 64


def test_bytearray_password_is_wiped(fast_kdf):
    password = bytearray(b"wipe me")
    derive_key(password, params=fast_kdf)
    assert password == bytearray(len(b"wipe me"))


def test_invalid_params_raise_key_derivation_error():
    with pytest.raises(KeyDerivationError, match="Password hashing failed"):
        derive_key(b"pw", params=KdfParams(time_cost=1, memory_cost=1, parallelism=1))


def test_primitive_failure_still_wipes_password(fast_kdf):
    password = bytearray(b"secret")
    with patch("chunkseal.security.kdf.hash_secret_raw", side_effect=HashingError("boom")):
        with pytest.raises(KeyDerivationError) as excinfo:
            derive_key(password, params=fast_kdf)
    assert isinstance(excinfo.value.__cause__, HashingError)
    assert password == bytearray(6)


def test_kdf_params_to_dict():
    assert kdf_params_to_dict(KdfParams(time_cost=2, memory_cost=1024, parallelism=4)) == {
        "algo": "argon2id",
        "time": 2,
        "memory": 1024,
        "parallelism": 4,
        "key_len": 32,
    }
