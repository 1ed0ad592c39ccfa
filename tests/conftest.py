"""Shared fixtures: cheap Argon2 costs and fixed stream keys."""

import pytest

from chunkseal.security.kdf import KdfParams


@pytest.fixture
def fast_kdf():
    # Argon2id minimum costs; the real defaults are exercised in test_security_kdf.py
    return KdfParams(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def key():
    return bytearray(range(32))


@pytest.fixture
def other_key():
    return bytearray(range(1, 33))
