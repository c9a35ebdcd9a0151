import hashlib

import pytest

from dlc.keys import public_key_from_private_key


def _key(label):
    return hashlib.sha256(label.encode()).digest()


@pytest.fixture
def oracle_key():
    return _key("oracle")


@pytest.fixture
def nonce_key():
    return _key("nonce")


@pytest.fixture
def oracle_pubkey(oracle_key):
    return public_key_from_private_key(oracle_key)


@pytest.fixture
def r_point(nonce_key):
    return public_key_from_private_key(nonce_key)
