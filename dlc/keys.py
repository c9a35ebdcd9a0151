# dlc/keys.py
"""
Oracle key material: one-time signing keys and public key derivation.

Storing keys is left to the caller. A one-time signing key (nonce) must be
used for exactly one signature and discarded afterwards.
"""

import secrets

from coincurve import PrivateKey

from dlc.curve import KEY_BYTES, validate_scalar
from dlc.errors import InvalidScalar


def generate_one_time_signing_key() -> bytes:
    """Draw 32 bytes from the OS CSPRNG.

    The bytes are not range-checked here; every consumer validates them and
    raises InvalidScalar for zero or out-of-range values.
    """
    return secrets.token_bytes(KEY_BYTES)


def public_key_from_private_key(private_key: bytes) -> bytes:
    """Return the 33-byte compressed encoding of private_key * G."""
    validate_scalar(private_key, "private key")
    return PrivateKey(bytes(private_key)).public_key.format(compressed=True)


def generate_nonce():
    """Return a fresh (k, R) pair of 32-byte nonce key and 33-byte R-point."""
    while True:
        k = generate_one_time_signing_key()
        try:
            return k, public_key_from_private_key(k)
        except InvalidScalar:
            continue
