# dlc/signing.py
"""
Oracle Schnorr signing and signature point computation.

The oracle publishes its public key A = a*G and, per event, an R-point
R = k*G. Once the outcome is known it publishes only the scalar

    s = k - e*a  (mod n),   e = SHA256(message || x(R))

Anyone holding A, R and a candidate message can compute s*G = R - e*A in
advance, which is what lets contract parties lock payouts to an outcome
before the oracle has signed anything.

SECURITY: a nonce key k must sign exactly one message. Two signatures made
with the same k on different messages reveal the oracle private key:
    a = (s2 - s1) / (e1 - e2)  (mod n)
Nothing here tracks nonce use; callers must mark a nonce spent (durably)
before or together with signing.
"""

import hashlib

from coincurve import PrivateKey, PublicKey

from dlc.curve import (
    COMPRESSED_KEY_BYTES,
    CURVE_ORDER,
    KEY_BYTES,
    bytes_from_int,
    decode_point,
    euclidean_mod,
    int_from_bytes,
    negate_point,
    validate_scalar,
)
from dlc.errors import ArithmeticDegenerate, InvalidPoint
from dlc.message import check_message


def compute_challenge(message: bytes, nonce_public_key: bytes) -> int:
    """e = SHA256(message || x(R)) mod n, for a compressed R-point."""
    if (not isinstance(nonce_public_key, (bytes, bytearray))
            or len(nonce_public_key) != COMPRESSED_KEY_BYTES
            or nonce_public_key[0] not in (0x02, 0x03)):
        raise InvalidPoint(f"The nonce public key must be a {COMPRESSED_KEY_BYTES}-byte compressed point.")
    rx = nonce_public_key[1:1 + KEY_BYTES]
    digest = hashlib.sha256(message + rx).digest()
    return euclidean_mod(int_from_bytes(digest), CURVE_ORDER)


def compute_signature(private_key: bytes, nonce_key: bytes, message: bytes) -> bytes:
    """Sign a 32-byte message with the oracle key and a one-time nonce key.

    Returns the 32-byte scalar s. Deterministic for fixed inputs.
    """
    a = validate_scalar(private_key, "private key")
    k = validate_scalar(nonce_key, "nonce key")
    message = check_message(message)

    r_point = PrivateKey(bytes(nonce_key)).public_key.format(compressed=True)
    e = compute_challenge(message, r_point)
    if e == 0:
        raise ArithmeticDegenerate("Challenge hash reduced to zero.")

    s = euclidean_mod(k - e * a, CURVE_ORDER)
    if s == 0:
        raise ArithmeticDegenerate("Signature scalar is zero.")
    return bytes_from_int(s)


def compute_signature_pubkey(oracle_public_key: bytes, nonce_public_key: bytes, message: bytes) -> bytes:
    """Return the compressed point s*G = R - e*A without knowing s."""
    A = decode_point(oracle_public_key, "oracle public key")
    R = decode_point(nonce_public_key, "nonce public key")
    message = check_message(message)

    e = compute_challenge(message, R.format(compressed=True))
    if e == 0:
        raise ArithmeticDegenerate("Challenge hash reduced to zero.")

    eA = A.multiply(bytes_from_int(e))
    try:
        P = PublicKey.combine_keys([R, negate_point(eA)])
    except ValueError as ex:
        # R == e*A, only reachable when the signature scalar would be zero.
        raise ArithmeticDegenerate("Signature point is the point at infinity.") from ex
    return P.format(compressed=True)


def verify_signature(oracle_public_key: bytes, nonce_public_key: bytes, message: bytes, signature: bytes) -> bool:
    """Check s*G against the precomputed signature point."""
    if not isinstance(signature, (bytes, bytearray)) or len(signature) != KEY_BYTES:
        return False
    s = int_from_bytes(signature)
    if not (1 <= s < CURVE_ORDER):
        return False

    try:
        expected = compute_signature_pubkey(oracle_public_key, nonce_public_key, message)
    except ArithmeticDegenerate:
        return False

    sG = PrivateKey(bytes(signature)).public_key
    return sG.format(compressed=True) == expected
