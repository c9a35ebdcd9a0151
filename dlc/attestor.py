# dlc/attestor.py
"""
DLC Oracle Attestor - Numeric Event Announcement & Attestation

A numeric outcome is split into NUM_DIGITS decimal digits. Every digit
position gets its own R-point at announcement time, and at attestation
time each digit d is signed with that position's nonce over
generate_numeric_message(d).

Nonce keys are returned to the caller. Persisting them, and deleting each
one after its single signature, is the caller's job.
"""

import logging
import os
from datetime import datetime, timezone

from dlc.errors import ArithmeticDegenerate, ValueOutOfRange
from dlc.keys import generate_nonce, public_key_from_private_key
from dlc.message import generate_numeric_message
from dlc.signing import compute_signature, compute_signature_pubkey, verify_signature

log = logging.getLogger("dlc-attestor")

NUM_DIGITS = int(os.environ.get("DLC_NUM_DIGITS", "5"))
DIGIT_BASE = 10


def event_id(pair, timestamp_str):
    return f"{pair}-{timestamp_str}"


def _utc_now():
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def outcome_digits(value, num_digits=NUM_DIGITS):
    """Split a non-negative integer into num_digits digits, most significant first."""
    if value < 0:
        raise ValueOutOfRange(f"Outcome {value} is negative")
    value_str = str(value).zfill(num_digits)
    if len(value_str) != num_digits:
        raise ValueOutOfRange(f"Outcome {value} does not fit in {num_digits} digits")
    return [int(d) for d in value_str]


def _digit_points(oracle_pubkey, r_point):
    return [
        compute_signature_pubkey(oracle_pubkey, r_point, generate_numeric_message(d))
        for d in range(DIGIT_BASE)
    ]


def _usable_nonce(oracle_pubkey, position):
    # An R-point is only published once every digit it may sign has a
    # well-defined signature point.
    while True:
        k, R = generate_nonce()
        try:
            _digit_points(oracle_pubkey, R)
        except ArithmeticDegenerate:
            log.warning(f"Degenerate nonce at digit {position}, redrawing")
            continue
        return k, R


def create_announcement(oracle_key, eid, num_digits=NUM_DIGITS):
    """Commit to one R-point per digit position.

    Returns (announcement, nonce_keys). The announcement is safe to publish;
    nonce_keys must stay secret and each one must sign exactly once.
    """
    if num_digits < 1:
        raise ValueError(f"num_digits must be positive, got {num_digits}")
    oracle_pubkey = public_key_from_private_key(oracle_key)

    nonce_keys = []
    r_points = []
    for i in range(num_digits):
        k, R = _usable_nonce(oracle_pubkey, i)
        nonce_keys.append(k)
        r_points.append(R.hex())

    announcement = {
        "event_id": eid,
        "oracle_pubkey": oracle_pubkey.hex(),
        "num_digits": num_digits,
        "r_points": r_points,
        "created_at": _utc_now(),
    }
    log.info(f"Announced: {eid} ({num_digits} R-points)")
    return announcement, nonce_keys


def create_attestation(oracle_key, announcement, nonce_keys, value):
    """Sign every digit of value with the nonces committed in announcement."""
    eid = announcement["event_id"]
    num_digits = announcement["num_digits"]
    r_points = announcement["r_points"]

    oracle_pubkey = public_key_from_private_key(oracle_key).hex()
    if oracle_pubkey != announcement["oracle_pubkey"]:
        raise ValueError(f"Oracle key does not match announcement {eid}")
    if len(nonce_keys) != num_digits:
        raise ValueError(f"Expected {num_digits} nonce keys for {eid}, got {len(nonce_keys)}")
    for i, k in enumerate(nonce_keys):
        if public_key_from_private_key(k).hex() != r_points[i]:
            raise ValueError(f"Nonce key {i} does not match announced R-point for {eid}")

    outcome = int(round(value))
    digits = outcome_digits(outcome, num_digits)

    s_values = []
    for i, digit in enumerate(digits):
        s = compute_signature(oracle_key, nonce_keys[i], generate_numeric_message(digit))
        s_values.append(s.hex())

    attestation = {
        "event_id": eid,
        "oracle_pubkey": oracle_pubkey,
        "outcome": outcome,
        "digits": digits,
        "s_values": s_values,
        "attested_at": _utc_now(),
    }
    log.info(f"Attested: {eid} -> {outcome} (digits: {digits})")
    return attestation


def verify_attestation(announcement, attestation):
    if attestation["event_id"] != announcement["event_id"]:
        return False
    if attestation["oracle_pubkey"] != announcement["oracle_pubkey"]:
        return False

    digits = attestation["digits"]
    s_values = attestation["s_values"]
    r_points = announcement["r_points"]
    if not (len(digits) == len(s_values) == len(r_points)):
        return False
    if not all(type(d) is int and 0 <= d < DIGIT_BASE for d in digits):
        return False
    if int("".join(str(d) for d in digits)) != attestation["outcome"]:
        return False

    # Announcement and attestation are untrusted input: anything that does
    # not decode is a failed verification.
    try:
        A = bytes.fromhex(announcement["oracle_pubkey"])
        for i, digit in enumerate(digits):
            R = bytes.fromhex(r_points[i])
            s = bytes.fromhex(s_values[i])
            if not verify_signature(A, R, generate_numeric_message(digit), s):
                return False
    except (TypeError, ValueError):
        return False
    return True


def outcome_points(announcement):
    """Signature points for every possible digit at every position.

    outcome_points(ann)[i][d] is the compressed point (hex) that the
    attestation's s-value for position i equals times G if digit i is d.
    """
    A = bytes.fromhex(announcement["oracle_pubkey"])
    return [
        [P.hex() for P in _digit_points(A, bytes.fromhex(r))]
        for r in announcement["r_points"]
    ]


if __name__ == "__main__":
    from coincurve import PrivateKey

    print("=== DLC Attestor Test ===")
    print()
    oracle_key = PrivateKey().secret
    eid = event_id("BTCUSD", _utc_now())
    print(f"Creating announcement for {eid}...")
    ann, nonces = create_announcement(oracle_key, eid)
    print(f"  R-points:  {len(ann['r_points'])} nonces")
    print(f"  Pubkey:    {ann['oracle_pubkey']}")

    test_price = 68867.00
    print()
    print(f"Attesting price ${test_price:,.0f}...")
    att = create_attestation(oracle_key, ann, nonces, test_price)
    print(f"  Outcome:   {att['outcome']:,}")
    print(f"  Digits:    {att['digits']}")
    print(f"  S-values:  {len(att['s_values'])}")

    print()
    print("Verifying attestation...")
    print(f"  Valid:     {verify_attestation(ann, att)}")
