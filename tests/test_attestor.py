import logging

import pytest
from coincurve import PrivateKey

import dlc.attestor
from dlc.attestor import (
    create_announcement,
    create_attestation,
    event_id,
    outcome_digits,
    outcome_points,
    verify_attestation,
)
from dlc.errors import ArithmeticDegenerate, ValueOutOfRange

NUM_DIGITS = 3


@pytest.fixture
def announced(oracle_key):
    return create_announcement(oracle_key, event_id("BTCUSD", "2026-10-18T12:00:00Z"), NUM_DIGITS)


def test_event_id():
    assert event_id("BTCUSD", "2026-10-18T12:00:00Z") == "BTCUSD-2026-10-18T12:00:00Z"


def test_outcome_digits():
    assert outcome_digits(7, 3) == [0, 0, 7]
    assert outcome_digits(68867, 5) == [6, 8, 8, 6, 7]
    assert outcome_digits(0, 2) == [0, 0]


@pytest.mark.parametrize("value", [-1, 1000])
def test_outcome_digits_out_of_range(value):
    with pytest.raises(ValueOutOfRange):
        outcome_digits(value, 3)


def test_announcement_shape(announced, oracle_pubkey):
    ann, nonce_keys = announced
    assert ann["event_id"] == "BTCUSD-2026-10-18T12:00:00Z"
    assert ann["oracle_pubkey"] == oracle_pubkey.hex()
    assert ann["num_digits"] == NUM_DIGITS
    assert len(ann["r_points"]) == NUM_DIGITS
    assert len(set(ann["r_points"])) == NUM_DIGITS
    assert len(nonce_keys) == NUM_DIGITS
    for k, R in zip(nonce_keys, ann["r_points"]):
        assert PrivateKey(k).public_key.format().hex() == R
        assert k.hex() not in str(ann)


def test_attest_and_verify(oracle_key, announced):
    ann, nonce_keys = announced
    att = create_attestation(oracle_key, ann, nonce_keys, 412.4)
    assert att["outcome"] == 412
    assert att["digits"] == [4, 1, 2]
    assert len(att["s_values"]) == NUM_DIGITS
    assert verify_attestation(ann, att)


def test_outcome_points_match_attestation(oracle_key, announced):
    ann, nonce_keys = announced
    points = outcome_points(ann)
    assert len(points) == NUM_DIGITS
    assert all(len(row) == 10 for row in points)

    att = create_attestation(oracle_key, ann, nonce_keys, 905)
    for i, digit in enumerate(att["digits"]):
        sG = PrivateKey(bytes.fromhex(att["s_values"][i])).public_key.format().hex()
        assert points[i][digit] == sG
        assert all(points[i][d] != sG for d in range(10) if d != digit)


def test_verify_rejects_tampering(oracle_key, announced):
    ann, nonce_keys = announced
    att = create_attestation(oracle_key, ann, nonce_keys, 123)

    forged = dict(att, digits=[1, 2, 4], outcome=124)
    assert not verify_attestation(ann, forged)

    inconsistent = dict(att, outcome=999)
    assert not verify_attestation(ann, inconsistent)

    swapped = dict(att, s_values=list(reversed(att["s_values"])))
    assert not verify_attestation(ann, swapped)

    other_event = dict(att, event_id="ETHUSD-2026-10-18T12:00:00Z")
    assert not verify_attestation(ann, other_event)


def test_attestation_rejects_outcome_too_large(oracle_key, announced):
    ann, nonce_keys = announced
    with pytest.raises(ValueOutOfRange):
        create_attestation(oracle_key, ann, nonce_keys, 1000)


def test_attestation_rejects_mismatched_keys(oracle_key, announced):
    ann, nonce_keys = announced
    with pytest.raises(ValueError, match="nonce keys"):
        create_attestation(oracle_key, ann, nonce_keys[:-1], 1)
    with pytest.raises(ValueError, match="R-point"):
        create_attestation(oracle_key, ann, list(reversed(nonce_keys)), 1)
    with pytest.raises(ValueError, match="Oracle key"):
        create_attestation(PrivateKey().secret, ann, nonce_keys, 1)


def test_announcement_redraws_degenerate_nonce(monkeypatch, caplog, oracle_key):
    real = dlc.attestor.compute_signature_pubkey
    calls = {"n": 0}

    def flaky(A, R, msg):
        calls["n"] += 1
        if calls["n"] == 1:
            raise ArithmeticDegenerate("forced")
        return real(A, R, msg)

    monkeypatch.setattr(dlc.attestor, "compute_signature_pubkey", flaky)
    with caplog.at_level(logging.WARNING, logger="dlc-attestor"):
        ann, nonce_keys = create_announcement(oracle_key, "TEST-1", 1)

    assert "redrawing" in caplog.text
    assert len(nonce_keys) == 1
    assert PrivateKey(nonce_keys[0]).public_key.format().hex() == ann["r_points"][0]


def test_announcement_requires_digits(oracle_key):
    with pytest.raises(ValueError):
        create_announcement(oracle_key, "TEST-0", 0)


@pytest.mark.parametrize("field, index, bad", [
    ("s_values", 0, "zz"),
    ("s_values", 1, "00ff"),
    ("s_values", 2, None),
    ("digits", 0, "x"),
    ("digits", 1, 10),
    ("digits", 2, True),
])
def test_verify_rejects_malformed_attestation(oracle_key, announced, field, index, bad):
    ann, nonce_keys = announced
    att = create_attestation(oracle_key, ann, nonce_keys, 123)
    values = list(att[field])
    values[index] = bad
    assert not verify_attestation(ann, dict(att, **{field: values}))


@pytest.mark.parametrize("bad_point", [
    "zz",
    "02eefdea4cdb677750a420fee807eacf21eb9898ae79b9768766e4faa04a2d4a34",
    "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f817",
])
def test_verify_rejects_malformed_r_point(oracle_key, announced, bad_point):
    ann, nonce_keys = announced
    att = create_attestation(oracle_key, ann, nonce_keys, 123)
    r_points = list(ann["r_points"])
    r_points[0] = bad_point
    assert not verify_attestation(dict(ann, r_points=r_points), att)
