# dlc/__init__.py
"""
DLC oracle signing core for secp256k1.

The oracle signs numeric outcomes with a one-time nonce per message.
Contract parties compute each outcome's signature point from public data
alone, ahead of the attestation.
"""

from dlc.curve import CURVE_ORDER, FIELD_PRIME, euclidean_mod
from dlc.errors import (
    ArithmeticDegenerate,
    InvalidPoint,
    InvalidScalar,
    OracleError,
    ValueOutOfRange,
)
from dlc.keys import generate_nonce, generate_one_time_signing_key, public_key_from_private_key
from dlc.message import generate_numeric_message
from dlc.signing import compute_challenge, compute_signature, compute_signature_pubkey, verify_signature

__version__ = "1.0.0"
