# dlc/curve.py
"""
secp256k1 domain parameters and point helpers.

Point arithmetic runs on coincurve (libsecp256k1). The domain parameters
and the explicit on-curve check come from the ecdsa curve definition so
that decoded keys are checked against an independent copy of the curve
equation.
"""

import collections

from coincurve import PublicKey
from ecdsa import SECP256k1

from dlc.errors import InvalidPoint, InvalidScalar

EllipticCurve = collections.namedtuple("EllipticCurve", "name p n G")

curve = EllipticCurve(
    "secp256k1",
    # Field characteristic.
    p=int(SECP256k1.curve.p()),
    # Subgroup order.
    n=int(SECP256k1.order),
    # Base point.
    G=(int(SECP256k1.generator.x()), int(SECP256k1.generator.y())),
)

FIELD_PRIME = curve.p
CURVE_ORDER = curve.n
KEY_BYTES = 32
COMPRESSED_KEY_BYTES = 33


def euclidean_mod(a: int, m: int) -> int:
    """Return the representative of a mod m in [0, m), whatever the sign of a."""
    if m <= 0:
        raise ValueError(f"Modulus must be positive, got {m}")
    # Python floors integer division, so the result already takes the sign of m.
    return a % m


def int_from_bytes(b: bytes) -> int:
    return int.from_bytes(b, "big")


def bytes_from_int(x: int) -> bytes:
    return x.to_bytes(KEY_BYTES, "big")


def validate_scalar(scalar: bytes, name: str = "scalar") -> int:
    """Parse a 32-byte big-endian private scalar and check 1 <= s < n."""
    if not isinstance(scalar, (bytes, bytearray)) or len(scalar) != KEY_BYTES:
        raise InvalidScalar(f"The {name} must be a {KEY_BYTES}-byte array.")
    s = int_from_bytes(scalar)
    if not (1 <= s < CURVE_ORDER):
        raise InvalidScalar(f"The {name} must be an integer in the range 1..n-1.")
    return s


def point_xy(key: PublicKey):
    raw = key.format(compressed=False)
    return int_from_bytes(raw[1:33]), int_from_bytes(raw[33:65])


def point_from_xy(x: int, y: int) -> PublicKey:
    return PublicKey(b"\x04" + bytes_from_int(x) + bytes_from_int(y))


def decode_point(data: bytes, name: str = "public key") -> PublicKey:
    """Decode a 33-byte compressed key and make sure it lies on the curve."""
    if not isinstance(data, (bytes, bytearray)) or len(data) != COMPRESSED_KEY_BYTES:
        raise InvalidPoint(f"The {name} must be a {COMPRESSED_KEY_BYTES}-byte compressed point.")
    if data[0] not in (0x02, 0x03):
        raise InvalidPoint(f"The {name} has an invalid prefix byte 0x{data[0]:02x}.")
    try:
        key = PublicKey(bytes(data))
    except ValueError as e:
        raise InvalidPoint(f"The {name} could not be decoded: {e}") from e

    x, y = point_xy(key)
    if not SECP256k1.curve.contains_point(x, y):
        raise InvalidPoint(f"The {name} is not on the secp256k1 curve.")
    return key


def negate_point(key: PublicKey) -> PublicKey:
    """Return -P by reflecting the y-coordinate modulo the field prime."""
    x, y = point_xy(key)
    return point_from_xy(x, euclidean_mod(-y, FIELD_PRIME))
