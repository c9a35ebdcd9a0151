# dlc/errors.py
"""
Errors raised by the oracle signing core.

All of them are ValueError subclasses, so callers that already guard
oracle input with `except ValueError` keep working.
"""


class OracleError(ValueError):
    """Base class for signing core failures."""


class InvalidScalar(OracleError):
    """Scalar is malformed, zero, or not below the curve order."""


class InvalidPoint(OracleError):
    """Public key is not a valid compressed secp256k1 point."""


class ValueOutOfRange(OracleError):
    """Value does not fit the 32-byte message encoding."""


class ArithmeticDegenerate(OracleError):
    """Challenge or signature scalar came out as zero.

    Redraw the nonce and sign again.
    """
