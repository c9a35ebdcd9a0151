# dlc/message.py
"""
Fixed-width encoding of numeric outcomes into 32-byte signable messages.
"""

from dlc.curve import KEY_BYTES
from dlc.errors import ValueOutOfRange

MESSAGE_BYTES = KEY_BYTES
MESSAGE_HEX_CHARS = 2 * MESSAGE_BYTES


def generate_numeric_message(value: int) -> bytes:
    """Encode a non-negative integer as 32 big-endian, zero-padded bytes."""
    if not isinstance(value, int):
        raise ValueOutOfRange(f"Value {value!r} is not an integer")
    if value < 0:
        raise ValueOutOfRange(f"Value {value} is negative")
    value_hex = format(value, "x").zfill(MESSAGE_HEX_CHARS)
    if len(value_hex) != MESSAGE_HEX_CHARS:
        raise ValueOutOfRange(f"Value {value} does not fit in {MESSAGE_BYTES} bytes")
    return bytes.fromhex(value_hex)


def check_message(message: bytes) -> bytes:
    if not isinstance(message, (bytes, bytearray)) or len(message) != MESSAGE_BYTES:
        raise ValueOutOfRange(f"The message must be a {MESSAGE_BYTES}-byte array.")
    return bytes(message)
