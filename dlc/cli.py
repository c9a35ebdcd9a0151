# dlc/cli.py
"""
DLC Oracle command-line tool

Usage:
  dlc-oracle keygen
  dlc-oracle pubkey <private_key_hex>
  dlc-oracle message <value>
  dlc-oracle sign <private_key_hex> <nonce_key_hex> <value>
  dlc-oracle sigpoint <oracle_pubkey_hex> <r_point_hex> <value>
  dlc-oracle verify <oracle_pubkey_hex> <r_point_hex> <value> <signature_hex>

Values accept decimal or 0x-prefixed hex. Nothing is written to disk.
"""

import argparse
import logging
import os
import sys

from dlc.errors import OracleError
from dlc.keys import generate_nonce, public_key_from_private_key
from dlc.message import generate_numeric_message
from dlc.signing import compute_signature, compute_signature_pubkey, verify_signature

log = logging.getLogger("dlc-cli")


def log_level():
    """DLC_LOG_LEVEL from the environment, INFO when unset or unknown."""
    level = os.environ.get("DLC_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def _hex_bytes(value):
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}")


def _int_value(value):
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")


def cmd_keygen(args):
    k, R = generate_nonce()
    print(f"private_key: {k.hex()}")
    print(f"public_key:  {R.hex()}")
    return 0


def cmd_pubkey(args):
    print(public_key_from_private_key(args.private_key).hex())
    return 0


def cmd_message(args):
    print(generate_numeric_message(args.value).hex())
    return 0


def cmd_sign(args):
    msg = generate_numeric_message(args.value)
    print(compute_signature(args.private_key, args.nonce_key, msg).hex())
    return 0


def cmd_sigpoint(args):
    msg = generate_numeric_message(args.value)
    print(compute_signature_pubkey(args.oracle_pubkey, args.r_point, msg).hex())
    return 0


def cmd_verify(args):
    msg = generate_numeric_message(args.value)
    valid = verify_signature(args.oracle_pubkey, args.r_point, msg, args.signature)
    print(f"valid: {valid}")
    return 0 if valid else 1


def build_parser():
    parser = argparse.ArgumentParser(prog="dlc-oracle", description="DLC oracle signing tool")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("keygen", help="Generate a key pair (oracle key or one-time nonce)")
    p.set_defaults(func=cmd_keygen)

    p = sub.add_parser("pubkey", help="Derive the compressed public key")
    p.add_argument("private_key", type=_hex_bytes)
    p.set_defaults(func=cmd_pubkey)

    p = sub.add_parser("message", help="Encode a numeric outcome as a 32-byte message")
    p.add_argument("value", type=_int_value)
    p.set_defaults(func=cmd_message)

    p = sub.add_parser("sign", help="Sign a numeric outcome (the nonce key must never be reused)")
    p.add_argument("private_key", type=_hex_bytes)
    p.add_argument("nonce_key", type=_hex_bytes)
    p.add_argument("value", type=_int_value)
    p.set_defaults(func=cmd_sign)

    p = sub.add_parser("sigpoint", help="Compute the signature point for an outcome")
    p.add_argument("oracle_pubkey", type=_hex_bytes)
    p.add_argument("r_point", type=_hex_bytes)
    p.add_argument("value", type=_int_value)
    p.set_defaults(func=cmd_sigpoint)

    p = sub.add_parser("verify", help="Verify an outcome signature")
    p.add_argument("oracle_pubkey", type=_hex_bytes)
    p.add_argument("r_point", type=_hex_bytes)
    p.add_argument("value", type=_int_value)
    p.add_argument("signature", type=_hex_bytes)
    p.set_defaults(func=cmd_verify)

    return parser


def main(argv=None):
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except OracleError as e:
        log.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
