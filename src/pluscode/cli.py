"""
Command-line interface for pluscode.

Provides commands for encoding, decoding, validating, shortening and
recovering Open Location Codes.
"""

import argparse
import logging
import sys
from typing import Optional

from .calculator import STRATEGIES, STRATEGY_AUTO, CalculatorConfig, CodeCalculator, create_calculator
from .errors import PlusCodeError
from .grammar import CODE_PRECISION_NORMAL, is_full_code, is_short_code
from .olc import OpenLocationCode


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pluscode",
        description="Encode and decode Open Location Codes",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=STRATEGIES,
        default=STRATEGY_AUTO,
        help="Calculator arithmetic (default: auto)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode a latitude/longitude into a code",
    )
    encode_parser.add_argument("latitude", type=float, help="Latitude in degrees")
    encode_parser.add_argument("longitude", type=float, help="Longitude in degrees")
    encode_parser.add_argument(
        "-l", "--length",
        type=int,
        default=CODE_PRECISION_NORMAL,
        help=f"Number of digits (default: {CODE_PRECISION_NORMAL})",
    )

    # Decode command
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a full code into its bounding box",
    )
    decode_parser.add_argument("code", type=str, help="Full code to decode")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check whether codes are valid, full or short",
    )
    validate_parser.add_argument("codes", nargs="+", help="Codes to check")

    # Shorten command
    shorten_parser = subparsers.add_parser(
        "shorten",
        help="Shorten a full code relative to a reference location",
    )
    shorten_parser.add_argument("code", type=str, help="Full code to shorten")
    shorten_parser.add_argument("latitude", type=float, help="Reference latitude")
    shorten_parser.add_argument("longitude", type=float, help="Reference longitude")

    # Recover command
    recover_parser = subparsers.add_parser(
        "recover",
        help="Recover a full code from a short code and a reference location",
    )
    recover_parser.add_argument("code", type=str, help="Short code to recover")
    recover_parser.add_argument("latitude", type=float, help="Reference latitude")
    recover_parser.add_argument("longitude", type=float, help="Reference longitude")

    return parser


def cmd_encode(args: argparse.Namespace, calculator: CodeCalculator) -> int:
    """Handle the encode command."""
    olc = OpenLocationCode.from_coordinates(
        args.latitude, args.longitude, args.length, calculator=calculator
    )
    print(olc.code)
    return 0


def cmd_decode(args: argparse.Namespace, calculator: CodeCalculator) -> int:
    """Handle the decode command."""
    area = OpenLocationCode.from_code(args.code).decode(calculator)

    print(f"Code area for {args.code.upper()}:")
    print(f"  South latitude: {area.south_latitude}")
    print(f"  West longitude: {area.west_longitude}")
    print(f"  North latitude: {area.north_latitude}")
    print(f"  East longitude: {area.east_longitude}")
    print(f"  Center: {area.center_latitude}, {area.center_longitude}")
    print(f"  Length: {area.length}")

    return 0


def cmd_validate(args: argparse.Namespace, calculator: CodeCalculator) -> int:
    """Handle the validate command."""
    status = 0
    for code in args.codes:
        if is_full_code(code):
            kind = "full"
        elif is_short_code(code):
            kind = "short"
        else:
            kind = "invalid"
            status = 1
        print(f"{code}: {kind}")
    return status


def cmd_shorten(args: argparse.Namespace, calculator: CodeCalculator) -> int:
    """Handle the shorten command."""
    olc = OpenLocationCode.from_code(args.code)
    print(olc.shorten(args.latitude, args.longitude, calculator).code)
    return 0


def cmd_recover(args: argparse.Namespace, calculator: CodeCalculator) -> int:
    """Handle the recover command."""
    olc = OpenLocationCode.from_code(args.code)
    print(olc.recover(args.latitude, args.longitude, calculator).code)
    return 0


COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "validate": cmd_validate,
    "shorten": cmd_shorten,
    "recover": cmd_recover,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        calculator = create_calculator(CalculatorConfig(strategy=args.strategy))
        return COMMANDS[args.command](args, calculator)
    except PlusCodeError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
