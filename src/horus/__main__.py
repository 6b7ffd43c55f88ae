"""
Command line entry point: dump a binary file and decode values from it.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .core.buffer import ByteBuffer
from .core.errors import BinaryError
from .core.numeric import DEFAULT_BYTEORDER, NumericType, resolve_type
from .utils.hexdump import BYTES_PER_LINE, hexdump, highlight

logger = logging.getLogger(__name__)


def parse_value_spec(spec: str) -> Tuple[NumericType, int]:
    """Parse a 'TYPE@OFFSET' argument such as 'uint16@0x10'."""

    type_name, sep, offset = spec.partition('@')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected TYPE@OFFSET, got {spec!r}")

    try:
        return resolve_type(type_name), int(offset, 0)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="horus",
        description="Horus - Inspect and decode binary data"
    )
    parser.add_argument(
        "source",
        type=str,
        help="File to read, or a hex string with --hex"
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        help="Treat SOURCE as a hex string instead of a file path"
    )
    parser.add_argument(
        "--width",
        type=int,
        default=BYTES_PER_LINE,
        help="Bytes per hexdump line"
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Highlight the hexdump for a terminal"
    )
    parser.add_argument(
        "--no-dump",
        action="store_true",
        help="Only print decoded values"
    )
    parser.add_argument(
        "--get",
        dest="values",
        action="append",
        default=[],
        type=parse_value_spec,
        metavar="TYPE@OFFSET",
        help="Decode a number, e.g. uint32@4 or float64@0x10"
    )
    parser.add_argument(
        "--cstring",
        dest="cstrings",
        action="append",
        default=[],
        type=lambda value: int(value, 0),
        metavar="OFFSET",
        help="Decode a nul-terminated string"
    )
    parser.add_argument(
        "--byteorder",
        choices=("big", "little"),
        default=DEFAULT_BYTEORDER,
        help="Byte order for numeric values"
    )
    parser.add_argument(
        "--encoding",
        default="ascii",
        help="Text encoding for strings"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    args = parser.parse_args(argv)
    if args.width < 1:
        parser.error("--width must be at least 1")

    return args


def load_buffer(args: argparse.Namespace) -> Optional[ByteBuffer]:
    """Build the buffer described by the command line."""

    if args.hex:
        return ByteBuffer.from_hex(args.source)

    logger.debug("Reading %s", args.source)
    with open(args.source, 'rb') as f:
        return ByteBuffer(f.read())


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        buffer = load_buffer(args)
    except OSError as e:
        print(f"Error loading {args.source}: {e}", file=sys.stderr)
        return 1

    if buffer is None:
        print(f"Error: {args.source!r} is not a valid hex string", file=sys.stderr)
        return 1

    if not args.no_dump:
        dump = hexdump(buffer.to_bytes(), args.width)
        print(highlight(dump) if args.color else dump)

    status = 0
    for numeric_type, offset in args.values:
        try:
            value = buffer.get_value(numeric_type, offset, args.byteorder)
        except BinaryError as e:
            print(f"Error: {numeric_type.name}@{offset}: {e}", file=sys.stderr)
            status = 1
            continue
        print(f"{numeric_type.name}@{offset} = {value}")

    for offset in args.cstrings:
        try:
            text = buffer.get_cstring(offset, args.encoding)
        except BinaryError as e:
            print(f"Error: cstring@{offset}: {e}", file=sys.stderr)
            status = 1
            continue
        print(f"cstring@{offset} = {text!r}")

    return status


if __name__ == "__main__":
    sys.exit(main())
