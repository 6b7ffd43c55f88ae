"""
Utility functions for hexadecimal text and byte searches.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset('0123456789ABCDEFabcdef')


def strip_hex_prefix(hex_str: str) -> str:
    """Remove a leading '0x' or '0X' from a hex string."""

    if hex_str[:2] in ('0x', '0X'):
        return hex_str[2:]

    return hex_str


def is_hex_string(hex_str: str) -> bool:
    """
    Check whether a string is a valid hexadecimal number.

    An optional '0x'/'0X' prefix is allowed; what follows must be one or
    more hex digits. Whitespace and separators are not accepted.

    Args:
        hex_str (str): String to check

    Returns:
        bool: True if the string is valid hexadecimal
    """

    digits = strip_hex_prefix(hex_str)

    return bool(digits) and all(c in HEX_DIGITS for c in digits)


def parse_hex_string(hex_str: str) -> Optional[bytes]:
    """
    Parse a hex string into bytes.

    Odd-length input is padded on the left with a single zero nibble, so
    "FFF" parses as b'\\x0f\\xff'.

    Args:
        hex_str (str): String of hex digits (e.g. "0x00FF")

    Returns:
        bytes: Parsed bytes or None if invalid
    """

    if not is_hex_string(hex_str):
        logger.warning("'%s' is not a valid hexadecimal string", hex_str)
        return None

    digits = strip_hex_prefix(hex_str)
    if len(digits) % 2:
        digits = '0' + digits

    return bytes.fromhex(digits)


def hex_encode(data: bytes) -> str:
    """Encode bytes as a lowercase hex string without separators."""

    return bytes(data).hex()


def format_offset(offset: int, width: int = 8) -> str:
    """
    Format a byte offset as a hex string.

    Args:
        offset (int): Byte offset to format
        width (int): Number of hex digits to use

    Returns:
        str: Formatted hex string
    """

    return f"{offset:0{width}x}"


def find_pattern(data: bytes, pattern: bytes, start: int = 0,
                 end: Optional[int] = None) -> Optional[int]:
    """
    Find the next occurrence of a byte pattern.

    Args:
        data (bytes): Data to search in
        pattern (bytes): Pattern to search for
        start (int): Starting position for search
        end (int): Position to stop searching at, defaults to the end of data

    Returns:
        int: Position of pattern or None if not found
    """

    if end is None:
        end = len(data)

    try:
        return data.index(pattern, start, end)
    except ValueError:
        pass

    return None
