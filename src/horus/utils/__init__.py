"""
Utility package for hex text and hexdump rendering.
"""

from .hex_utils import (
    is_hex_string,
    parse_hex_string,
    hex_encode,
    format_offset,
    find_pattern
)
from .hexdump import dump_lines, format_line, hexdump, highlight

__all__ = [
    'is_hex_string',
    'parse_hex_string',
    'hex_encode',
    'format_offset',
    'find_pattern',
    'dump_lines',
    'format_line',
    'hexdump',
    'highlight'
]
