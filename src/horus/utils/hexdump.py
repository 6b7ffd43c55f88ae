"""
Hexdump rendering for byte buffers, with optional terminal highlighting.
"""

from typing import Final, Iterator, Tuple
from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import HexdumpLexer

from .hex_utils import format_offset

BYTES_PER_LINE: Final[int] = 16


def dump_lines(data: bytes, width: int = BYTES_PER_LINE) -> Iterator[Tuple[int, bytes]]:
    """Yield (offset, chunk) pairs covering data, width bytes at a time."""

    if width < 1:
        raise ValueError("width must be at least 1")

    for start in range(0, len(data), width):
        yield start, bytes(data[start:start + width])


def format_line(offset: int, chunk: bytes, width: int = BYTES_PER_LINE) -> str:
    """
    Render one hexdump line in the canonical 'hexdump -C' layout.

    Args:
        offset: Offset of the first byte of chunk
        chunk: Up to width bytes
        width: Bytes per line, used to pad short final lines

    Returns:
        str: e.g. "00000000  48 6f 72 75 73  |Horus|"
    """

    hex_part = ' '.join(f"{b:02x}" for b in chunk)
    hex_part = hex_part.ljust(width * 3 - 1)
    ascii_str = ''.join(chr(b) if 32 <= b <= 126 else '.' for b in chunk)

    return f"{format_offset(offset)}  {hex_part}  |{ascii_str}|"


def hexdump(data: bytes, width: int = BYTES_PER_LINE) -> str:
    """Render data as a multi-line hexdump, ending with the total length."""

    lines = [format_line(offset, chunk, width) for offset, chunk in dump_lines(data, width)]
    lines.append(format_offset(len(data)))

    return '\n'.join(lines)


def highlight(dump: str) -> str:
    """Colour a rendered hexdump with ANSI escapes for terminal output."""

    return pygments_highlight(dump, HexdumpLexer(), TerminalFormatter())
