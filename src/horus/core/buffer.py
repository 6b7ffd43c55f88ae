"""
Buffer module for bounds-checked parsing of binary data.
"""

import logging
from typing import Any, Iterable, Iterator, Optional, Tuple, Union

from .errors import (
    FailedConversionError,
    NonNulTerminatedStringError,
    OutOfBoundsError,
)
from .numeric import (
    DEFAULT_BYTEORDER,
    FLOAT16,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    NumericType,
    check_byteorder,
    decode_value,
    resolve_type,
)
from ..utils.hex_utils import find_pattern, hex_encode, parse_hex_string
from ..utils.hexdump import BYTES_PER_LINE, hexdump

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = 'ascii'
BYTE_SIZE = 8

BytesLike = Union['ByteBuffer', bytes, bytearray, memoryview, Iterable[int]]
Number = Union[int, float]


def to_byte_content(content: Any) -> bytes:
    """Copy bytes-like content, a ByteBuffer or an iterable of ints into bytes."""

    if isinstance(content, ByteBuffer):
        return content.to_bytes()

    if isinstance(content, (int, str)):
        raise TypeError(f"Cannot build bytes from {type(content).__name__}")

    return bytes(content)


class ByteBuffer:
    """
    Owned, mutable sequence of bytes with bounds-checked typed reads.

    Indexing and slicing treat an out-of-range index as a programming error
    and raise IndexError. The decode methods (bits, nibbles, numbers and
    strings) are meant for untrusted input and raise BinaryError subclasses
    instead.

    Example usage:
    buffer = ByteBuffer([0x48, 0x6F, 0x72, 0x75, 0x73, 0x00])
    buffer.get_cstring(0)       # 'Horus'
    buffer.get_uint16(0)        # 0x486F
    buffer.bit(0)               # 0

    The get_uint8 ... get_float64 helpers are get_value() with the type
    fixed by the method name.
    """

    def __init__(self, data: BytesLike = b'') -> None:
        self._data = bytearray(to_byte_content(data))

    @classmethod
    def from_bytes(cls, data: BytesLike) -> 'ByteBuffer':
        """Create a buffer holding a copy of data."""

        return cls(data)

    @classmethod
    def from_int(cls, value: int, size: int = 8, byteorder: str = DEFAULT_BYTEORDER,
                 signed: bool = False) -> 'ByteBuffer':
        """
        Create a buffer holding the fixed-width encoding of an integer.

        Args:
            value: Integer to encode
            size: Width of the integer in bytes
            byteorder: 'big' (default) or 'little'
            signed: Whether to use two's complement for negative values

        Returns:
            ByteBuffer: Buffer of exactly size bytes

        Raises:
            OverflowError: If value does not fit in size bytes
        """

        if not isinstance(value, int):
            raise TypeError(f"Expected an integer, got {type(value).__name__}")

        return cls(value.to_bytes(size, check_byteorder(byteorder), signed=signed))

    @classmethod
    def from_hex(cls, hex_str: str) -> Optional['ByteBuffer']:
        """
        Create a buffer from a hexadecimal string.

        Accepts an optional '0x'/'0X' prefix and left-pads odd-length input
        with a zero nibble.

        Returns:
            ByteBuffer: Parsed buffer or None if hex_str is not valid hex
        """

        data = parse_hex_string(hex_str)
        if data is None:
            return None

        return cls(data)

    @property
    def count(self) -> int:
        """Number of bytes in the buffer."""

        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(bytes(self._data))

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Buffer indices must be integers, not {type(index).__name__}")

        if not 0 <= index < len(self._data):
            raise IndexError(f"Index {index} out of bounds for buffer of {len(self._data)} bytes")

    def _check_range(self, lower: int, upper: int) -> None:
        if not 0 <= lower <= upper <= len(self._data):
            raise IndexError(
                f"Range [{lower}, {upper}) out of bounds for buffer of {len(self._data)} bytes"
            )

    def _slice_bounds(self, key: slice) -> Tuple[int, int]:
        if key.step not in (None, 1):
            raise ValueError("Buffer slices do not support a step")

        lower = 0 if key.start is None else key.start
        upper = len(self._data) if key.stop is None else key.stop
        self._check_range(lower, upper)

        return lower, upper

    def __getitem__(self, key: Union[int, slice]) -> Union[int, 'ByteBuffer']:
        if isinstance(key, slice):
            return self.get_range(*self._slice_bounds(key))

        self._check_index(key)
        return self._data[key]

    def __setitem__(self, key: Union[int, slice], value: Any) -> None:
        if isinstance(key, slice):
            self.set_range(*self._slice_bounds(key), value)
            return

        self._check_index(key)
        if not 0 <= value <= 255:
            raise ValueError("Byte value must be between 0 and 255")

        self._data[key] = value

    def get_range(self, lower: int, upper: int) -> 'ByteBuffer':
        """Get an independent copy of the bytes in [lower, upper)."""

        self._check_range(lower, upper)
        return ByteBuffer(self._data[lower:upper])

    def get_range_closed(self, lower: int, upper: int) -> 'ByteBuffer':
        """Get an independent copy of the bytes in [lower, upper]."""

        return self.get_range(lower, upper + 1)

    def set_range(self, lower: int, upper: int, content: BytesLike) -> None:
        """
        Replace the bytes in [lower, upper) with content.

        The buffer grows or shrinks when content is not upper - lower bytes long.
        """

        self._check_range(lower, upper)
        new_data = to_byte_content(content)

        if len(new_data) != upper - lower:
            logger.debug("Resizing buffer from %d to %d bytes",
                         len(self._data), len(self._data) - (upper - lower) + len(new_data))

        self._data[lower:upper] = new_data

    def set_range_closed(self, lower: int, upper: int, content: BytesLike) -> None:
        """Replace the bytes in [lower, upper] with content."""

        self.set_range(lower, upper + 1, content)

    replace_subrange = set_range

    def _locate_bit(self, position: int, little_endian: bool) -> Tuple[int, int]:
        """Map a bit position to its (byte index, bit shift) pair."""

        if little_endian:
            byte_pos = len(self._data) - (position // BYTE_SIZE) - 1
            bit_pos = position % BYTE_SIZE
        else:
            byte_pos = position // BYTE_SIZE
            bit_pos = 7 - (position % BYTE_SIZE)

        if position < 0 or not 0 <= byte_pos < len(self._data):
            raise OutOfBoundsError(f"Bit {position} out of bounds")

        return byte_pos, bit_pos

    def bit(self, position: int, little_endian: bool = True) -> int:
        """
        Get the bit at a given position.

        In little endian mode position 0 is the least significant bit of the
        last byte, as if the whole buffer were one big-endian number. In big
        endian mode position 0 is the most significant bit of the first byte.

        Args:
            position: Bit index
            little_endian: Bit numbering direction

        Returns:
            int: 0 or 1

        Raises:
            OutOfBoundsError: If position lies outside the buffer
        """

        byte_pos, bit_pos = self._locate_bit(position, little_endian)

        return (self._data[byte_pos] >> bit_pos) & 0x01

    def set_bit(self, position: int, value: bool, little_endian: bool = True) -> None:
        """Set or clear the bit at position, addressed the same way as bit()."""

        byte_pos, bit_pos = self._locate_bit(position, little_endian)
        mask = 1 << bit_pos

        if value:
            self._data[byte_pos] |= mask
        else:
            self._data[byte_pos] &= ~mask & 0xFF

    def nibble(self, position: int) -> int:
        """
        Get the 4-bit nibble at position.

        Even positions return the high nibble of byte position // 2, odd
        positions the low nibble.

        Raises:
            OutOfBoundsError: If position lies outside the buffer
        """

        byte_pos = position // 2
        if position < 0 or byte_pos >= len(self._data):
            raise OutOfBoundsError(f"Nibble {position} out of bounds")

        byte = self._data[byte_pos]
        if position % 2 == 0:
            return byte >> 4

        return byte & 0x0F

    def _check_span(self, start: int, length: int) -> int:
        end = start + length
        if start < 0 or length < 0 or end > len(self._data):
            raise OutOfBoundsError(
                f"Span of {length} bytes at {start} exceeds buffer of {len(self._data)} bytes"
            )

        return end

    def scan_value(self, value_type: Union[str, NumericType], start: int, length: int,
                   byteorder: str = DEFAULT_BYTEORDER) -> Number:
        """
        Decode length bytes starting at start as a number.

        Args:
            value_type: Numeric type or its name, e.g. "uint32" or "float64"
            start: Index of the first byte
            length: Number of bytes to read
            byteorder: 'big' (default) or 'little'

        Returns:
            int or float: The decoded value

        Raises:
            OutOfBoundsError: If start + length exceeds the buffer
            ValueError: If length does not suit value_type
        """

        numeric_type = resolve_type(value_type)
        check_byteorder(byteorder)
        end = self._check_span(start, length)

        return decode_value(numeric_type, bytes(self._data[start:end]), byteorder)

    def get_value(self, value_type: Union[str, NumericType], offset: int,
                  byteorder: str = DEFAULT_BYTEORDER) -> Number:
        """Decode a number at offset, reading as many bytes as value_type is wide."""

        numeric_type = resolve_type(value_type)

        return self.scan_value(numeric_type, offset, numeric_type.size, byteorder)

    def get_uint8(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(UINT8, offset, byteorder)

    def get_int8(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(INT8, offset, byteorder)

    def get_uint16(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(UINT16, offset, byteorder)

    def get_int16(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(INT16, offset, byteorder)

    def get_uint32(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(UINT32, offset, byteorder)

    def get_int32(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(INT32, offset, byteorder)

    def get_uint64(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(UINT64, offset, byteorder)

    def get_int64(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value(INT64, offset, byteorder)

    def get_float16(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> float:
        return self.get_value(FLOAT16, offset, byteorder)

    def get_float32(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> float:
        return self.get_value(FLOAT32, offset, byteorder)

    def get_float64(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> float:
        return self.get_value(FLOAT64, offset, byteorder)

    @staticmethod
    def _decode_text(data: bytes, encoding: str) -> str:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise FailedConversionError(f"Cannot decode {len(data)} bytes as {encoding}") from e

    def get_string(self, offset: int, length: int, encoding: str = DEFAULT_ENCODING) -> str:
        """
        Decode a fixed-length string.

        Args:
            offset: Index of the first byte of the string
            length: Length of the string in bytes
            encoding: Text encoding, ASCII by default

        Returns:
            str: The decoded string

        Raises:
            OutOfBoundsError: If offset + length exceeds the buffer
            FailedConversionError: If the bytes are not valid in encoding
        """

        end = self._check_span(offset, length)

        return self._decode_text(bytes(self._data[offset:end]), encoding)

    def get_cstring(self, offset: int, encoding: str = DEFAULT_ENCODING) -> str:
        """
        Decode a nul-terminated string starting at offset.

        The terminator is not part of the result.

        Raises:
            OutOfBoundsError: If offset is past the end of the buffer
            NonNulTerminatedStringError: If no zero byte follows offset
            FailedConversionError: If the bytes are not valid in encoding
        """

        if not 0 <= offset <= len(self._data):
            raise OutOfBoundsError(f"Offset {offset} out of bounds")

        end = find_pattern(self._data, b'\x00', offset)
        if end is None:
            raise NonNulTerminatedStringError(f"No nul terminator after offset {offset}")

        return self._decode_text(bytes(self._data[offset:end]), encoding)

    def to_bytearray(self) -> bytearray:
        """Get an owned copy of the buffer contents."""

        return bytearray(self._data)

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def to_hex(self) -> str:
        """Get the contents as a lowercase hex string."""

        return hex_encode(self._data)

    def hexdump(self, width: int = BYTES_PER_LINE) -> str:
        return hexdump(self._data, width)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteBuffer):
            return self._data == other._data

        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._data == other

        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({bytes(self._data)!r})"
