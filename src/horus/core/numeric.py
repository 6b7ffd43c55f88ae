"""
Fixed-width numeric types understood by the buffer decoders.

The set is closed: every decode goes through one of the entries of
NUMERIC_TYPES, keyed by name, and is resolved to a struct format together
with an explicit byte order.
"""

import struct
from dataclasses import dataclass
from typing import Dict, Final, Union


BIG_ENDIAN: Final[str] = 'big'
LITTLE_ENDIAN: Final[str] = 'little'
DEFAULT_BYTEORDER: Final[str] = BIG_ENDIAN

BYTEORDER_PREFIXES: Final[Dict[str, str]] = {
    BIG_ENDIAN: '>',
    LITTLE_ENDIAN: '<',
}


@dataclass(frozen=True)
class NumericType:
    """A fixed-width integer or IEEE 754 floating point type."""
    name: str
    size: int
    format_char: str
    is_float: bool = False
    signed: bool = False

    def struct_format(self, byteorder: str = DEFAULT_BYTEORDER) -> str:
        """Get the struct format string for this type in the given byte order."""

        return BYTEORDER_PREFIXES[check_byteorder(byteorder)] + self.format_char


INT8 = NumericType('int8', 1, 'b', signed=True)
UINT8 = NumericType('uint8', 1, 'B')
INT16 = NumericType('int16', 2, 'h', signed=True)
UINT16 = NumericType('uint16', 2, 'H')
INT32 = NumericType('int32', 4, 'i', signed=True)
UINT32 = NumericType('uint32', 4, 'I')
INT64 = NumericType('int64', 8, 'q', signed=True)
UINT64 = NumericType('uint64', 8, 'Q')
FLOAT16 = NumericType('float16', 2, 'e', is_float=True, signed=True)
FLOAT32 = NumericType('float32', 4, 'f', is_float=True, signed=True)
FLOAT64 = NumericType('float64', 8, 'd', is_float=True, signed=True)

NUMERIC_TYPES: Final[Dict[str, NumericType]] = {
    numeric_type.name: numeric_type
    for numeric_type in (
        INT8, UINT8, INT16, UINT16, INT32, UINT32, INT64, UINT64,
        FLOAT16, FLOAT32, FLOAT64,
    )
}

# C-style aliases accepted wherever a type name is.
TYPE_ALIASES: Final[Dict[str, str]] = {
    'byte': 'uint8',
    'short': 'int16',
    'ushort': 'uint16',
    'int': 'int32',
    'uint': 'uint32',
    'long': 'int64',
    'ulong': 'uint64',
    'half': 'float16',
    'float': 'float32',
    'double': 'float64',
}


def check_byteorder(byteorder: str) -> str:
    """Validate a byte order name, returning it unchanged."""

    if byteorder not in BYTEORDER_PREFIXES:
        raise ValueError(f"byteorder must be 'big' or 'little', got {byteorder!r}")

    return byteorder


def resolve_type(value_type: Union[str, NumericType]) -> NumericType:
    """
    Look up a numeric type by name or alias.

    Args:
        value_type: A NumericType or its name (e.g. "uint16", "double")

    Returns:
        NumericType: The matching entry of NUMERIC_TYPES

    Raises:
        ValueError: If the name is not a known numeric type
    """

    if isinstance(value_type, NumericType):
        return value_type

    name = TYPE_ALIASES.get(value_type, value_type)
    try:
        return NUMERIC_TYPES[name]
    except KeyError:
        raise ValueError(f"Unknown numeric type: {value_type!r}") from None


def decode_value(value_type: NumericType, data: bytes,
                 byteorder: str = DEFAULT_BYTEORDER) -> Union[int, float]:
    """
    Decode raw bytes as a value of the given numeric type.

    Integers may be decoded from fewer bytes than their width, the value is
    then read from exactly those bytes. Floats need their exact width.

    Args:
        value_type: Type to decode
        data: Raw bytes, at most value_type.size long
        byteorder: 'big' or 'little'

    Returns:
        int or float: The decoded value
    """

    check_byteorder(byteorder)
    length = len(data)

    if value_type.is_float:
        if length != value_type.size:
            raise ValueError(
                f"{value_type.name} needs exactly {value_type.size} bytes, got {length}"
            )
        return struct.unpack(value_type.struct_format(byteorder), data)[0]

    if length > value_type.size:
        raise ValueError(
            f"{value_type.name} holds at most {value_type.size} bytes, got {length}"
        )

    return int.from_bytes(data, byteorder, signed=value_type.signed)
