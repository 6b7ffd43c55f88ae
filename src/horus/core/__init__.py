"""
Core package for binary buffer parsing.

This package implements the ByteBuffer class for bounds-checked decoding of
integers, floats, bits, nibbles and strings from raw bytes, and the
SynchronizedByteBuffer class exposing the same operations behind a
reader/writer lock.
"""

from .buffer import ByteBuffer
from .errors import (
    BinaryError,
    ErrorKind,
    FailedConversionError,
    NonNulTerminatedStringError,
    OutOfBoundsError,
)
from .numeric import NUMERIC_TYPES, NumericType
from .synchronized import ReadWriteLock, SynchronizedByteBuffer

__all__ = [
    'ByteBuffer',
    'SynchronizedByteBuffer',
    'ReadWriteLock',
    'NumericType',
    'NUMERIC_TYPES',
    'BinaryError',
    'ErrorKind',
    'OutOfBoundsError',
    'NonNulTerminatedStringError',
    'FailedConversionError',
]
