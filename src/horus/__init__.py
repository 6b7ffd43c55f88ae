"""
Horus: bounds-checked parsing of binary data.
"""

from .core import (
    BinaryError,
    ByteBuffer,
    ErrorKind,
    FailedConversionError,
    NonNulTerminatedStringError,
    NUMERIC_TYPES,
    NumericType,
    OutOfBoundsError,
    ReadWriteLock,
    SynchronizedByteBuffer,
)

__version__ = '0.1.0'

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
