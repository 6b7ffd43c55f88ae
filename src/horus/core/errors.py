"""
Error types raised by the buffer decode operations.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of recoverable decode failures."""

    OUT_OF_BOUNDS = 'out_of_bounds'
    NON_NUL_TERMINATED_STRING = 'non_nul_terminated_string'
    FAILED_CONVERSION = 'failed_conversion'


class BinaryError(Exception):
    """Base class for recoverable errors raised while decoding a buffer."""

    kind: ErrorKind

    def __init__(self, message: str = '') -> None:
        super().__init__(message or self.kind.value.replace('_', ' '))


class OutOfBoundsError(BinaryError):
    """An index, range or offset + length falls outside the buffer."""

    kind = ErrorKind.OUT_OF_BOUNDS


class NonNulTerminatedStringError(BinaryError):
    """The scan for a nul terminator reached the end of the buffer."""

    kind = ErrorKind.NON_NUL_TERMINATED_STRING


class FailedConversionError(BinaryError):
    """The bytes could not be decoded with the requested encoding."""

    kind = ErrorKind.FAILED_CONVERSION
