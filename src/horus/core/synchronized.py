"""
Thread-safe ByteBuffer guarded by a reader/writer lock.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from .buffer import DEFAULT_ENCODING, BytesLike, ByteBuffer, Number, to_byte_content
from .numeric import DEFAULT_BYTEORDER, NumericType
from ..utils.hexdump import BYTES_PER_LINE


class ReadWriteLock:
    """
    Lock allowing many concurrent readers or a single writer.

    Waiting writers take priority over newly arriving readers, so a steady
    stream of reads cannot starve a write. The lock is not reentrant.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._condition:
            while self._writer or self._writers_waiting:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")

            self._readers -= 1
            if not self._readers:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._condition:
            if not self._writer:
                raise RuntimeError("release_write() called without a matching acquire_write()")

            self._writer = False
            self._condition.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared side of the lock for the duration of a with block."""

        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive side of the lock for the duration of a with block."""

        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class SynchronizedByteBuffer:
    """
    ByteBuffer wrapper that is safe to share between threads.

    Exposes the same operations as ByteBuffer with the same errors. Reads
    run concurrently with each other; writes hold the lock exclusively and
    are fully applied before the call returns, so every thread, including
    the writer, sees either the whole mutation or none of it.
    """

    def __init__(self, data: BytesLike = b'') -> None:
        self._buffer = ByteBuffer(data)
        self._lock = ReadWriteLock()

    @classmethod
    def _wrap(cls, buffer: ByteBuffer) -> 'SynchronizedByteBuffer':
        instance = cls.__new__(cls)
        instance._buffer = buffer
        instance._lock = ReadWriteLock()
        return instance

    @classmethod
    def from_bytes(cls, data: BytesLike) -> 'SynchronizedByteBuffer':
        return cls._wrap(ByteBuffer.from_bytes(data))

    @classmethod
    def from_int(cls, value: int, size: int = 8, byteorder: str = DEFAULT_BYTEORDER,
                 signed: bool = False) -> 'SynchronizedByteBuffer':
        return cls._wrap(ByteBuffer.from_int(value, size, byteorder, signed))

    @classmethod
    def from_hex(cls, hex_str: str) -> Optional['SynchronizedByteBuffer']:
        """Create a buffer from a hex string, or None if it is not valid hex."""

        buffer = ByteBuffer.from_hex(hex_str)
        if buffer is None:
            return None

        return cls._wrap(buffer)

    @property
    def count(self) -> int:
        with self._lock.read_locked():
            return self._buffer.count

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_bytes())

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __getitem__(self, key: Union[int, slice]) -> Union[int, ByteBuffer]:
        with self._lock.read_locked():
            return self._buffer[key]

    def __setitem__(self, key: Union[int, slice], value) -> None:
        if isinstance(key, slice):
            # Copy content out before locking, it may be this or another locked buffer.
            value = to_byte_content(value)

        with self._lock.write_locked():
            self._buffer[key] = value

    def get_range(self, lower: int, upper: int) -> ByteBuffer:
        with self._lock.read_locked():
            return self._buffer.get_range(lower, upper)

    def get_range_closed(self, lower: int, upper: int) -> ByteBuffer:
        with self._lock.read_locked():
            return self._buffer.get_range_closed(lower, upper)

    def set_range(self, lower: int, upper: int, content: BytesLike) -> None:
        new_data = to_byte_content(content)
        with self._lock.write_locked():
            self._buffer.set_range(lower, upper, new_data)

    def set_range_closed(self, lower: int, upper: int, content: BytesLike) -> None:
        new_data = to_byte_content(content)
        with self._lock.write_locked():
            self._buffer.set_range_closed(lower, upper, new_data)

    replace_subrange = set_range

    def bit(self, position: int, little_endian: bool = True) -> int:
        with self._lock.read_locked():
            return self._buffer.bit(position, little_endian)

    def set_bit(self, position: int, value: bool, little_endian: bool = True) -> None:
        with self._lock.write_locked():
            self._buffer.set_bit(position, value, little_endian)

    def nibble(self, position: int) -> int:
        with self._lock.read_locked():
            return self._buffer.nibble(position)

    def scan_value(self, value_type: Union[str, NumericType], start: int, length: int,
                   byteorder: str = DEFAULT_BYTEORDER) -> Number:
        with self._lock.read_locked():
            return self._buffer.scan_value(value_type, start, length, byteorder)

    def get_value(self, value_type: Union[str, NumericType], offset: int,
                  byteorder: str = DEFAULT_BYTEORDER) -> Number:
        with self._lock.read_locked():
            return self._buffer.get_value(value_type, offset, byteorder)

    def get_uint8(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('uint8', offset, byteorder)

    def get_int8(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('int8', offset, byteorder)

    def get_uint16(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('uint16', offset, byteorder)

    def get_int16(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('int16', offset, byteorder)

    def get_uint32(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('uint32', offset, byteorder)

    def get_int32(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('int32', offset, byteorder)

    def get_uint64(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('uint64', offset, byteorder)

    def get_int64(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> int:
        return self.get_value('int64', offset, byteorder)

    def get_float16(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> float:
        return self.get_value('float16', offset, byteorder)

    def get_float32(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> float:
        return self.get_value('float32', offset, byteorder)

    def get_float64(self, offset: int, byteorder: str = DEFAULT_BYTEORDER) -> float:
        return self.get_value('float64', offset, byteorder)

    def get_string(self, offset: int, length: int, encoding: str = DEFAULT_ENCODING) -> str:
        with self._lock.read_locked():
            return self._buffer.get_string(offset, length, encoding)

    def get_cstring(self, offset: int, encoding: str = DEFAULT_ENCODING) -> str:
        with self._lock.read_locked():
            return self._buffer.get_cstring(offset, encoding)

    def to_bytearray(self) -> bytearray:
        with self._lock.read_locked():
            return self._buffer.to_bytearray()

    def to_bytes(self) -> bytes:
        with self._lock.read_locked():
            return self._buffer.to_bytes()

    def to_hex(self) -> str:
        with self._lock.read_locked():
            return self._buffer.to_hex()

    def hexdump(self, width: int = BYTES_PER_LINE) -> str:
        with self._lock.read_locked():
            return self._buffer.hexdump(width)

    def snapshot(self) -> ByteBuffer:
        """Get an independent, unsynchronized copy of the current contents."""

        with self._lock.read_locked():
            return ByteBuffer(self._buffer)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SynchronizedByteBuffer):
            if other is self:
                return True
            # Snapshot each side under its own lock, never both at once.
            return self.to_bytes() == other.to_bytes()

        if isinstance(other, (ByteBuffer, bytes, bytearray, memoryview)):
            return self.snapshot() == other

        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_bytes()!r})"
