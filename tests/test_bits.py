"""Tests for bit and nibble access."""

import pytest

from horus import ByteBuffer, ErrorKind, OutOfBoundsError


def bits(buffer: ByteBuffer, count: int, little_endian: bool = True) -> list:
    return [buffer.bit(i, little_endian) for i in range(count)]


class TestBitLittleEndian:
    """Tests for bit() numbering from the least significant bit of the last byte."""

    def test_single_low_bit(self) -> None:
        assert bits(ByteBuffer([0b00000001]), 8) == [1, 0, 0, 0, 0, 0, 0, 0]

    def test_all_but_low_bit(self) -> None:
        assert bits(ByteBuffer([0b11111110]), 8) == [0, 1, 1, 1, 1, 1, 1, 1]

    def test_two_bytes(self) -> None:
        buffer = ByteBuffer([0b00000101, 0b10000111])
        assert bits(buffer, 16) == [1, 1, 1, 0, 0, 0, 0, 1, 1, 0, 1, 0, 0, 0, 0, 0]

    def test_two_small_bytes(self) -> None:
        buffer = ByteBuffer([0b101, 0b11])
        assert bits(buffer, 16) == [1, 1, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0]

    def test_out_of_bounds(self) -> None:
        buffer = ByteBuffer([0xFF])
        with pytest.raises(OutOfBoundsError) as excinfo:
            buffer.bit(8)
        assert excinfo.value.kind is ErrorKind.OUT_OF_BOUNDS

    def test_negative_position(self) -> None:
        with pytest.raises(OutOfBoundsError):
            ByteBuffer([0xFF]).bit(-1)

    def test_empty_buffer(self) -> None:
        with pytest.raises(OutOfBoundsError):
            ByteBuffer().bit(0)


class TestBitBigEndian:
    """Tests for bit() numbering from the most significant bit of the first byte."""

    def test_single_low_bit(self) -> None:
        assert bits(ByteBuffer([0b00000001]), 8, False) == [0, 0, 0, 0, 0, 0, 0, 1]

    def test_all_but_low_bit(self) -> None:
        assert bits(ByteBuffer([0b11111110]), 8, False) == [1, 1, 1, 1, 1, 1, 1, 0]

    def test_two_small_bytes(self) -> None:
        buffer = ByteBuffer([0b101, 0b11])
        assert bits(buffer, 16, False) == [0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 1, 1]

    def test_out_of_bounds(self) -> None:
        with pytest.raises(OutOfBoundsError):
            ByteBuffer([0xFF, 0xFF]).bit(16, little_endian=False)

    def test_mirrors_little_endian_on_one_byte(self) -> None:
        buffer = ByteBuffer([0b10110010])
        for i in range(8):
            assert buffer.bit(i) == buffer.bit(7 - i, little_endian=False)


class TestSetBit:
    """Tests for set_bit()."""

    def test_set_little_endian(self) -> None:
        buffer = ByteBuffer([0x00, 0x00])
        buffer.set_bit(0, True)
        buffer.set_bit(9, True)
        assert buffer == b'\x02\x01'

    def test_set_big_endian(self) -> None:
        buffer = ByteBuffer([0x00, 0x00])
        buffer.set_bit(0, True, little_endian=False)
        buffer.set_bit(15, True, little_endian=False)
        assert buffer == b'\x80\x01'

    def test_clear_bit(self) -> None:
        buffer = ByteBuffer([0xFF])
        buffer.set_bit(3, False)
        assert buffer[0] == 0b11110111
        assert buffer.bit(3) == 0

    def test_clear_only_touches_one_bit(self) -> None:
        buffer = ByteBuffer([0xFF, 0xFF])
        buffer.set_bit(0, False, little_endian=False)
        assert buffer == b'\x7f\xff'

    def test_clear_already_clear_bit(self) -> None:
        buffer = ByteBuffer([0b00000100])
        buffer.set_bit(0, False)
        assert buffer[0] == 0b00000100

    def test_set_then_read(self) -> None:
        buffer = ByteBuffer(bytes(4))
        for position in range(32):
            buffer.set_bit(position, True)
            assert buffer.bit(position) == 1
            buffer.set_bit(position, False)
            assert buffer.bit(position) == 0

    def test_out_of_bounds_leaves_buffer(self) -> None:
        buffer = ByteBuffer([0x0F])
        with pytest.raises(OutOfBoundsError):
            buffer.set_bit(8, True)
        assert buffer == b'\x0f'


class TestNibble:
    """Tests for nibble()."""

    def test_high_and_low(self) -> None:
        buffer = ByteBuffer([0x0F])
        assert buffer.nibble(0) == 0
        assert buffer.nibble(1) == 15

    def test_across_bytes(self) -> None:
        buffer = ByteBuffer([0x12, 0xAB])
        assert [buffer.nibble(i) for i in range(4)] == [0x1, 0x2, 0xA, 0xB]

    def test_out_of_bounds(self) -> None:
        buffer = ByteBuffer([0x12])
        with pytest.raises(OutOfBoundsError):
            buffer.nibble(2)
        with pytest.raises(OutOfBoundsError):
            buffer.nibble(-1)
