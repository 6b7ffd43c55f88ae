"""Tests for hex text helpers and hexdump rendering."""

import pytest

from horus.utils import (
    dump_lines,
    find_pattern,
    format_line,
    format_offset,
    hex_encode,
    hexdump,
    highlight,
    is_hex_string,
    parse_hex_string,
)


class TestHexParsing:
    """Tests for is_hex_string() and parse_hex_string()."""

    @pytest.mark.parametrize('text', ['00FF', 'abcdef', '0x1', '0XdeadBEEF', '7'])
    def test_valid(self, text: str) -> None:
        assert is_hex_string(text)

    @pytest.mark.parametrize('text', ['', '0x', 'XX', '00 FF', '0xG1', '-1', 'ff:ff'])
    def test_invalid(self, text: str) -> None:
        assert not is_hex_string(text)
        assert parse_hex_string(text) is None

    def test_parse(self) -> None:
        assert parse_hex_string('00FF') == b'\x00\xff'

    def test_parse_pads_odd_length(self) -> None:
        assert parse_hex_string('abc') == b'\x0a\xbc'

    def test_parse_strips_prefix(self) -> None:
        assert parse_hex_string('0x0102') == b'\x01\x02'

    def test_invalid_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level('WARNING', logger='horus.utils.hex_utils'):
            parse_hex_string('XX')
        assert 'not a valid hexadecimal' in caplog.text

    def test_encode(self) -> None:
        assert hex_encode(b'\x00\xab\xff') == '00abff'


class TestSearch:
    """Tests for find_pattern()."""

    def test_found(self) -> None:
        assert find_pattern(b'abc\x00def\x00', b'\x00') == 3

    def test_from_start(self) -> None:
        assert find_pattern(b'abc\x00def\x00', b'\x00', 4) == 7

    def test_not_found(self) -> None:
        assert find_pattern(b'abc', b'\x00') is None

    def test_end_limit(self) -> None:
        assert find_pattern(b'abc\x00', b'\x00', 0, 3) is None


class TestHexdump:
    """Tests for hexdump rendering."""

    def test_format_offset(self) -> None:
        assert format_offset(255) == '000000ff'
        assert format_offset(1, width=4) == '0001'

    def test_dump_lines(self) -> None:
        assert list(dump_lines(b'abcde', 2)) == [(0, b'ab'), (2, b'cd'), (4, b'e')]

    def test_dump_lines_width(self) -> None:
        with pytest.raises(ValueError):
            list(dump_lines(b'abc', 0))

    def test_format_line_pads_short_line(self) -> None:
        line = format_line(16, b'Hi\x00', 4)
        assert line == '00000010  48 69 00     |Hi.|'

    def test_hexdump(self) -> None:
        dump = hexdump(b'Horus\x00', 16)
        lines = dump.splitlines()
        assert lines[0].startswith('00000000  48 6f 72 75 73 00')
        assert lines[0].endswith('|Horus.|')
        assert lines[-1] == '00000006'

    def test_empty_hexdump(self) -> None:
        assert hexdump(b'') == '00000000'

    def test_highlight_keeps_text(self) -> None:
        dump = hexdump(b'Horus')
        colored = highlight(dump)
        assert '\x1b[' in colored
        assert 'Horus' in colored
