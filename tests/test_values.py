"""
Tests for per-type value decoding, encoding, parsing and display.
"""

import math
import struct

import pytest

from settings_editor.errors import (
    InvalidBooleanLiteral,
    InvalidNumericLiteral,
    InvalidUtf8,
    MalformedBoolean,
    ParseError,
    PayloadTooLarge,
    UnexpectedEndOfInput,
    UnknownTypeTag,
    UnsupportedOperation,
)
from settings_editor.io.reader import ByteCursor
from settings_editor.io.writer import Writer
from settings_editor.model.values import (
    BoolValue,
    BytesValue,
    Float32Value,
    SettingsEntry,
    TextValue,
    UInt32Value,
    UInt64Value,
    format_float32,
    parse_bool,
    parse_float32,
    parse_unsigned,
    read_entry,
    write_entry,
)
from tests.builders import encode_entry


def _written(value) -> bytes:
    writer = Writer()
    value.write(writer)
    return writer.to_bytes()


class TestDecode:
    def test_bool(self) -> None:
        cursor = ByteCursor(b'\x00\x01')

        assert BoolValue.read(cursor) == SettingsEntry(address=0, value=BoolValue(False))
        assert BoolValue.read(cursor) == SettingsEntry(address=1, value=BoolValue(True))

    def test_malformed_bool(self) -> None:
        cursor = ByteCursor(b'\x00\x02')
        cursor.pop_byte()

        with pytest.raises(MalformedBoolean) as exc_info:
            BoolValue.read(cursor)

        assert exc_info.value.byte == 2
        assert exc_info.value.offset == 1

    def test_fixed_width_scalars(self) -> None:
        cursor = ByteCursor(struct.pack('>IQf', 7, 2**64 - 1, -0.25))

        assert UInt32Value.read(cursor) == SettingsEntry(0, UInt32Value(7))
        assert UInt64Value.read(cursor) == SettingsEntry(4, UInt64Value(2**64 - 1))
        assert Float32Value.read(cursor) == SettingsEntry(12, Float32Value(-0.25))

    def test_text_address_after_length_prefix(self) -> None:
        cursor = ByteCursor(b'\x00\x06h\xc3\xa9llo')

        entry = TextValue.read(cursor)

        # Length counts bytes, not characters
        assert entry.value == TextValue('héllo')
        assert entry.address == 2

    def test_text_invalid_utf8(self) -> None:
        cursor = ByteCursor(b'\x00\x03ab\xff')

        with pytest.raises(InvalidUtf8) as exc_info:
            TextValue.read(cursor)

        assert exc_info.value.offset == 4

    def test_bytes_address_after_length_prefix(self) -> None:
        cursor = ByteCursor(b'\x00\x00\x00\x02\xde\xad')

        entry = BytesValue.read(cursor)

        assert entry.value == BytesValue(b'\xde\xad')
        assert entry.address == 4

    def test_bytes_truncated(self) -> None:
        cursor = ByteCursor(b'\x00\x00\x00\x10\x01')

        with pytest.raises(UnexpectedEndOfInput):
            BytesValue.read(cursor)

    def test_read_entry_dispatches_on_tag(self) -> None:
        cursor = ByteCursor(encode_entry('vol', 1, b'\x00\x00\x00\x05'))

        key, entry = read_entry(cursor)

        assert key == 'vol'
        assert entry.value == UInt32Value(5)
        # 2 (key length) + 3 (key) + 1 (tag)
        assert entry.address == 6

    def test_read_entry_unknown_tag(self) -> None:
        cursor = ByteCursor(encode_entry('vol', 9, b'\x00\x00\x00\x05'))

        with pytest.raises(UnknownTypeTag) as exc_info:
            read_entry(cursor)

        assert exc_info.value.tag == 9
        assert exc_info.value.offset == 5


class TestEncode:
    def test_tag_precedes_payload(self) -> None:
        assert _written(BoolValue(True)) == b'\x00\x01'
        assert _written(UInt32Value(42)) == b'\x01\x00\x00\x00\x2a'
        assert _written(UInt64Value(1)) == b'\x02' + b'\x00' * 7 + b'\x01'
        assert _written(Float32Value(1.5)) == b'\x03\x3f\xc0\x00\x00'
        assert _written(TextValue('hé')) == b'\x04\x00\x03h\xc3\xa9'
        assert _written(BytesValue(b'\x01\x02')) == b'\x05\x00\x00\x00\x02\x01\x02'

    def test_length_prefix_follows_current_payload(self) -> None:
        """Length prefixes are recomputed, not carried over from decode."""
        entry = TextValue.read(ByteCursor(b'\x00\x02en'))
        entry.value = TextValue('en_GB')

        writer = Writer()
        write_entry(writer, 'locale', entry)

        assert writer.to_bytes() == b'\x00\x06locale\x04\x00\x05en_GB'

    def test_text_too_long(self) -> None:
        with pytest.raises(PayloadTooLarge):
            _written(TextValue('x' * 0x10000))

    def test_key_too_long(self) -> None:
        entry = SettingsEntry(address=0, value=BoolValue(True))

        with pytest.raises(PayloadTooLarge) as exc_info:
            write_entry(Writer(), 'k' * 0x10000, entry)

        assert exc_info.value.size == 0x10000
        assert exc_info.value.limit == 0xFFFF


class TestParse:
    @pytest.mark.parametrize('literal', ['OFF', 'No', '0', 'false', 'F', 'nil', 'Inactive'])
    def test_bool_false_literals(self, literal: str) -> None:
        assert parse_bool(literal) is False

    @pytest.mark.parametrize('literal', ['ON', 'Yes', '1', 'TRUE', 't', 'active'])
    def test_bool_true_literals(self, literal: str) -> None:
        assert parse_bool(literal) is True

    @pytest.mark.parametrize('literal', ['maybe', '', '2', 'yes '])
    def test_bool_invalid(self, literal: str) -> None:
        with pytest.raises(InvalidBooleanLiteral):
            parse_bool(literal)

    def test_unsigned(self) -> None:
        assert parse_unsigned('42', 0xFFFFFFFF) == 42
        assert parse_unsigned('+7', 0xFFFFFFFF) == 7
        assert parse_unsigned('4294967295', 0xFFFFFFFF) == 0xFFFFFFFF

    @pytest.mark.parametrize('literal', ['-1', '4294967296', '1.5', '', ' 1', '1_000', 'ten'])
    def test_unsigned_invalid(self, literal: str) -> None:
        with pytest.raises(InvalidNumericLiteral):
            parse_unsigned(literal, 0xFFFFFFFF)

    def test_uint64_range(self) -> None:
        assert UInt64Value.parse('18446744073709551615') == UInt64Value(2**64 - 1)
        with pytest.raises(InvalidNumericLiteral):
            UInt64Value.parse('18446744073709551616')

    def test_float32_rounds_to_single_precision(self) -> None:
        value = parse_float32('0.1')

        assert value != 0.1
        assert value == struct.unpack('>f', struct.pack('>f', 0.1))[0]

    def test_float32_special_values(self) -> None:
        assert parse_float32('1e3') == 1000.0
        assert parse_float32('-inf') == -math.inf
        assert math.isnan(parse_float32('NaN'))
        assert parse_float32('1e39') == math.inf

    @pytest.mark.parametrize('literal', ['abc', '', ' 1.0', '1_0.5', '1.0.0'])
    def test_float32_invalid(self, literal: str) -> None:
        with pytest.raises(InvalidNumericLiteral):
            parse_float32(literal)

    def test_text_is_verbatim(self) -> None:
        assert TextValue.parse(' spaced "quoted" ') == TextValue(' spaced "quoted" ')

    def test_text_rejects_lone_surrogates(self) -> None:
        """Undecodable argv bytes arrive as surrogate escapes and cannot be stored."""
        with pytest.raises(ParseError):
            TextValue.parse('bad\udcff')

    def test_text_length_limit(self) -> None:
        assert TextValue.parse('\u00e9' * 0x7FFF).value == '\u00e9' * 0x7FFF
        with pytest.raises(PayloadTooLarge):
            TextValue.parse('\u00e9' * 0x8000)

    def test_bytes_are_read_only(self) -> None:
        with pytest.raises(UnsupportedOperation):
            BytesValue.parse('00ff')


class TestFormat:
    def test_scalars(self) -> None:
        assert BoolValue(True).format() == 'true'
        assert BoolValue(False).format() == 'false'
        assert UInt32Value(80).format() == '80'
        assert UInt64Value(2**64 - 1).format() == '18446744073709551615'

    def test_text_is_quoted(self) -> None:
        assert TextValue('en').format() == '"en"'

    def test_bytes_as_hex_list(self) -> None:
        assert BytesValue(b'\x01\xab\xff').format() == '[1, AB, FF]'
        assert BytesValue(b'').format() == '[]'

    @pytest.mark.parametrize(
        'value, expected',
        [
            (1.0, '1'),
            (1.5, '1.5'),
            (struct.unpack('>f', struct.pack('>f', 0.1))[0], '0.1'),
            (-0.25, '-0.25'),
            (math.inf, 'inf'),
            (math.nan, 'NaN'),
        ],
    )
    def test_float32_shortest(self, value: float, expected: str) -> None:
        assert format_float32(value) == expected

    @pytest.mark.parametrize(
        'raw, expected',
        [
            # largest finite values: rounded shorter candidates overflow 32 bits
            (b'\x7f\x7f\xff\xff', '34028235' + '0' * 31),
            (b'\xff\x7f\xff\xff', '-34028235' + '0' * 31),
            (b'\x7f\x00\x00\x00', '17014118' + '0' * 31),
            # smallest subnormal
            (b'\x00\x00\x00\x01', '0.' + '0' * 44 + '1'),
            (b'\x80\x00\x00\x00', '-0'),
        ],
    )
    def test_float32_range_extremes(self, raw: bytes, expected: str) -> None:
        """Extremes display positionally, without exponent notation."""
        value = Float32Value.read(ByteCursor(raw)).value

        assert value.format() == expected

    def test_entry_with_address(self) -> None:
        entry = SettingsEntry(address=0x4F, value=TextValue('en'))

        assert entry.format() == '"en"@[addr:4F]'
