"""Typed values stored in a settings file.

Every value kind knows its wire tag, how to read its payload from a
ByteCursor, how to write it back, how to parse a raw command-line string into
a new value of the same kind, and how to display itself.

Wire layout of one entry (big-endian):

    KeyLen:u16 KeyBytes Tag:u8 Payload

The address recorded for a value is the offset of its first payload byte,
i.e. after the tag and after the length prefix of Text/Bytes values.
"""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from settings_editor.const import (
    FALSE_LITERALS,
    MAX_BYTES_LENGTH,
    MAX_TEXT_LENGTH,
    MAX_UINT32,
    MAX_UINT64,
    TAG_BOOL,
    TAG_BYTES,
    TAG_FLOAT32,
    TAG_TEXT,
    TAG_UINT32,
    TAG_UINT64,
    TRUE_LITERALS,
)
from settings_editor.errors import (
    InvalidBooleanLiteral,
    InvalidNumericLiteral,
    InvalidUtf8,
    MalformedBoolean,
    ParseError,
    PayloadTooLarge,
    UnknownTypeTag,
    UnsupportedOperation,
)

if TYPE_CHECKING:
    from settings_editor.io.reader import ByteCursor
    from settings_editor.io.writer import Writer


_UNSIGNED_PATTERN = re.compile(r'\+?[0-9]+')


@dataclass(frozen=True)
class TypedValue:
    """Base class for the six value kinds."""

    TAG: ClassVar[int]
    KIND: ClassVar[str]

    @classmethod
    def read(cls, cursor: ByteCursor) -> SettingsEntry:
        """Read the payload and return it with the address it started at."""
        address = cursor.position
        return SettingsEntry(address=address, value=cls.read_payload(cursor))

    @classmethod
    def read_payload(cls, cursor: ByteCursor) -> TypedValue:
        raise NotImplementedError

    def write(self, writer: Writer) -> None:
        """Write tag byte followed by the payload."""
        writer.write_uint8(self.TAG)
        self.write_payload(writer)

    def write_payload(self, writer: Writer) -> None:
        raise NotImplementedError

    def validate(self) -> None:
        """Raise if the payload cannot be written in this kind's wire format."""

    @classmethod
    def parse(cls, raw: str) -> TypedValue:
        """Parse a raw string into a value of this kind."""
        raise NotImplementedError

    def format(self) -> str:
        """Human readable form used by --read and --show-all."""
        raise NotImplementedError


@dataclass(frozen=True)
class BoolValue(TypedValue):
    value: bool

    TAG = TAG_BOOL
    KIND = 'boolean'

    @classmethod
    def read_payload(cls, cursor: ByteCursor) -> BoolValue:
        offset = cursor.position
        byte = cursor.pop_byte()
        if byte == 0:
            return cls(False)
        if byte == 1:
            return cls(True)
        raise MalformedBoolean(offset, byte)

    def write_payload(self, writer: Writer) -> None:
        writer.write_uint8(1 if self.value else 0)

    @classmethod
    def parse(cls, raw: str) -> BoolValue:
        return cls(parse_bool(raw))

    def format(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class UInt32Value(TypedValue):
    value: int

    TAG = TAG_UINT32
    KIND = 'positive integer'

    @classmethod
    def read_payload(cls, cursor: ByteCursor) -> UInt32Value:
        return cls(cursor.read_uint32())

    def write_payload(self, writer: Writer) -> None:
        writer.write_uint32(self.value)

    def validate(self) -> None:
        if not 0 <= self.value <= MAX_UINT32:
            raise InvalidNumericLiteral(str(self.value), self.KIND)

    @classmethod
    def parse(cls, raw: str) -> UInt32Value:
        return cls(parse_unsigned(raw, MAX_UINT32, cls.KIND))

    def format(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UInt64Value(TypedValue):
    value: int

    TAG = TAG_UINT64
    KIND = 'positive integer'

    @classmethod
    def read_payload(cls, cursor: ByteCursor) -> UInt64Value:
        return cls(cursor.read_uint64())

    def write_payload(self, writer: Writer) -> None:
        writer.write_uint64(self.value)

    def validate(self) -> None:
        if not 0 <= self.value <= MAX_UINT64:
            raise InvalidNumericLiteral(str(self.value), self.KIND)

    @classmethod
    def parse(cls, raw: str) -> UInt64Value:
        return cls(parse_unsigned(raw, MAX_UINT64, cls.KIND))

    def format(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float32Value(TypedValue):
    value: float

    TAG = TAG_FLOAT32
    KIND = 'floating point'

    @classmethod
    def read_payload(cls, cursor: ByteCursor) -> Float32Value:
        return cls(cursor.read_float32())

    def write_payload(self, writer: Writer) -> None:
        writer.write_float32(self.value)

    def validate(self) -> None:
        try:
            struct.pack('>f', self.value)
        except OverflowError as e:
            raise InvalidNumericLiteral(repr(self.value), self.KIND) from e

    @classmethod
    def parse(cls, raw: str) -> Float32Value:
        return cls(parse_float32(raw))

    def format(self) -> str:
        return format_float32(self.value)


@dataclass(frozen=True)
class TextValue(TypedValue):
    value: str

    TAG = TAG_TEXT
    KIND = 'string'

    @classmethod
    def read(cls, cursor: ByteCursor) -> SettingsEntry:
        # Address points past the u16 length prefix
        length = cursor.read_uint16()
        address = cursor.position
        return SettingsEntry(address=address, value=cls(_decode_utf8(cursor, length)))

    def write_payload(self, writer: Writer) -> None:
        write_string(writer, self.value, 'Text value')

    def validate(self) -> None:
        self.parse(self.value)

    @classmethod
    def parse(cls, raw: str) -> TextValue:
        try:
            encoded = raw.encode('utf-8')
        except UnicodeEncodeError as e:
            raise ParseError(f'Text is not valid UTF-8: {e.reason}') from e
        if len(encoded) > MAX_TEXT_LENGTH:
            raise PayloadTooLarge('Text value', len(encoded), MAX_TEXT_LENGTH)
        return cls(raw)

    def format(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class BytesValue(TypedValue):
    value: bytes

    TAG = TAG_BYTES
    KIND = 'byte list'

    @classmethod
    def read(cls, cursor: ByteCursor) -> SettingsEntry:
        # Address points past the u32 length prefix
        length = cursor.read_uint32()
        address = cursor.position
        return SettingsEntry(address=address, value=cls(cursor.pop_bytes(length)))

    def write_payload(self, writer: Writer) -> None:
        if len(self.value) > MAX_BYTES_LENGTH:
            raise PayloadTooLarge('Bytes value', len(self.value), MAX_BYTES_LENGTH)
        writer.write_uint32(len(self.value))
        writer.write_bytes(self.value)

    @classmethod
    def parse(cls, raw: str) -> BytesValue:
        raise UnsupportedOperation('Modifying byte list values is not supported')

    def format(self) -> str:
        return '[' + ', '.join(f'{b:X}' for b in self.value) + ']'


VALUE_TYPES: dict[int, type[TypedValue]] = {
    kind.TAG: kind for kind in (BoolValue, UInt32Value, UInt64Value, Float32Value, TextValue, BytesValue)
}


@dataclass
class SettingsEntry:
    """A typed value and the file offset its payload was decoded from."""

    address: int
    value: TypedValue

    def format(self) -> str:
        return f'{self.value.format()}@[addr:{self.address:X}]'


def read_entry(cursor: ByteCursor) -> tuple[str, SettingsEntry]:
    """Read one `Key Tag Payload` record."""
    key = read_string(cursor)
    tag_offset = cursor.position
    tag = cursor.pop_byte()
    kind = VALUE_TYPES.get(tag)
    if kind is None:
        # Payload length is unknown, nothing after this point can be trusted
        raise UnknownTypeTag(tag_offset, tag)
    return key, kind.read(cursor)


def write_entry(writer: Writer, key: str, entry: SettingsEntry) -> None:
    """Write one `Key Tag Payload` record. The address is never written."""
    write_string(writer, key, 'Key')
    entry.value.write(writer)


def read_string(cursor: ByteCursor) -> str:
    """Read a u16 length-prefixed UTF-8 string (keys and Text payloads)."""
    length = cursor.read_uint16()
    return _decode_utf8(cursor, length)


def write_string(writer: Writer, value: str, what: str = 'String') -> None:
    """Write a u16 length-prefixed UTF-8 string."""
    encoded = value.encode('utf-8')
    if len(encoded) > MAX_TEXT_LENGTH:
        raise PayloadTooLarge(what, len(encoded), MAX_TEXT_LENGTH)
    writer.write_uint16(len(encoded))
    writer.write_bytes(encoded)


def _decode_utf8(cursor: ByteCursor, length: int) -> str:
    start = cursor.position
    data = cursor.pop_bytes(length)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidUtf8(start + e.start, e.reason) from e


def parse_bool(raw: str) -> bool:
    """Parse a boolean literal such as `on`, `No` or `1`."""
    lower = raw.lower()
    if lower in FALSE_LITERALS:
        return False
    if lower in TRUE_LITERALS:
        return True
    raise InvalidBooleanLiteral(raw)


def parse_unsigned(raw: str, maximum: int, kind: str = 'positive integer') -> int:
    """Parse a decimal unsigned integer that must fit in [0, maximum]."""
    if not _UNSIGNED_PATTERN.fullmatch(raw):
        raise InvalidNumericLiteral(raw, kind)
    value = int(raw)
    if value > maximum:
        raise InvalidNumericLiteral(raw, kind)
    return value


def parse_float32(raw: str) -> float:
    """Parse a decimal float and round it to 32-bit precision.

    Magnitudes past the 32-bit range saturate to infinity.
    """
    # float() tolerates surrounding whitespace and digit underscores
    if raw != raw.strip() or '_' in raw:
        raise InvalidNumericLiteral(raw, 'floating point')
    try:
        value = float(raw)
    except ValueError as e:
        raise InvalidNumericLiteral(raw, 'floating point') from e
    try:
        return struct.unpack('>f', struct.pack('>f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def format_float32(value: float) -> str:
    """Shortest decimal text that reads back as the same 32-bit float.

    Digits are written out positionally, never in exponent notation.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    packed = struct.pack('>f', value)
    text = repr(value)
    for precision in range(1, 10):
        candidate = f'{value:.{precision}g}'
        try:
            # Rounded candidates near the 32-bit maximum can overflow
            if struct.pack('>f', float(candidate)) == packed:
                text = candidate
                break
        except OverflowError:
            continue
    return format(Decimal(text), 'f')
