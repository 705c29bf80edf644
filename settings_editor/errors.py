"""Exceptions raised by the settings codec and table."""

from __future__ import annotations


class SettingsError(Exception):
    """Base class for every settings editor failure."""


class DecodeError(SettingsError, ValueError):
    """The file bytes do not match the settings format.

    Decode errors are fatal: no partial table is ever returned.
    """

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f'{message} (at offset {offset:#x})')
        self.offset = offset


class UnexpectedEndOfInput(DecodeError):
    def __init__(self, offset: int, wanted: int, remaining: int) -> None:
        super().__init__(f'Unexpectedly reached the end of file: wanted {wanted} byte(s), {remaining} remaining', offset)
        self.wanted = wanted
        self.remaining = remaining


class MalformedBoolean(DecodeError):
    def __init__(self, offset: int, byte: int) -> None:
        super().__init__(f'Malformed boolean byte {byte:#04x}', offset)
        self.byte = byte


class InvalidUtf8(DecodeError):
    def __init__(self, offset: int, reason: str) -> None:
        super().__init__(f'Malformed UTF-8 string: {reason}', offset)


class UnknownTypeTag(DecodeError):
    def __init__(self, offset: int, tag: int) -> None:
        super().__init__(f'Unknown type tag {tag}', offset)
        self.tag = tag


class KeyNotFound(SettingsError, LookupError):
    def __init__(self, key: str) -> None:
        super().__init__(f'Key not found: {key}')
        self.key = key


class ParseError(SettingsError, ValueError):
    """A raw CLI value could not be parsed into the entry's type."""


class InvalidBooleanLiteral(ParseError):
    def __init__(self, literal: str) -> None:
        super().__init__(f'Bad boolean: {literal!r}')
        self.literal = literal


class InvalidNumericLiteral(ParseError):
    def __init__(self, literal: str, kind: str) -> None:
        super().__init__(f'Bad {kind}: {literal!r}')
        self.literal = literal
        self.kind = kind


class UnsupportedOperation(SettingsError):
    """The requested edit is not implemented for this value type."""


class PayloadTooLarge(SettingsError, ValueError):
    def __init__(self, what: str, size: int, limit: int) -> None:
        super().__init__(f'{what} is {size} bytes, the length prefix allows at most {limit}')
        self.size = size
        self.limit = limit
