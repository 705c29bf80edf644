"""In-memory table of decoded settings."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from settings_editor.errors import KeyNotFound, UnsupportedOperation
from settings_editor.log import log
from settings_editor.model.values import SettingsEntry, TypedValue, read_entry, write_entry

if TYPE_CHECKING:
    from settings_editor.io.reader import ByteCursor
    from settings_editor.io.writer import Writer


class SettingsTable:
    """Mapping of setting key to its typed, address-annotated entry.

    Iteration follows insertion order, which is file order unless the file
    repeats a key (the last occurrence wins and keeps the first position).
    Entries are edited in place; nothing is ever inserted or removed after
    decoding.
    """

    def __init__(self, entries: dict[str, SettingsEntry] | None = None) -> None:
        self._entries: dict[str, SettingsEntry] = dict(entries or {})
        self.dirty = False

    @classmethod
    def read(cls, cursor: ByteCursor, count: int) -> SettingsTable:
        """Read `count` entries from the cursor."""
        table = cls()
        for _ in range(count):
            key, entry = read_entry(cursor)
            if key in table._entries:
                log.debug(f'Duplicate key {key!r} at {entry.address:#x}, keeping the later value')
            table._entries[key] = entry
        return table

    def write(self, writer: Writer) -> None:
        """Write all entries in iteration order (without the count header)."""
        for key, entry in self._entries.items():
            write_entry(writer, key, entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def lookup(self, key: str) -> SettingsEntry | None:
        """Return the entry for `key`, or None."""
        return self._entries.get(key)

    def get(self, key: str) -> SettingsEntry:
        """Return the entry for `key`, raising KeyNotFound if it is absent."""
        entry = self._entries.get(key)
        if entry is None:
            raise KeyNotFound(key)
        return entry

    def entries(self) -> list[tuple[str, SettingsEntry]]:
        return list(self._entries.items())

    def update(self, key: str, raw: str) -> None:
        """Parse `raw` as the entry's current type and replace its payload.

        Raises:
            KeyNotFound: no entry named `key`
            InvalidBooleanLiteral, InvalidNumericLiteral: `raw` does not parse
            UnsupportedOperation: the entry holds a byte list
        """
        entry = self.get(key)
        self.set_value(key, entry.value.parse(raw))

    def set_value(self, key: str, value: TypedValue) -> None:
        """Replace the payload of `key` with a value of the same kind."""
        entry = self.get(key)
        if type(value) is not type(entry.value):
            raise UnsupportedOperation(
                f'Cannot store {type(value).__name__} in {key!r}, which holds {type(entry.value).__name__}'
            )
        value.validate()
        log.debug(f'{key}: {entry.value.format()} -> {value.format()}')
        entry.value = value
        self.dirty = True
