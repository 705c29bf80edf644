"""SettingsFile - top-level entry point for settings file operations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from settings_editor.io.reader import ByteCursor
from settings_editor.io.writer import Writer
from settings_editor.log import log
from settings_editor.model.settings_table import SettingsTable


@dataclass
class FileHeader:
    """File header structure (4 bytes): the number of entries that follow."""

    entry_count: int  # uint32

    @classmethod
    def read(cls, cursor: ByteCursor) -> FileHeader:
        """Read FileHeader from cursor."""
        return cls(entry_count=cursor.read_uint32())

    def write(self, writer: Writer) -> None:
        """Write FileHeader to writer."""
        writer.write_uint32(self.entry_count)


def decode_file(data: bytes) -> SettingsTable:
    """Decode a whole settings file.

    Any decode error propagates; a partially read table is never returned.
    """
    cursor = ByteCursor(data)
    header = FileHeader.read(cursor)
    log.debug(f'Decoding {header.entry_count} entries from {len(data)} bytes')

    table = SettingsTable.read(cursor, header.entry_count)

    if cursor.remaining:
        log.warning(f'Ignoring {cursor.remaining} trailing bytes after the last entry at {cursor.position:#x}')

    return table


def encode_table(table: SettingsTable) -> bytes:
    """Serialize a table into settings file bytes.

    The entry count is the table size at encode time and length prefixes are
    recomputed from the current payloads.
    """
    writer = Writer()
    FileHeader(entry_count=len(table)).write(writer)
    table.write(writer)
    return writer.to_bytes()


@dataclass
class SettingsFile:
    """A decoded settings file and the path it came from.

    Provides high-level load/save operations.
    """

    table: SettingsTable
    path: Path | None = None

    @classmethod
    def load(cls, path: Path) -> SettingsFile:
        """Read and decode a settings file.

        Args:
            path: Path to the settings file

        Returns:
            Parsed SettingsFile
        """
        path = Path(path)
        data = path.read_bytes()
        log.debug(f'Read {len(data)} bytes from {path}')
        return cls(table=decode_file(data), path=path)

    @classmethod
    def from_bytes(cls, data: bytes) -> SettingsFile:
        """Parse a settings file from raw bytes."""
        return cls(table=decode_file(data))

    def to_bytes(self) -> bytes:
        """Serialize the table back into the wire format."""
        return encode_table(self.table)

    def save(self, path: Path | None = None) -> Path:
        """Overwrite the file on disk with the encoded table.

        Args:
            path: Output file path (default: the path the file was loaded from)

        Returns:
            The path written to
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError('No path to save to')
        data = self.to_bytes()
        target.write_bytes(data)
        log.debug(f'Wrote {len(data)} bytes to {target}')
        return target
