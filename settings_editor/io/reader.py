"""Consuming byte cursor with offset tracking for settings file parsing."""

from __future__ import annotations

import struct

from settings_editor.errors import UnexpectedEndOfInput


class ByteCursor:
    """Big-endian byte cursor that owns both the buffer and the read offset.

    Every read goes through pop_byte/pop_bytes, so running past the end of the
    data always raises UnexpectedEndOfInput at the offset where it happened.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0

    @property
    def position(self) -> int:
        """Current read offset."""
        return self._position

    @property
    def remaining(self) -> int:
        """Bytes remaining to read."""
        return len(self._data) - self._position

    def pop_byte(self) -> int:
        """Consume a single byte."""
        if self._position >= len(self._data):
            raise UnexpectedEndOfInput(self._position, 1, 0)
        byte = self._data[self._position]
        self._position += 1
        return byte

    def pop_bytes(self, count: int) -> bytes:
        """Consume `count` raw bytes."""
        if count > self.remaining:
            raise UnexpectedEndOfInput(self._position, count, self.remaining)
        result = self._data[self._position : self._position + count]
        self._position += count
        return result

    def read_uint8(self) -> int:
        """Read unsigned 8-bit integer."""
        return self.pop_byte()

    def read_uint16(self) -> int:
        """Read unsigned 16-bit integer (big-endian)."""
        return struct.unpack('>H', self.pop_bytes(2))[0]

    def read_uint32(self) -> int:
        """Read unsigned 32-bit integer (big-endian)."""
        return struct.unpack('>I', self.pop_bytes(4))[0]

    def read_uint64(self) -> int:
        """Read unsigned 64-bit integer (big-endian)."""
        return struct.unpack('>Q', self.pop_bytes(8))[0]

    def read_float32(self) -> float:
        """Read 32-bit IEEE-754 float (big-endian)."""
        return struct.unpack('>f', self.pop_bytes(4))[0]
