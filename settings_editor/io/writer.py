"""Binary writer for settings file serialization."""

from __future__ import annotations

import io
import struct


class Writer:
    """Append-only big-endian binary writer."""

    def __init__(self) -> None:
        self._buffer = io.BytesIO()

    def to_bytes(self) -> bytes:
        """Get all written data as bytes."""
        return self._buffer.getvalue()

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buffer.write(data)

    def write_uint8(self, value: int) -> None:
        """Write unsigned 8-bit integer."""
        self._buffer.write(struct.pack('>B', value))

    def write_uint16(self, value: int) -> None:
        """Write unsigned 16-bit integer (big-endian)."""
        self._buffer.write(struct.pack('>H', value))

    def write_uint32(self, value: int) -> None:
        """Write unsigned 32-bit integer (big-endian)."""
        self._buffer.write(struct.pack('>I', value))

    def write_uint64(self, value: int) -> None:
        """Write unsigned 64-bit integer (big-endian)."""
        self._buffer.write(struct.pack('>Q', value))

    def write_float32(self, value: float) -> None:
        """Write 32-bit IEEE-754 float (big-endian)."""
        self._buffer.write(struct.pack('>f', value))
