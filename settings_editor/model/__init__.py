"""Settings file model classes."""

from settings_editor.model.settings_file import FileHeader, SettingsFile, decode_file, encode_table
from settings_editor.model.settings_table import SettingsTable
from settings_editor.model.values import (
    BoolValue,
    BytesValue,
    Float32Value,
    SettingsEntry,
    TextValue,
    TypedValue,
    UInt32Value,
    UInt64Value,
)

__all__ = [
    'BoolValue',
    'BytesValue',
    'FileHeader',
    'Float32Value',
    'SettingsEntry',
    'SettingsFile',
    'SettingsTable',
    'TextValue',
    'TypedValue',
    'UInt32Value',
    'UInt64Value',
    'decode_file',
    'encode_table',
]
