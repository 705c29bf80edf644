"""Reader and editor for binary settings.bin files."""

from settings_editor.model import SettingsFile, SettingsTable, decode_file, encode_table

__all__ = ['SettingsFile', 'SettingsTable', 'decode_file', 'encode_table']
