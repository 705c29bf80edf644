"""Binary IO utilities for settings file parsing."""

from settings_editor.io.reader import ByteCursor
from settings_editor.io.writer import Writer

__all__ = ['ByteCursor', 'Writer']
