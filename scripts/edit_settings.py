#!/usr/bin/env python3
"""
Read or edit a settings.bin file.

Usage: uv run python scripts/edit_settings.py path/to/settings.bin --show-all
"""

import sys

from settings_editor.cli import main

if __name__ == '__main__':
    sys.exit(main())
