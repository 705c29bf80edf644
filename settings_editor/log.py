#!/usr/bin/env python3
import logging
import os

from settings_editor.const import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV


_level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper(), None)
if not isinstance(_level, int):
    _level = logging.WARNING

logging.basicConfig(level=_level, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
log = logging.getLogger('settings_editor')
