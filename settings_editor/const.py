"""
Constants for the settings.bin editor.
"""

# Type tags written before every value payload
TAG_BOOL = 0
TAG_UINT32 = 1
TAG_UINT64 = 2
TAG_FLOAT32 = 3
TAG_TEXT = 4
TAG_BYTES = 5

# Largest payloads the length prefixes can describe
MAX_TEXT_LENGTH = 0xFFFF  # u16 prefix, also used for keys
MAX_BYTES_LENGTH = 0xFFFFFFFF  # u32 prefix

MAX_UINT32 = 0xFFFFFFFF
MAX_UINT64 = 0xFFFFFFFFFFFFFFFF

# Accepted boolean literals (compared lowercased)
TRUE_LITERALS = ('1', 'true', 't', 'yes', 'on', 'active')
FALSE_LITERALS = ('0', 'false', 'f', 'nil', 'no', 'off', 'inactive')

# Logging
LOG_LEVEL_ENV = 'SETTINGS_EDITOR_LOG_LEVEL'
DEFAULT_LOG_LEVEL = 'WARNING'

USAGE = f"""\
SYNTAX:
settings-editor path/to/settings.bin --read <key> ...
  Print the value and byte address of <key>

settings-editor path/to/settings.bin --write <key> <value> ...
  Set <key> to <value>

settings-editor path/to/settings.bin --show-all
  Prints all keys, values, and addresses found in the file

settings-editor path/to/settings.bin --pretend --write <key> <value>
  The --pretend flag modifies the settings in memory only, and does not modify the file on disk

The above argument groups can be used multiple times in a sequence, as desired.
  -r => alias for --read
  -w => alias for --write

Valid boolean values for "true": {' '.join(TRUE_LITERALS)}
Valid boolean values for "false": {' '.join(FALSE_LITERALS)}"""
