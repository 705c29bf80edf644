"""
Read, write and list values in a settings.bin file.

Usage:
    uv run settings-editor path/to/settings.bin --read <key> ...
    uv run settings-editor path/to/settings.bin --write <key> <value> ...
    uv run settings-editor path/to/settings.bin --show-all
    uv run settings-editor path/to/settings.bin --pretend --write <key> <value>

Operation groups may be repeated and mixed in any order after the path.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from settings_editor.const import USAGE
from settings_editor.errors import SettingsError
from settings_editor.log import log
from settings_editor.model.settings_file import SettingsFile


class Operation(Enum):
    READ = 'read'
    WRITE = 'write'


class State(Enum):
    IDLE = 'idle'
    AWAITING_KEY = 'awaiting key'
    AWAITING_VALUE = 'awaiting value'


OPERATION_TOKENS = {
    '--read': Operation.READ,
    '-r': Operation.READ,
    '--write': Operation.WRITE,
    '-w': Operation.WRITE,
}

FLAG_TOKENS = {
    '--show-all': 'show_all',
    '--pretend': 'pretend',
    '--verbose': 'verbose',
    '-v': 'verbose',
}


class UsageError(ValueError):
    """The operation tokens do not form complete read/write groups."""


@dataclass
class OperationGroup:
    operation: Operation
    key: str
    value: str | None = None


class OperationParser:
    """State machine turning the tokens after the path into operation groups.

    IDLE -> AWAITING_KEY on --read/--write, AWAITING_KEY -> IDLE (read) or
    AWAITING_VALUE (write), AWAITING_VALUE -> IDLE. Operation and flag tokens
    are only recognized while IDLE, and are case-insensitive.
    """

    def __init__(self) -> None:
        self.state = State.IDLE
        self.groups: list[OperationGroup] = []
        self.flags: set[str] = set()
        self._operation: Operation | None = None
        self._key: str | None = None

    def feed(self, token: str) -> None:
        if self.state is State.IDLE:
            lower = token.lower()
            if lower in FLAG_TOKENS:
                self.flags.add(FLAG_TOKENS[lower])
            elif lower in OPERATION_TOKENS:
                self._operation = OPERATION_TOKENS[lower]
                self.state = State.AWAITING_KEY
            else:
                raise UsageError(f'Unknown operation: {token}')
        elif self.state is State.AWAITING_KEY:
            if self._operation is Operation.READ:
                self.groups.append(OperationGroup(Operation.READ, token))
                self.state = State.IDLE
            else:
                self._key = token
                self.state = State.AWAITING_VALUE
        else:
            self.groups.append(OperationGroup(Operation.WRITE, self._key, token))
            self._key = None
            self.state = State.IDLE

    def parse(self, tokens: list[str]) -> list[OperationGroup]:
        for token in tokens:
            self.feed(token)
        if self.state is State.AWAITING_KEY:
            raise UsageError(f'--{self._operation.value} needs a key')
        if self.state is State.AWAITING_VALUE:
            raise UsageError(f'--write {self._key} needs a value')
        return self.groups


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='settings-editor',
        description='Inspect and edit a settings.bin file',
        epilog=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('path', nargs='?', type=Path, help='Settings file to read (and modify)')
    parser.add_argument(
        'operations',
        nargs=argparse.REMAINDER,
        help='--read KEY, --write KEY VALUE, --show-all, --pretend, --verbose',
    )
    return parser


def run_operations(settings: SettingsFile, groups: list[OperationGroup]) -> None:
    """Apply the operation groups in order, printing the reads."""
    table = settings.table
    try:
        for group in groups:
            if group.operation is Operation.READ:
                entry = table.get(group.key)
                print(f'{group.key}={entry.format()},', end='')
            else:
                table.update(group.key, group.value)
    finally:
        print()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.path is None:
        print(USAGE)
        return 0

    machine = OperationParser()
    try:
        groups = machine.parse(args.operations)
    except UsageError as e:
        parser.error(str(e))

    if 'verbose' in machine.flags:
        log.setLevel(logging.DEBUG)

    path = args.path
    if not path.exists():
        log.error(f'Settings file not found: {path}')
        return 1

    try:
        settings = SettingsFile.load(path)
    except (OSError, SettingsError) as e:
        log.error(f'Failed to load settings file: {e}')
        return 1

    if 'show_all' in machine.flags:
        for key, entry in settings.table.entries():
            print(f'{key}={entry.format()}')

    try:
        run_operations(settings, groups)
    except SettingsError as e:
        log.error(str(e))
        return 1

    if not settings.table.dirty:
        return 0

    if 'pretend' in machine.flags:
        log.info('Pretend mode: the file was not modified')
        return 0

    try:
        settings.save()
    except (OSError, SettingsError) as e:
        log.error(f'Failed to save file: {e}')
        return 1

    print('The file has been modified.')
    return 0
