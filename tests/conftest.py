"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from tests.builders import SAMPLE_ENTRIES, build_file


@pytest.fixture()
def sample_data() -> bytes:
    """Settings file holding one entry of every value type."""
    return build_file(*SAMPLE_ENTRIES)


@pytest.fixture()
def settings_path(tmp_path: Path, sample_data: bytes) -> Path:
    """Write the sample settings file to a temporary directory."""
    path = tmp_path / 'settings.bin'
    path.write_bytes(sample_data)
    return path
