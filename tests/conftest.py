"""
Pytest configuration and fixtures for the Intcode tests.
"""
from pathlib import Path

import pytest

from intcode.loader import format_program


@pytest.fixture
def program_file(tmp_path):
    """Write program cells to a file and return its path."""

    def _write(cells, name="program.txt"):
        path = Path(tmp_path) / name
        path.write_text(format_program(list(cells)) + "\n", encoding="utf-8")
        return path

    return _write
