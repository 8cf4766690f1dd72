"""Fixtures shared by unit tests."""

from __future__ import annotations

import pytest

from tests.unit_tests.helpers import MemoryFileSystem


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Provide an isolated in-memory filesystem with a source executable."""
    fs = MemoryFileSystem()
    fs.add_file("src/target/binary.exe", b"\x7fELF-binary-payload")
    return fs
