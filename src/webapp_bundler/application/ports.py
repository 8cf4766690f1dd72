"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from webapp_bundler.icons.model import Icon


class IconSource(Protocol):
    """Find the best available icon for a web address."""

    def infer(self, url: str, preferred_formats: Sequence[str]) -> Icon | None:
        """Return a candidate icon, or ``None`` when nothing was found."""


class IconPacker(Protocol):
    """Pack a directory of size-named PNG images into one icon container."""

    name: str

    def pack(self, iconset_dir: Path, output_path: Path) -> Path:
        """Write the container to ``output_path`` and return it.

        Raises ``ConversionError`` carrying the tool output on failure.
        """


class FileSystem(Protocol):
    """Filesystem operations used by bundle assembly."""

    def makedirs(self, path: Path) -> None:
        """Create ``path`` and missing parents; existing directories are fine."""

    def exists(self, path: Path) -> bool:
        """Return whether ``path`` exists."""

    def read_bytes(self, path: Path) -> bytes:
        """Return the full content of ``path``."""

    def write_bytes(self, path: Path, data: bytes, mode: int = 0o644) -> None:
        """Create or replace ``path`` with ``data`` and permission ``mode``."""

    def copy_file(self, source: Path, destination: Path, mode: int = 0o644) -> int:
        """Stream-copy ``source`` to ``destination`` and return bytes copied."""


class DiagnosticsSink(Protocol):
    """Receive non-fatal problems encountered while bundling."""

    def record(self, stage: str, error: Exception) -> None:
        """Record ``error`` raised during ``stage``."""
