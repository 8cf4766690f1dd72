"""Filesystem adapters implementing the ``FileSystem`` port."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


class LocalFileSystem:
    """Operating-system filesystem.

    Parameters
    ----------
    chunk_size : int, default=1 MiB
        Buffer size used for streamed copies.
    """

    def __init__(self, chunk_size: int = 1 << 20) -> None:
        self._chunk_size = chunk_size

    def makedirs(self, path: Path) -> None:
        """Create ``path`` with parents, accepting existing directories."""
        path.mkdir(mode=0o755, parents=True, exist_ok=True)

    def exists(self, path: Path) -> bool:
        """Return whether ``path`` exists."""
        return path.exists()

    def read_bytes(self, path: Path) -> bytes:
        """Return the content of ``path``."""
        return path.read_bytes()

    def write_bytes(self, path: Path, data: bytes, mode: int = 0o644) -> None:
        """Write ``data`` to ``path`` and apply ``mode``."""
        with path.open("wb") as handle:
            handle.write(data)
        os.chmod(path, mode)

    def copy_file(self, source: Path, destination: Path, mode: int = 0o644) -> int:
        """Stream-copy ``source`` into ``destination`` and apply ``mode``."""
        with source.open("rb") as src, destination.open("wb") as dst:
            shutil.copyfileobj(src, dst, self._chunk_size)
            copied = dst.tell()
        os.chmod(destination, mode)
        return copied
