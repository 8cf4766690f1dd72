"""Shared test doubles for bundler tests."""

from __future__ import annotations

import io
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from PIL import Image

from webapp_bundler.errors import ConversionError
from webapp_bundler.icons.model import Icon


def make_png(
    width: int, height: int, color: tuple[int, int, int, int] = (200, 30, 30, 255)
) -> bytes:
    """Return PNG bytes of a solid-colour image."""
    buffer = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_icon(width: int = 64, height: int = 64) -> Icon:
    """Return a PNG candidate icon as an icon source would."""
    return Icon.from_bytes(
        source="https://example.com/icon.png",
        data=make_png(width, height),
        mime="image/png",
        ext="png",
    )


class MemoryFileSystem:
    """In-memory ``FileSystem`` used to isolate bundle assembly tests."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.modes: dict[str, int] = {}
        self.dirs: set[str] = {"."}
        self.writes = 0

    @staticmethod
    def _key(path: Path | str) -> str:
        return str(PurePosixPath(path))

    def add_file(self, path: Path | str, data: bytes) -> None:
        key = PurePosixPath(self._key(path))
        for parent in key.parents:
            self.dirs.add(str(parent))
        self.files[str(key)] = data

    def makedirs(self, path: Path) -> None:
        key = PurePosixPath(self._key(path))
        if str(key) in self.files:
            raise FileExistsError(str(key))
        for parent in [key, *key.parents]:
            if str(parent) not in self.dirs:
                self.dirs.add(str(parent))
                self.writes += 1

    def exists(self, path: Path) -> bool:
        key = self._key(path)
        return key in self.files or key in self.dirs

    def read_bytes(self, path: Path) -> bytes:
        try:
            return self.files[self._key(path)]
        except KeyError as exc:
            raise FileNotFoundError(str(path)) from exc

    def write_bytes(self, path: Path, data: bytes, mode: int = 0o644) -> None:
        key = PurePosixPath(self._key(path))
        if str(key.parent) not in self.dirs:
            raise FileNotFoundError(str(key.parent))
        self.files[str(key)] = data
        self.modes[str(key)] = mode
        self.writes += 1

    def copy_file(self, source: Path, destination: Path, mode: int = 0o644) -> int:
        data = self.read_bytes(source)
        self.write_bytes(destination, data, mode=mode)
        return len(data)

    def tree(self, root: Path | str) -> set[str]:
        """Return files and directories below ``root`` as relative paths."""
        base = PurePosixPath(self._key(root))
        entries: set[str] = set()
        for key in [*self.files, *self.dirs]:
            path = PurePosixPath(key)
            if path != base and base in path.parents:
                entries.add(str(path.relative_to(base)))
        return entries


class FakeIconSource:
    """Icon source returning a fixed icon or raising a fixed error."""

    def __init__(self, icon: Icon | None = None, error: Exception | None = None) -> None:
        self.icon = icon
        self.error = error
        self.calls: list[tuple[str, list[str]]] = []

    def infer(self, url: str, preferred_formats: Sequence[str]) -> Icon | None:
        self.calls.append((url, list(preferred_formats)))
        if self.error is not None:
            raise self.error
        return self.icon


class FakePacker:
    """Packer recording the iconset it receives."""

    name = "fake"

    def __init__(self, fail_output: str | None = None) -> None:
        self.fail_output = fail_output
        self.iconset_dirs: list[Path] = []
        self.images: dict[str, tuple[int, int]] = {}

    def pack(self, iconset_dir: Path, output_path: Path) -> Path:
        self.iconset_dirs.append(iconset_dir)
        if self.fail_output is not None:
            raise ConversionError("fake packer failed", self.fail_output)
        for png in sorted(iconset_dir.iterdir()):
            with Image.open(png) as image:
                self.images[png.name] = image.size
        output_path.write_bytes(b"icns-fake")
        return output_path


class RecordingDiagnostics:
    """Diagnostics sink keeping ``(stage, error)`` pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, Exception]] = []

    def record(self, stage: str, error: Exception) -> None:
        self.records.append((stage, error))
