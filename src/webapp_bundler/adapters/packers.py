"""Icon packer adapters implementing the ``IconPacker`` port."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path

from webapp_bundler.application.ports import IconPacker
from webapp_bundler.config import iconutil_command
from webapp_bundler.errors import ConversionError
from webapp_bundler.icons.icns import encode_iconset
from webapp_bundler.types import PackerKind

logger = logging.getLogger(__name__)


class IconutilPacker:
    """Pack iconsets with the macOS ``iconutil`` tool.

    Parameters
    ----------
    command : str | None, optional
        Executable to run; defaults to ``WEBAPP_BUNDLER_ICONUTIL`` or
        ``iconutil``.
    timeout : float, default=60.0
        Seconds to wait for the tool before failing.
    """

    name = "iconutil"

    def __init__(self, command: str | None = None, timeout: float = 60.0) -> None:
        self.command = command or iconutil_command()
        self.timeout = timeout

    def pack(self, iconset_dir: Path, output_path: Path) -> Path:
        """Run ``iconutil -c icns`` and return the container path."""
        args = [self.command, "-c", "icns", str(iconset_dir), "-o", str(output_path)]
        logger.debug("running %s", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ConversionError(f"iconutil not found: {self.command}") from exc
        except OSError as exc:
            raise ConversionError(f"cannot run iconutil {self.command}: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            output = exc.output if isinstance(exc.output, str) else ""
            raise ConversionError(
                f"iconutil timed out after {self.timeout}s: {args}", output
            ) from exc
        if completed.returncode != 0:
            raise ConversionError(
                f"iconutil failed with exit code {completed.returncode}: {args}",
                completed.stdout or "",
            )
        if not output_path.is_file():
            raise ConversionError(
                f"iconutil did not produce {output_path}", completed.stdout or ""
            )
        return output_path


class NativeIcnsPacker:
    """Pack iconsets with the built-in ICNS encoder (any host platform)."""

    name = "native"

    def pack(self, iconset_dir: Path, output_path: Path) -> Path:
        """Encode the PNGs in ``iconset_dir`` and write ``output_path``."""
        try:
            output_path.write_bytes(encode_iconset(iconset_dir))
        except (OSError, ValueError) as exc:
            raise ConversionError(f"native ICNS encoding failed: {exc}") from exc
        return output_path


def iconutil_available(command: str | None = None) -> bool:
    """Return whether ``iconutil`` can be run on this host."""
    return sys.platform == "darwin" and shutil.which(command or iconutil_command()) is not None


def create_packer(kind: PackerKind = "auto") -> IconPacker:
    """Create the packer for ``kind``.

    ``auto`` prefers ``iconutil`` on macOS hosts where it is installed and
    falls back to the native encoder elsewhere.

    Raises
    ------
    ValueError
        If ``kind`` is not a known packer.
    """
    if kind == "iconutil":
        return IconutilPacker()
    if kind == "native":
        return NativeIcnsPacker()
    if kind == "auto":
        return IconutilPacker() if iconutil_available() else NativeIcnsPacker()
    raise ValueError(f"unknown icon packer '{kind}'. Use auto, iconutil, or native.")
