"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal problem recorded during a bundle operation."""

    stage: str
    error_type: str
    message: str

    def __str__(self) -> str:
        return f"{self.stage}: {self.error_type}: {self.message}"


@dataclass(frozen=True)
class BundleResult:
    """Structured bundle outcome."""

    bundle_path: Path
    executable_path: Path
    config_path: Path
    manifest_path: Path
    platform: str
    icon_path: Path | None = None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def has_icon(self) -> bool:
        """Return whether the icon stage produced an icon file."""
        return self.icon_path is not None
