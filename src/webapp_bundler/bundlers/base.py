"""Bundler protocol and the collaborators injected into bundlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from threading import Event
from typing import Protocol, runtime_checkable

from webapp_bundler.adapters.filesystems import LocalFileSystem
from webapp_bundler.application.options import IconOptions
from webapp_bundler.application.ports import (
    DiagnosticsSink,
    FileSystem,
    IconPacker,
    IconSource,
)
from webapp_bundler.application.results import BundleResult
from webapp_bundler.infrastructure.diagnostics import LoggingDiagnostics


@runtime_checkable
class Bundler(Protocol):
    """Protocol implemented by platform bundlers."""

    platform: str

    def bundle(self, destination: Path) -> BundleResult:
        """Assemble the native package inside ``destination``.

        Parameters
        ----------
        destination : Path
            Directory that receives the package.

        Returns
        -------
        BundleResult
            Paths written and non-fatal diagnostics.
        """


@dataclass
class BundlerDependencies:
    """Collaborators resolved once and handed to a bundler factory.

    ``icon_source`` stays ``None`` when no icon source is configured; bundlers
    then report a missing source instead of fetching anything.
    """

    fs: FileSystem = field(default_factory=LocalFileSystem)
    diagnostics: DiagnosticsSink = field(default_factory=LoggingDiagnostics)
    icon_source: IconSource | None = None
    packer: IconPacker | None = None
    icon_options: IconOptions = field(default_factory=IconOptions)
    cancel_event: Event | None = None
