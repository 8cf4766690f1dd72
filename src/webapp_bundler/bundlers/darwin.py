"""macOS ``.app`` bundle assembly."""

from __future__ import annotations

import logging
from pathlib import Path

from webapp_bundler.adapters.packers import create_packer
from webapp_bundler.application.results import BundleResult, Diagnostic
from webapp_bundler.bundlers.base import BundlerDependencies
from webapp_bundler.config import CONFIG_FILENAME
from webapp_bundler.errors import (
    BundleCancelledError,
    FatalAssemblyError,
    IconNotFoundError,
    IconPipelineError,
    IconSourceError,
    NoIconSourceError,
)
from webapp_bundler.icons.converter import IconConverter
from webapp_bundler.manifest import MANIFEST_FILENAME, ManifestFields, render_manifest
from webapp_bundler.schemas import BundleConfig, BundleRequest

logger = logging.getLogger(__name__)

ICON_FILENAME = "icon.icns"
ICON_STAGE = "icon"
EXECUTABLE_MODE = 0o755
DOCUMENT_MODE = 0o644


class DarwinBundler:
    """Bundle an executable into a macOS ``<Title>.app`` directory.

    Layout::

        <Title>.app/Contents/Info.plist
        <Title>.app/Contents/MacOS/<executable>
        <Title>.app/Contents/MacOS/config.json
        <Title>.app/Contents/Resources/icon.icns   (when an icon was produced)

    Icon failures are recorded as diagnostics and the bundle is still
    produced, unless ``IconOptions.strict`` is set.

    Parameters
    ----------
    request : BundleRequest
        Validated bundle input.
    dependencies : BundlerDependencies | None, optional
        Filesystem, diagnostics sink, icon source, packer, and options.
    converter : IconConverter | None, optional
        Icon converter; built from the packer and icon options when omitted.
    """

    platform = "darwin"

    def __init__(
        self,
        request: BundleRequest,
        dependencies: BundlerDependencies | None = None,
        converter: IconConverter | None = None,
    ) -> None:
        deps = dependencies or BundlerDependencies()
        self.request = request
        self.fs = deps.fs
        self.diagnostics = deps.diagnostics
        self.icon_source = deps.icon_source
        self.icon_options = deps.icon_options
        self.cancel_event = deps.cancel_event
        if converter is None:
            converter = IconConverter(
                deps.packer or create_packer(deps.icon_options.packer),
                sizes=deps.icon_options.sizes,
                multi_resolution=deps.icon_options.multi_resolution,
            )
        self.converter = converter

    def bundle(self, destination: Path) -> BundleResult:
        """Assemble the ``.app`` bundle inside ``destination``.

        Raises
        ------
        FatalAssemblyError
            If directories, the executable, the config, or the manifest
            cannot be written.
        BundleCancelledError
            If the cancel event is set between stages.
        IconPipelineError
            Only in strict icon mode.
        """
        contents = Path(destination) / self.request.bundle_name / "Contents"
        macos = contents / "MacOS"
        resources = contents / "Resources"

        self._check_cancelled("preparing directories")
        self.prepare(contents, macos, resources)

        self._check_cancelled("creating executable")
        logger.debug("creating executable in %s", macos)
        executable_path = self.create_executable(macos)

        self._check_cancelled("creating config")
        logger.debug("creating config in %s", macos)
        config_path = self.create_config(macos)

        icon_path: Path | None = None
        diagnostics: list[Diagnostic] = []
        if self.request.infer_icon:
            self._check_cancelled("inferring icon")
            logger.debug("inferring icon for %s", self.request.url)
            try:
                icon_path = self.fetch_icon(resources)
            except IconPipelineError as exc:
                if self.icon_options.strict:
                    raise
                self.diagnostics.record(ICON_STAGE, exc)
                diagnostics.append(
                    Diagnostic(stage=ICON_STAGE, error_type=type(exc).__name__, message=str(exc))
                )

        self._check_cancelled("creating Info.plist")
        logger.debug("creating %s in %s", MANIFEST_FILENAME, contents)
        manifest_path = self.create_manifest(
            contents, icon_name=icon_path.name if icon_path is not None else ""
        )
        return BundleResult(
            bundle_path=contents.parent,
            executable_path=executable_path,
            config_path=config_path,
            manifest_path=manifest_path,
            platform=self.platform,
            icon_path=icon_path,
            diagnostics=tuple(diagnostics),
        )

    def prepare(self, *paths: Path) -> None:
        """Create bundle directories; existing directories are accepted."""
        for path in paths:
            try:
                self.fs.makedirs(path)
            except OSError as exc:
                raise FatalAssemblyError(f"creating directory {path}: {exc}") from exc

    def create_executable(self, dest: Path) -> Path:
        """Copy the target executable byte-for-byte into ``dest``."""
        path = dest / self.request.executable_name
        try:
            self.fs.copy_file(self.request.target, path, mode=EXECUTABLE_MODE)
        except OSError as exc:
            raise FatalAssemblyError(
                f"creating executable from {self.request.target}: {exc}"
            ) from exc
        return path

    def create_config(self, dest: Path) -> Path:
        """Write ``config.json`` next to the executable."""
        config = BundleConfig(
            title=self.request.title,
            url=self.request.url,
            debug=self.request.debug,
        )
        path = dest / CONFIG_FILENAME
        try:
            self.fs.write_bytes(path, config.to_json(), mode=DOCUMENT_MODE)
        except OSError as exc:
            raise FatalAssemblyError(f"creating config {path}: {exc}") from exc
        return path

    def fetch_icon(self, dest: Path) -> Path:
        """Infer, convert, and write the bundle icon into ``dest``.

        Raises
        ------
        IconPipelineError
            If no source is configured, nothing was found, or conversion fails.
        """
        if self.icon_source is None:
            raise NoIconSourceError("no icon source available")
        try:
            candidate = self.icon_source.infer(
                self.request.url, list(self.icon_options.preferred_formats)
            )
        except IconPipelineError:
            raise
        except Exception as exc:
            raise IconSourceError(f"inferring icon: {exc}") from exc
        if candidate is None:
            raise IconNotFoundError(f"could not infer icon for {self.request.url}")
        logger.debug("inferred icon: %s", candidate.source)

        converted = self.converter.convert(candidate, cancel_event=self.cancel_event)
        logger.debug("icon converted (%d bytes)", converted.size)

        path = dest / ICON_FILENAME
        try:
            self.fs.write_bytes(path, converted.data, mode=DOCUMENT_MODE)
        except OSError as exc:
            raise FatalAssemblyError(f"writing icon {path}: {exc}") from exc
        return path

    def create_manifest(self, dest: Path, icon_name: str = "") -> Path:
        """Render ``Info.plist`` into ``dest``."""
        fields = ManifestFields(
            executable_name=self.request.executable_name,
            bundle_name=self.request.title,
            icon_name=icon_name,
        )
        path = dest / MANIFEST_FILENAME
        try:
            self.fs.write_bytes(path, render_manifest(fields), mode=DOCUMENT_MODE)
        except OSError as exc:
            raise FatalAssemblyError(f"creating manifest {path}: {exc}") from exc
        return path

    def _check_cancelled(self, stage: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise BundleCancelledError(f"bundle cancelled before {stage}")
