"""Application use-cases orchestrating bundle workflows."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Event

from pydantic import ValidationError

from webapp_bundler.adapters.icon_sources import HttpIconSource
from webapp_bundler.application.options import BundleOptions, IconOptions
from webapp_bundler.application.ports import (
    DiagnosticsSink,
    FileSystem,
    IconPacker,
    IconSource,
)
from webapp_bundler.application.results import BundleResult
from webapp_bundler.bundlers.base import BundlerDependencies
from webapp_bundler.bundlers.registry import (
    BundlerRegistry,
    Platform,
    create_default_registry,
    host_platform,
)
from webapp_bundler.config import http_timeout
from webapp_bundler.errors import BundlerError
from webapp_bundler.schemas import BundleRequest, HttpIconSourceOptions
from webapp_bundler.types import PackerKind, PathLikeStr

logger = logging.getLogger(__name__)


def build_bundle_options(
    *,
    infer_icon: bool = True,
    debug: bool = False,
    packer: PackerKind = "auto",
    multi_resolution: bool = False,
    strict_icon: bool = False,
) -> BundleOptions:
    """Build typed option object from command/API params."""
    return BundleOptions(
        infer_icon=infer_icon,
        debug=debug,
        icon=IconOptions(
            multi_resolution=multi_resolution,
            packer=packer,
            strict=strict_icon,
        ),
    )


def build_bundle_request(
    *,
    executable: PathLikeStr,
    title: str,
    url: str,
    options: BundleOptions,
) -> BundleRequest:
    """Validate caller input into a ``BundleRequest``.

    Raises
    ------
    BundlerError
        If the parameters fail validation.
    """
    try:
        return BundleRequest(
            target=Path(executable),
            title=title,
            url=url,
            infer_icon=options.infer_icon,
            debug=options.debug,
        )
    except ValidationError as exc:
        raise BundlerError(f"Invalid bundle parameters: {exc}") from exc


def bundle_app(
    *,
    executable: PathLikeStr,
    title: str,
    url: str,
    destination: PathLikeStr,
    options: BundleOptions,
    platform: Platform | str | None = None,
    icon_source: IconSource | None = None,
    packer: IconPacker | None = None,
    fs: FileSystem | None = None,
    diagnostics: DiagnosticsSink | None = None,
    cancel_event: Event | None = None,
    registry: BundlerRegistry | None = None,
) -> BundleResult:
    """Use-case: select the platform bundler and build one bundle.

    The HTTP icon source is used when icon inference is enabled and no
    ``icon_source`` is given.
    """
    request = build_bundle_request(
        executable=executable, title=title, url=url, options=options
    )
    target_platform = host_platform() if platform is None else platform
    if icon_source is None and options.infer_icon:
        icon_source = HttpIconSource(options=HttpIconSourceOptions(timeout=http_timeout()))

    dependencies = BundlerDependencies(icon_source=icon_source, packer=packer)
    if fs is not None:
        dependencies.fs = fs
    if diagnostics is not None:
        dependencies.diagnostics = diagnostics
    dependencies.icon_options = options.icon
    dependencies.cancel_event = cancel_event

    registry = registry or create_default_registry()
    bundler = registry.select(target_platform, request, dependencies)
    logger.debug("bundling %r for %s into %s", request.title, bundler.platform, destination)
    return bundler.bundle(Path(destination))
