"""Application-layer use-cases and option objects."""

from __future__ import annotations

from threading import Event

from webapp_bundler.application.ports import (
    DiagnosticsSink,
    FileSystem,
    IconPacker,
    IconSource,
)
from webapp_bundler.application.options import BundleOptions, IconOptions
from webapp_bundler.application.results import BundleResult, Diagnostic
from webapp_bundler.types import PackerKind, PathLikeStr


def build_bundle_options(
    *,
    infer_icon: bool = True,
    debug: bool = False,
    packer: PackerKind = "auto",
    multi_resolution: bool = False,
    strict_icon: bool = False,
) -> BundleOptions:
    """Build typed bundle options via lazy use-case import."""
    from webapp_bundler.application.use_cases import build_bundle_options as _impl

    return _impl(
        infer_icon=infer_icon,
        debug=debug,
        packer=packer,
        multi_resolution=multi_resolution,
        strict_icon=strict_icon,
    )


def bundle_app(
    *,
    executable: PathLikeStr,
    title: str,
    url: str,
    destination: PathLikeStr,
    options: BundleOptions,
    platform: str | None = None,
    icon_source: IconSource | None = None,
    packer: IconPacker | None = None,
    fs: FileSystem | None = None,
    diagnostics: DiagnosticsSink | None = None,
    cancel_event: Event | None = None,
) -> BundleResult:
    """Build one application bundle via lazy use-case import."""
    from webapp_bundler.application.use_cases import bundle_app as _impl

    return _impl(
        executable=executable,
        title=title,
        url=url,
        destination=destination,
        options=options,
        platform=platform,
        icon_source=icon_source,
        packer=packer,
        fs=fs,
        diagnostics=diagnostics,
        cancel_event=cancel_event,
    )


__all__ = [
    "BundleOptions",
    "IconOptions",
    "BundleResult",
    "Diagnostic",
    "build_bundle_options",
    "bundle_app",
]
