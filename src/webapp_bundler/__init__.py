"""Top-level API for bundling web-view executables into native applications."""

from __future__ import annotations

from threading import Event

from webapp_bundler.application.ports import (
    DiagnosticsSink,
    FileSystem,
    IconPacker,
    IconSource,
)
from webapp_bundler.application.results import BundleResult
from webapp_bundler.types import PackerKind, PathLikeStr

__version__ = "0.1.0"


def bundle_webapp(
    executable: PathLikeStr,
    title: str,
    url: str,
    destination: PathLikeStr,
    *,
    infer_icon: bool = True,
    debug: bool = False,
    platform: str | None = None,
    packer: PackerKind = "auto",
    multi_resolution: bool = False,
    strict_icon: bool = False,
    icon_source: IconSource | None = None,
    icon_packer: IconPacker | None = None,
    fs: FileSystem | None = None,
    diagnostics: DiagnosticsSink | None = None,
    cancel_event: Event | None = None,
) -> BundleResult:
    """Bundle an executable into a native application package.

    Parameters
    ----------
    executable : str | PathLike
        Compiled web-view executable to copy into the bundle.
    title : str
        Display name; also the bundle directory name.
    url : str
        Address the application opens. Bare hosts are normalized to
        ``https://www.<host>``.
    destination : str | PathLike
        Directory that receives ``<title>.app``.
    infer_icon : bool, default=True
        Fetch the site's icon and convert it into ``icon.icns``.
    debug : bool, default=False
        Value of ``Debug`` in the bundled ``config.json``.
    platform : str | None, optional
        Target platform; defaults to the host platform.
    packer : {"auto", "iconutil", "native"}, default="auto"
        Icon container packer used when ``icon_packer`` is not given.
    multi_resolution : bool, default=False
        Pack every canonical size up to the selected one.
    strict_icon : bool, default=False
        Raise icon pipeline errors instead of recording them.

    Returns
    -------
    BundleResult
        Written paths and icon diagnostics.
    """
    from webapp_bundler.application.use_cases import (
        build_bundle_options,
    )
    from webapp_bundler.application.use_cases import bundle_app as _impl

    options = build_bundle_options(
        infer_icon=infer_icon,
        debug=debug,
        packer=packer,
        multi_resolution=multi_resolution,
        strict_icon=strict_icon,
    )
    return _impl(
        executable=executable,
        title=title,
        url=url,
        destination=destination,
        options=options,
        platform=platform,
        icon_source=icon_source,
        packer=icon_packer,
        fs=fs,
        diagnostics=diagnostics,
        cancel_event=cancel_event,
    )


__all__ = ["BundleResult", "bundle_webapp"]
