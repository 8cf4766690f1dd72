"""Typed option objects shared across bundling use-cases."""

from __future__ import annotations

from dataclasses import dataclass, field

from webapp_bundler.icons.sizing import ICONSET_SIZES
from webapp_bundler.types import DEFAULT_ICON_FORMATS, PackerKind


@dataclass(frozen=True)
class IconOptions:
    """Icon pipeline configuration."""

    preferred_formats: tuple[str, ...] = DEFAULT_ICON_FORMATS
    sizes: tuple[int, ...] = ICONSET_SIZES
    multi_resolution: bool = False
    packer: PackerKind = "auto"
    strict: bool = False


@dataclass(frozen=True)
class BundleOptions:
    """Shared bundle options passed through use-cases."""

    infer_icon: bool = True
    debug: bool = False
    icon: IconOptions = field(default_factory=IconOptions)
