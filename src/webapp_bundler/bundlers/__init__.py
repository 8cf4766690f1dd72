"""Platform bundlers and the dispatch registry."""

from .base import Bundler, BundlerDependencies
from .darwin import DarwinBundler
from .registry import BundlerRegistry, Platform, create_default_registry, host_platform

__all__ = [
    "Bundler",
    "BundlerDependencies",
    "BundlerRegistry",
    "DarwinBundler",
    "Platform",
    "create_default_registry",
    "host_platform",
]
