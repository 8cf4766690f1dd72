"""Platform dispatch table for bundlers."""

from __future__ import annotations

import sys
from collections.abc import Callable
from enum import StrEnum

from webapp_bundler.bundlers.base import Bundler, BundlerDependencies
from webapp_bundler.bundlers.darwin import DarwinBundler
from webapp_bundler.errors import UnsupportedPlatformError
from webapp_bundler.schemas import BundleRequest

type BundlerFactory = Callable[[BundleRequest, BundlerDependencies], Bundler]


class Platform(StrEnum):
    """Operating systems a bundle can target."""

    DARWIN = "darwin"
    WINDOWS = "windows"
    LINUX = "linux"

    @classmethod
    def parse(cls, value: str | Platform) -> Platform:
        """Parse a platform identifier.

        Raises
        ------
        UnsupportedPlatformError
            If ``value`` names no known platform.
        """
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise UnsupportedPlatformError(str(value)) from exc


def host_platform(system: str | None = None) -> Platform:
    """Map ``sys.platform`` (or ``system``) to a ``Platform``."""
    name = system if system is not None else sys.platform
    if name == "darwin":
        return Platform.DARWIN
    if name in {"win32", "cygwin"}:
        return Platform.WINDOWS
    if name.startswith("linux"):
        return Platform.LINUX
    raise UnsupportedPlatformError(name)


def _placeholder(platform: Platform) -> BundlerFactory:
    def factory(request: BundleRequest, dependencies: BundlerDependencies) -> Bundler:
        del request, dependencies
        raise UnsupportedPlatformError(platform.value)

    return factory


class BundlerRegistry:
    """Registry mapping platforms to bundler factories."""

    def __init__(self) -> None:
        self._factories: dict[Platform, BundlerFactory] = {}
        self._placeholders: set[Platform] = set()

    def register(self, platform: Platform, factory: BundlerFactory) -> None:
        """Register ``factory`` for ``platform``, replacing any placeholder."""
        self._factories[platform] = factory
        self._placeholders.discard(platform)

    def register_placeholder(self, platform: Platform) -> None:
        """Register a platform that is known but not implemented yet."""
        self._factories[platform] = _placeholder(platform)
        self._placeholders.add(platform)

    def names(self) -> list[str]:
        """Return registered platform names, placeholders included.

        Returns
        -------
        list[str]
            Sorted list of platform names.
        """
        return sorted(platform.value for platform in self._factories)

    def implemented(self) -> list[str]:
        """Return names of platforms with a working bundler."""
        return sorted(
            platform.value
            for platform in self._factories
            if platform not in self._placeholders
        )

    def select(
        self,
        platform: Platform | str,
        request: BundleRequest,
        dependencies: BundlerDependencies | None = None,
    ) -> Bundler:
        """Create the bundler registered for ``platform``.

        No filesystem access happens here, so an unsupported platform is
        reported before anything is written.

        Raises
        ------
        UnsupportedPlatformError
            If the platform is unknown, unregistered, or a placeholder.
        """
        resolved = Platform.parse(platform)
        try:
            factory = self._factories[resolved]
        except KeyError as exc:
            raise UnsupportedPlatformError(resolved.value) from exc
        return factory(request, dependencies or BundlerDependencies())


def create_default_registry() -> BundlerRegistry:
    """Create the registry with built-in bundlers.

    Returns
    -------
    BundlerRegistry
        ``darwin`` implemented; ``windows`` and ``linux`` as placeholders.
    """
    registry = BundlerRegistry()
    registry.register(Platform.DARWIN, DarwinBundler)
    registry.register_placeholder(Platform.WINDOWS)
    registry.register_placeholder(Platform.LINUX)
    return registry
