"""Exception hierarchy for bundle assembly and the icon pipeline."""

from __future__ import annotations


class BundlerError(Exception):
    """Base error for all bundling failures."""

    exit_code = 1


class FatalAssemblyError(BundlerError):
    """Bundle assembly failed and the bundle is incomplete."""

    exit_code = 2


class UnsupportedPlatformError(BundlerError):
    """No bundler is implemented for the requested platform."""

    exit_code = 3

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"no bundler implemented for platform '{platform}'")


class BundleCancelledError(BundlerError):
    """The caller cancelled the bundle operation."""

    exit_code = 130


class ConfigError(BundlerError):
    """A runtime configuration document is missing or invalid."""


class IconPipelineError(BundlerError):
    """Icon acquisition or conversion failed.

    Bundlers treat this as a diagnostic rather than a fatal error.
    """


class NoIconSourceError(IconPipelineError):
    """Icon inference was requested without an icon source."""


class IconNotFoundError(IconPipelineError):
    """The icon source returned no candidate."""


class IconSourceError(IconPipelineError):
    """The icon source failed while fetching candidates."""


class DecodeError(IconPipelineError):
    """Candidate icon bytes are not a decodable raster image."""


class ResampleError(IconPipelineError):
    """Cropping or resampling the decoded image failed."""


class ConversionError(IconPipelineError):
    """The icon packer failed to produce an icon container."""

    def __init__(self, message: str, output: str = "") -> None:
        self.output = output
        if output:
            message = f"{message}: {output.strip()}"
        super().__init__(message)
