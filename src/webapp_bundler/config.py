"""Runtime configuration document helpers."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import ValidationError

from webapp_bundler.application.ports import FileSystem
from webapp_bundler.errors import ConfigError
from webapp_bundler.schemas import BundleConfig

CONFIG_FILENAME = "config.json"
ICONUTIL_ENV = "WEBAPP_BUNDLER_ICONUTIL"
HTTP_TIMEOUT_ENV = "WEBAPP_BUNDLER_HTTP_TIMEOUT"


def load_bundle_config(path: Path, fs: FileSystem | None = None) -> BundleConfig:
    """Read and validate a ``config.json`` written into a bundle.

    Raises
    ------
    ConfigError
        If the document cannot be read or fails validation.
    """
    try:
        if fs is None:
            raw = path.read_bytes()
        else:
            raw = fs.read_bytes(path)
    except OSError as exc:
        raise ConfigError(f"Unable to read config {path}: {exc}") from exc
    try:
        return BundleConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc


def iconutil_command() -> str:
    """Return the iconutil executable, honouring ``WEBAPP_BUNDLER_ICONUTIL``."""
    return os.getenv(ICONUTIL_ENV, "iconutil")


def http_timeout(default: float = 10.0) -> float:
    """Return the icon fetch timeout from ``WEBAPP_BUNDLER_HTTP_TIMEOUT``."""
    raw = os.getenv(HTTP_TIMEOUT_ENV)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{HTTP_TIMEOUT_ENV} must be a number, got '{raw}'") from exc
    if value <= 0:
        raise ConfigError(f"{HTTP_TIMEOUT_ENV} must be positive, got '{raw}'")
    return value
