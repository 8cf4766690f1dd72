"""Diagnostics sink implementations."""

from __future__ import annotations

import logging

from webapp_bundler.application.results import Diagnostic

logger = logging.getLogger(__name__)


class LoggingDiagnostics:
    """Log non-fatal bundling problems as warnings and keep them in memory."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self.entries: list[Diagnostic] = []

    def record(self, stage: str, error: Exception) -> None:
        """Log and remember ``error`` raised during ``stage``."""
        entry = Diagnostic(stage=stage, error_type=type(error).__name__, message=str(error))
        self.entries.append(entry)
        self._log.warning("%s failed (continuing without it): %s", stage, error)
