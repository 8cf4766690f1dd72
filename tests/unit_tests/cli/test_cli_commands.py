"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

import webapp_bundler
from webapp_bundler.adapters import packers
from webapp_bundler.application.results import BundleResult, Diagnostic
from webapp_bundler.cli import cli as cli_module
from webapp_bundler.errors import FatalAssemblyError, UnsupportedPlatformError

runner = CliRunner()


@pytest.fixture
def executable(tmp_path: Path) -> Path:
    path = tmp_path / "webview"
    path.write_bytes(b"binary")
    return path


def _result(tmp_path: Path, diagnostics: tuple[Diagnostic, ...] = ()) -> BundleResult:
    contents = tmp_path / "dist" / "Example.app" / "Contents"
    return BundleResult(
        bundle_path=contents.parent,
        executable_path=contents / "MacOS" / "webview",
        config_path=contents / "MacOS" / "config.json",
        manifest_path=contents / "Info.plist",
        platform="darwin",
        diagnostics=diagnostics,
    )


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "bundle" in result.output
    assert "doctor" in result.output
    assert "config" in result.output


def test_bundle_forwards_options(
    tmp_path: Path, executable: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Ensure the bundle command forwards flags to the API layer."""
    captured: dict[str, Any] = {}

    def fake_bundle(**kwargs: Any) -> BundleResult:
        captured.update(kwargs)
        return _result(tmp_path)

    monkeypatch.setattr(webapp_bundler, "bundle_webapp", fake_bundle)
    result = runner.invoke(
        cli_module.app,
        [
            "bundle",
            "example.com",
            "--title",
            "Example",
            "--executable",
            str(executable),
            "--output",
            str(tmp_path / "dist"),
            "--no-icon",
            "--platform",
            "darwin",
            "--packer",
            "Native",
            "--multi-resolution",
            "--strict-icon",
            "--web-inspector",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Bundled:" in result.output
    assert captured == {
        "executable": executable,
        "title": "Example",
        "url": "example.com",
        "destination": tmp_path / "dist",
        "infer_icon": False,
        "debug": True,
        "platform": "darwin",
        "packer": "native",
        "multi_resolution": True,
        "strict_icon": True,
    }


def test_bundle_prints_diagnostics(
    tmp_path: Path, executable: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Report icon diagnostics without failing the command."""
    diagnostic = Diagnostic(stage="icon", error_type="IconNotFoundError", message="no icon")
    monkeypatch.setattr(
        webapp_bundler, "bundle_webapp", lambda **_: _result(tmp_path, (diagnostic,))
    )
    result = runner.invoke(
        cli_module.app,
        ["bundle", "https://example.com", "--title", "Example", "--executable", str(executable)],
    )
    assert result.exit_code == 0
    assert "icon: IconNotFoundError: no icon" in result.output


@pytest.mark.parametrize(
    ("error", "exit_code"),
    [
        (FatalAssemblyError("creating executable: denied"), 2),
        (UnsupportedPlatformError("windows"), 3),
        (RuntimeError("boom"), 1),
    ],
)
def test_bundle_error_exit_codes(
    executable: Path,
    monkeypatch: pytest.MonkeyPatch,
    error: Exception,
    exit_code: int,
) -> None:
    """Map bundle errors to their exit codes with a readable message."""

    def fail(**_: Any) -> BundleResult:
        raise error

    monkeypatch.setattr(webapp_bundler, "bundle_webapp", fail)
    result = runner.invoke(
        cli_module.app,
        ["bundle", "example.com", "--title", "Example", "--executable", str(executable)],
    )
    assert result.exit_code == exit_code
    assert f"✗ {type(error).__name__}:" in result.output
    assert "Traceback" not in result.output


def test_bundle_debug_prints_traceback(
    executable: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Show the traceback when the global debug flag is set."""

    def fail(**_: Any) -> BundleResult:
        raise FatalAssemblyError("disk full")

    monkeypatch.setattr(webapp_bundler, "bundle_webapp", fail)
    result = runner.invoke(
        cli_module.app,
        ["--debug", "bundle", "example.com", "--title", "Example", "--executable", str(executable)],
    )
    assert result.exit_code == 2
    assert "Traceback" in result.output


def test_bundle_rejects_unknown_packer(executable: Path) -> None:
    """Reject packer names outside the supported set."""
    result = runner.invoke(
        cli_module.app,
        [
            "bundle",
            "example.com",
            "--title",
            "Example",
            "--executable",
            str(executable),
            "--packer",
            "magick",
        ],
    )
    assert result.exit_code != 0
    assert "Unknown packer" in result.output


def test_bundle_requires_existing_executable(tmp_path: Path) -> None:
    """Fail argument validation for a missing executable."""
    result = runner.invoke(
        cli_module.app,
        ["bundle", "example.com", "--title", "Example", "--executable", str(tmp_path / "nope")],
    )
    assert result.exit_code != 0


def test_bundle_real_native_bundle(tmp_path: Path, executable: Path) -> None:
    """Build a real bundle without network access."""
    result = runner.invoke(
        cli_module.app,
        [
            "bundle",
            "example.com",
            "--title",
            "Example",
            "--executable",
            str(executable),
            "--output",
            str(tmp_path / "dist"),
            "--platform",
            "darwin",
            "--no-icon",
        ],
    )
    assert result.exit_code == 0, result.output
    macos = tmp_path / "dist" / "Example.app" / "Contents" / "MacOS"
    assert (macos / "webview").read_bytes() == b"binary"
    assert (macos / "config.json").is_file()


def test_config_prints_document(tmp_path: Path) -> None:
    """Print the validated runtime configuration."""
    path = tmp_path / "config.json"
    path.write_text('{"Title": "Example", "URL": "https://www.example.com", "Debug": true}')
    result = runner.invoke(cli_module.app, ["config", str(path)])
    assert result.exit_code == 0
    assert "Title: Example" in result.output
    assert "URL: https://www.example.com" in result.output
    assert "Debug: true" in result.output


def test_config_rejects_invalid_document(tmp_path: Path) -> None:
    """Exit with an error for malformed documents."""
    path = tmp_path / "config.json"
    path.write_text("{}")
    result = runner.invoke(cli_module.app, ["config", str(path)])
    assert result.exit_code == 1
    assert "ConfigError" in result.output


def test_doctor_reports_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Print versions, registered platforms, and iconutil availability."""
    monkeypatch.setattr(packers, "iconutil_available", lambda: False)
    result = runner.invoke(cli_module.app, ["doctor"])
    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "platforms: darwin" in result.output
    assert "iconutil: <not available>" in result.output
