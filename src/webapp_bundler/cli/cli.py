#!/usr/bin/env python3
"""
webapp_bundler.cli.cli

Typer-based CLI for bundling a web-view executable into a native application.

Examples
--------
Bundle for the host platform, inferring the icon from the site:

    bundle-webapp bundle example.com --title Example --executable ./webview

Build a macOS bundle from a Linux CI host with the built-in ICNS encoder:

    bundle-webapp bundle https://example.com --title Example \\
        --executable ./webview --platform darwin --packer native
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from webapp_bundler.errors import BundlerError

app = typer.Typer(
    name="bundle-webapp",
    help="Bundle a web-view executable into a native application package.",
    no_args_is_help=True,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKER_CHOICES = ("auto", "iconutil", "native")


def _print_bundle_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly bundle error.

    Parameters
    ----------
    exc : Exception
        Exception raised while bundling.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _validate_packer(value: str) -> str:
    """Reject unknown packer names."""
    normalized = value.strip().lower()
    if normalized not in PACKER_CHOICES:
        raise typer.BadParameter(
            f"Unknown packer '{value}'. Choose one of: {', '.join(PACKER_CHOICES)}."
        )
    return normalized


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline progress."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log pipeline stages to stderr.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("bundle")
def bundle_cmd(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Address the application opens."),
    title: str = typer.Option(..., "--title", help="Title of the application."),
    executable: Path = typer.Option(
        ...,
        "--executable",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Web-view executable to bundle.",
    ),
    output: Path = typer.Option(
        Path("./dist"), "--output", help="Directory to put the bundle in."
    ),
    no_icon: bool = typer.Option(False, "--no-icon", help="Skip icon inference."),
    platform: str | None = typer.Option(
        None, "--platform", help="Target platform (darwin, windows, linux). Defaults to host."
    ),
    packer: str = typer.Option(
        "auto",
        "--packer",
        callback=_validate_packer,
        help="Icon packer: auto, iconutil, or native.",
    ),
    multi_resolution: bool = typer.Option(
        False, "--multi-resolution", help="Pack every icon size up to the selected one."
    ),
    strict_icon: bool = typer.Option(
        False, "--strict-icon", help="Fail the bundle when the icon cannot be produced."
    ),
    web_inspector: bool = typer.Option(
        False, "--web-inspector", help="Enable the web inspector in the bundled app."
    ),
) -> None:
    """Bundle an executable that renders URL into a native application.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    url : str
        Target address; bare hosts become ``https://www.<host>``.
    title : str
        Application title and bundle directory name.
    executable : Path
        Executable copied into the bundle.
    output : Path
        Destination directory.

    Notes
    -----
    - Icon failures are reported but do not fail the bundle unless
      ``--strict-icon`` is given.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from webapp_bundler import bundle_webapp

        result = bundle_webapp(
            executable=executable,
            title=title,
            url=url,
            destination=output,
            infer_icon=not no_icon,
            debug=web_inspector,
            platform=platform,
            packer=packer,
            multi_resolution=multi_resolution,
            strict_icon=strict_icon,
        )
        for diagnostic in result.diagnostics:
            typer.echo(f"[yellow]! {diagnostic}[/yellow]", err=True)
        typer.echo(f"[green]✓ Bundled:[/green] {result.bundle_path}")
    except BundlerError as exc:
        raise typer.Exit(code=_print_bundle_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_bundle_error(exc, debug))


@app.command("config")
def config_cmd(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Path to a bundled config.json."
    ),
) -> None:
    """Validate and print a bundled runtime configuration."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from webapp_bundler.config import load_bundle_config

        config = load_bundle_config(path)
    except BundlerError as exc:
        raise typer.Exit(code=_print_bundle_error(exc, debug))
    typer.echo(f"Title: {config.title}")
    typer.echo(f"URL: {config.url}")
    typer.echo(f"Debug: {str(config.debug).lower()}")


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed toolchain versions and platform support."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ["pillow", "httpx", "pydantic", "typer"]:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    from webapp_bundler.adapters.packers import iconutil_available
    from webapp_bundler.bundlers.registry import create_default_registry, host_platform
    from webapp_bundler.errors import UnsupportedPlatformError

    try:
        typer.echo(f"host platform: {host_platform().value}")
    except UnsupportedPlatformError as exc:
        typer.echo(f"host platform: <unsupported: {exc.platform}>")
    registry = create_default_registry()
    typer.echo(f"platforms: {', '.join(registry.implemented())}")
    typer.echo(f"iconutil: {'available' if iconutil_available() else '<not available>'}")


if __name__ == "__main__":
    app()
