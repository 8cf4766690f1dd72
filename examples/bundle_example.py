#!/usr/bin/env python3
"""Bundle a placeholder executable into a macOS application and inspect it."""

from __future__ import annotations

import plistlib
import sys
from pathlib import Path

from webapp_bundler import bundle_webapp
from webapp_bundler.config import load_bundle_config


def example_bundle_without_icon() -> None:
    """Bundle offline and check the written layout."""
    print("\n" + "=" * 60)
    print("Example 1: bundle without icon inference")
    print("=" * 60)

    executable = Path("outputs/webview")
    executable.parent.mkdir(exist_ok=True)
    executable.write_bytes(b"#!/bin/sh\necho webview\n")

    result = bundle_webapp(
        executable,
        "Offline Example",
        "example.com",
        "outputs/dist",
        infer_icon=False,
        platform="darwin",
        packer="native",
    )

    config = load_bundle_config(result.config_path)
    if config.url != "https://www.example.com":
        raise SystemExit(f"FAIL: unexpected config URL {config.url!r}.")
    plist = plistlib.loads(result.manifest_path.read_bytes())
    if "CFBundleIconFile" in plist:
        raise SystemExit("FAIL: manifest references an icon that was not written.")
    print(f"PASS: {result.bundle_path}")


def example_bundle_with_icon(url: str) -> None:
    """Bundle with the site's icon packed by the built-in ICNS encoder."""
    print("\n" + "=" * 60)
    print(f"Example 2: bundle with icon inferred from {url}")
    print("=" * 60)

    result = bundle_webapp(
        "outputs/webview",
        "Icon Example",
        url,
        "outputs/dist",
        platform="darwin",
        packer="native",
        multi_resolution=True,
    )
    for diagnostic in result.diagnostics:
        print(f"icon skipped: {diagnostic}")
    if result.has_icon:
        print(f"PASS: {result.icon_path}")
    else:
        print(f"PASS (no icon): {result.bundle_path}")


def main() -> None:
    """Run the offline example and, given a URL argument, the online one."""
    example_bundle_without_icon()
    if len(sys.argv) > 1:
        example_bundle_with_icon(sys.argv[1])
    print("PASS: bundle examples complete.")


if __name__ == "__main__":
    main()
