#!/usr/bin/env python3
"""Example icon source that reads icons from a local directory."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from urllib.parse import urlparse

from webapp_bundler import bundle_webapp
from webapp_bundler.adapters.icon_sources import EXTENSION_MIMES
from webapp_bundler.errors import IconSourceError
from webapp_bundler.icons.model import Icon


class DirectoryIconSource:
    """Look up ``<host>.<ext>`` files instead of fetching the site.

    Parameters
    ----------
    root : Path
        Directory holding icons named after site hosts.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def infer(self, url: str, preferred_formats: Sequence[str]) -> Icon | None:
        """Return the first icon file for the URL host in preference order.

        Raises
        ------
        IconSourceError
            If a matching file exists but cannot be read.
        """
        host = urlparse(url).hostname or ""
        for ext in preferred_formats:
            path = self.root / f"{host}.{ext}"
            if not path.is_file():
                continue
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise IconSourceError(f"Failed to read icon {path}: {exc}") from exc
            return Icon.from_bytes(str(path), data, EXTENSION_MIMES.get(ext, ""), ext)
        return None


def main() -> None:
    """Bundle ``argv[1]`` using icons from ``argv[2]``."""
    if len(sys.argv) != 3:
        raise SystemExit("usage: custom_icon_source.py EXECUTABLE ICON_DIR")
    result = bundle_webapp(
        sys.argv[1],
        "Local Icons",
        "https://www.example.com",
        "outputs/dist",
        platform="darwin",
        packer="native",
        icon_source=DirectoryIconSource(Path(sys.argv[2])),
    )
    print(f"bundle: {result.bundle_path}")
    print(f"icon: {result.icon_path or '<none>'}")


if __name__ == "__main__":
    main()
