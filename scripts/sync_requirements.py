#!/usr/bin/env python3
"""Render requirements.txt from pyproject.toml, or check that it is current.

    uv run python scripts/sync_requirements.py          # rewrite requirements.txt
    uv run python scripts/sync_requirements.py --check  # fail when it is stale
"""

from __future__ import annotations

import argparse
import difflib
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
RUNTIME_EXTRAS = ("test",)
REQUIREMENTS = "requirements.txt"


def collect_requirements(root: Path, extras: tuple[str, ...] = RUNTIME_EXTRAS) -> list[str]:
    """Return base dependencies plus ``extras``, sorted case-insensitively."""
    project = tomllib.loads((root / "pyproject.toml").read_text(encoding="utf-8"))["project"]
    deps = {dep.strip() for dep in project.get("dependencies", []) if dep.strip()}
    optional = project.get("optional-dependencies", {})
    for extra in extras:
        if extra not in optional:
            raise SystemExit(f"pyproject.toml has no optional-dependencies extra '{extra}'")
        deps.update(dep.strip() for dep in optional[extra] if dep.strip())
    return sorted(deps, key=str.lower)


def render_requirements(root: Path, extras: tuple[str, ...] = RUNTIME_EXTRAS) -> str:
    """Return the full requirements.txt text for ``root``."""
    header = [
        f"# Generated from pyproject.toml (base + extras: {','.join(extras)})",
        "# Do not edit manually; run: uv run python scripts/sync_requirements.py",
        "",
    ]
    return "\n".join([*header, *collect_requirements(root, extras)]) + "\n"


def check_requirements(root: Path) -> list[str]:
    """Return a unified diff between requirements.txt and its rendered form."""
    expected = render_requirements(root)
    path = root / REQUIREMENTS
    actual = path.read_text(encoding="utf-8") if path.is_file() else ""
    return list(
        difflib.unified_diff(
            actual.splitlines(keepends=True),
            expected.splitlines(keepends=True),
            fromfile=REQUIREMENTS,
            tofile="pyproject.toml",
        )
    )


def main(argv: list[str] | None = None) -> None:
    """Rewrite requirements.txt, or with ``--check`` fail when it is out of date."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--check", action="store_true", help="Only verify; do not write.")
    parser.add_argument("--root", type=Path, default=ROOT, help=argparse.SUPPRESS)
    args = parser.parse_args(argv)

    if args.check:
        diff = check_requirements(args.root)
        if diff:
            raise SystemExit(
                "requirements.txt is out of sync with pyproject.toml; "
                "run scripts/sync_requirements.py\n" + "".join(diff)
            )
        print("Dependency sync check passed.")
        return

    text = render_requirements(args.root)
    (args.root / REQUIREMENTS).write_text(text, encoding="utf-8")
    print(f"Wrote {len(text.splitlines()) - 3} requirements to {REQUIREMENTS}")


if __name__ == "__main__":
    main()
