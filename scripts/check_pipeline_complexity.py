#!/usr/bin/env python3
"""Simple complexity guard for bundle orchestrators."""

from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TARGETS = (
    ROOT / "src/webapp_bundler/application/use_cases.py",
    ROOT / "src/webapp_bundler/bundlers/darwin.py",
)
MAX_STATEMENTS = 40


def _functions(tree: ast.Module) -> list[ast.FunctionDef]:
    found: list[ast.FunctionDef] = []
    for node in tree.body:
        if isinstance(node, ast.FunctionDef):
            found.append(node)
        elif isinstance(node, ast.ClassDef):
            found.extend(item for item in node.body if isinstance(item, ast.FunctionDef))
    return found


def main() -> None:
    """Fail when orchestrator functions exceed the statement threshold."""
    violations: list[str] = []
    for target in TARGETS:
        tree = ast.parse(target.read_text(encoding="utf-8"))
        for node in _functions(tree):
            stmt_count = len(node.body)
            if stmt_count > MAX_STATEMENTS:
                violations.append(f"{target.name}:{node.name}: {stmt_count} statements")
    if violations:
        raise SystemExit(
            "Pipeline complexity threshold exceeded:\n"
            + "\n".join(f"- {v}" for v in violations)
        )
    print("Pipeline complexity check passed.")


if __name__ == "__main__":
    main()
