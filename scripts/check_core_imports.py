#!/usr/bin/env python3
"""
Fail if sanity_mcp.core imports the MCP server layer.
The client, models and tool modules must stay usable without a transport.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = REPO_ROOT / "src" / "sanity_mcp"
CORE_DIR = PACKAGE_DIR / "core"

FORBIDDEN_PREFIXES = (
    "mcp.server",
    "fastmcp",
    "sanity_mcp.server",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def _absolute_module(path: Path, node: ast.ImportFrom) -> str:
    """Resolve `from ..x import y` against the file's package."""
    if not node.level:
        return node.module or ""
    package = path.relative_to(PACKAGE_DIR.parent).with_suffix("").parts[:-1]
    base = package[: len(package) - (node.level - 1)]
    return ".".join([*base, node.module] if node.module else base)


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom):
            modules = [_absolute_module(path, node)]
        else:
            continue
        for mod in modules:
            if mod and is_forbidden(mod):
                errors.append(f"{path}:{node.lineno}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(CORE_DIR.rglob("*.py")):
        violations.extend(scan_file(py_file))

    for v in violations:
        print(v, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
