#!/usr/bin/env python3
"""
Import boundaries for src/bamboohr_mcp/core/:
- core never imports the MCP server / transport side
- only core/client.py talks HTTP (httpx)
"""

from __future__ import annotations

import ast
import importlib.util
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = REPO_ROOT / "src"
CORE_DIR = SRC_DIR / "bamboohr_mcp" / "core"
HTTP_OWNER = CORE_DIR / "client.py"

FORBIDDEN_PREFIXES = (
    "starlette",
    "uvicorn",
    "mcp",
    "fastmcp",
    "bamboohr_mcp.server",
)
HTTP_PREFIXES = ("httpx",)


def _matches(module: str, prefixes: tuple[str, ...]) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".") for prefix in prefixes
    )


def _package_of(path: Path) -> str | None:
    """Dotted package a file under src/ belongs to, for relative imports."""
    try:
        parts = path.resolve().relative_to(SRC_DIR).parts
    except ValueError:
        return None
    return ".".join(parts[:-1]) or None


def _imported_modules(tree: ast.AST, package: str | None = None) -> list[str]:
    found: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if not node.level:
                if node.module:
                    found.append(node.module)
                continue
            if package is None:
                continue  # relative import outside a known package
            base = importlib.util.resolve_name(
                "." * node.level + (node.module or ""), package
            )
            if node.module:
                found.append(base)
            else:
                found.extend(f"{base}.{alias.name}" for alias in node.names)
    return found


def scan_file(path: Path, package: str | None = None) -> list[str]:
    if package is None:
        package = _package_of(path)
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for mod in _imported_modules(tree, package):
        if _matches(mod, FORBIDDEN_PREFIXES):
            errors.append(f"{path}: forbidden import '{mod}'")
        elif _matches(mod, HTTP_PREFIXES) and path != HTTP_OWNER:
            errors.append(f"{path}: HTTP import '{mod}' outside {HTTP_OWNER.name}")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(CORE_DIR.rglob("*.py")):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
