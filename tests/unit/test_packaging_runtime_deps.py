"""Tests for parity between package imports and declared runtime deps."""

from __future__ import annotations

import ast
import re
import sys
import tomllib
from pathlib import Path

# Distribution names whose import name differs
_IMPORT_NAMES = {
    "tomli-w": "tomli_w",
}


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _requirement_name(requirement: str) -> str:
    match = re.match(r"[A-Za-z0-9_.-]+", requirement)
    assert match is not None
    return match.group(0).lower().replace("_", "-")


def _imported_top_level_modules(package_dir: Path) -> set[str]:
    modules: set[str] = set()
    for source in package_dir.rglob("*.py"):
        tree = ast.parse(source.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                modules.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                modules.add(node.module.split(".")[0])
    return modules


def test_pyproject_declares_every_third_party_import() -> None:
    """Every non-stdlib import in sensus/ must be a declared dependency."""
    repo_root = _repo_root()
    pyproject_data = tomllib.loads((repo_root / "pyproject.toml").read_text(encoding="utf-8"))
    declared = {
        _IMPORT_NAMES.get(name, name)
        for name in (
            _requirement_name(requirement)
            for requirement in pyproject_data["project"]["dependencies"]
        )
    }

    imported = _imported_top_level_modules(repo_root / "sensus")
    third_party = {
        name
        for name in imported
        if name not in sys.stdlib_module_names and name not in {"sensus", "__future__"}
    }

    missing = sorted(third_party - declared)
    assert not missing, f"Imported but not declared in pyproject.toml: {missing}"


def test_declared_runtime_deps_are_used() -> None:
    repo_root = _repo_root()
    pyproject_data = tomllib.loads((repo_root / "pyproject.toml").read_text(encoding="utf-8"))
    imported = _imported_top_level_modules(repo_root / "sensus")

    for requirement in pyproject_data["project"]["dependencies"]:
        name = _requirement_name(requirement)
        assert _IMPORT_NAMES.get(name, name) in imported, f"'{name}' is declared but never imported"
