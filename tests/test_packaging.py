"""Tests for the installed entry point and package metadata."""

import ast
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def _project() -> dict:
    with (ROOT / "pyproject.toml").open("rb") as fh:
        return tomllib.load(fh)["project"]


def _main_functions() -> dict[str, ast.FunctionDef]:
    tree = ast.parse((ROOT / "main.py").read_text(encoding="utf-8"))
    return {node.name: node for node in tree.body if isinstance(node, ast.FunctionDef)}


def test_console_script_targets_fatal_error_wrapper() -> None:
    assert _project()["scripts"]["lore"] == "main:run"

    run = _main_functions()["run"]
    handlers = [node for node in ast.walk(run) if isinstance(node, ast.ExceptHandler)]
    called = {
        node.func.id
        for node in ast.walk(run)
        if isinstance(node, ast.Call) and isinstance(node.func, ast.Name)
    }
    assert handlers
    assert {"main", "_show_fatal_error"} <= called


def test_metadata_has_no_internal_readme() -> None:
    project = _project()

    assert "readme" not in project
    assert any(dep.startswith("httpx") for dep in project["dependencies"])
