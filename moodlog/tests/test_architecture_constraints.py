"""Layering invariants between controllers, services and the model client."""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterator, Set

import pytest

pytestmark = pytest.mark.unit

REPO_ROOT = Path(__file__).resolve().parents[2]
MOODLOG_ROOT = REPO_ROOT / "moodlog"


def _imported_modules(path: Path) -> Iterator[str]:
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            yield node.module
            for alias in node.names:
                yield f"{node.module}.{alias.name}"
        elif isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name


def _violations(pattern: str, predicate) -> Set[str]:
    violating: Set[str] = set()
    for path in MOODLOG_ROOT.rglob(pattern):
        if any(predicate(module) for module in _imported_modules(path)):
            violating.add(str(path.relative_to(REPO_ROOT)))
    return violating


def test_controllers_do_not_touch_models_or_session():
    def _is_persistence(module: str) -> bool:
        return module.endswith(".models") or ".models." in module or module == "moodlog.extensions.db"

    assert _violations("controllers/*.py", _is_persistence) == set()


def test_services_do_not_depend_on_controllers_or_requests():
    def _is_http_layer(module: str) -> bool:
        return ".controllers" in module or module in ("flask.request", "flask.current_app")

    assert _violations("services/*.py", _is_http_layer) == set()


def test_model_client_is_only_built_by_app_factory():
    builders: Set[str] = set()
    for path in MOODLOG_ROOT.rglob("*.py"):
        if "tests" in path.parts:
            continue
        tree = ast.parse(path.read_text())
        for node in ast.walk(tree):
            if not isinstance(node, ast.Call):
                continue
            func = node.func
            name = func.attr if isinstance(func, ast.Attribute) else getattr(func, "id", "")
            if name == "from_config":
                builders.add(str(path.relative_to(REPO_ROOT)))
    assert builders == {"moodlog/__init__.py"}
