"""Shared pytest fixtures and test helpers for templex tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

# Mirrors the reference tree the layout/include rules were designed around:
# three layout levels, two include levels, leaves at two depths.
SITE_TREE: dict[str, str] = {
    "layout.html": (
        '{% include "header.html" %}layout {% block content %}{% endblock %}'
        '{% include "footer.html" %}\n'
    ),
    "includes/header.html": "header ",
    "includes/footer.html": "footer ",
    "profile/layout.html": (
        "{% block content %}profile {% block profile %}{% endblock %}{% endblock %}"
    ),
    "profile/view.html": "{% block profile %}view {{ data }}{% endblock %}",
    "profile/edit.html": "{% block profile %}edit {{ data }}{% endblock %}",
    "profile/payments/layout.html": (
        "{% block profile %}payments_layout {% block payments %}{% endblock %}{% endblock %}"
    ),
    "profile/payments/methods.html": (
        '{% block payments %}methods {% include "method.html" %}{% endblock %}'
    ),
    "profile/payments/includes/method.html": "method ",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative_path: content}`` below *root* and return *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary ``templates/`` directory holding :data:`SITE_TREE`."""
    return write_tree(tmp_path / "templates", SITE_TREE)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in *tmp_path* with no config discovery leaking in from the host."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TEMPLEX_CONFIG", raising=False)
    for var in ("LAYOUT", "INCLUDE_DIR", "AUTOESCAPE", "STRICT_UNDEFINED", "FAIL_ON_DUPLICATE"):
        monkeypatch.delenv(f"TEMPLEX_{var}", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo ``configure_logging`` calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    templex = logging.getLogger("templex")
    templex_level = templex.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    templex.setLevel(templex_level)
