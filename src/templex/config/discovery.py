"""Locate ``templex.toml`` for the CLI settings layer.

``TEMPLEX_CONFIG`` pins the file explicitly; otherwise the nearest
``templex.toml`` in the working directory or one of its parents is used.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "templex.toml"
CONFIG_ENV_VAR = "TEMPLEX_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``templex.toml`` that applies to *start* (default: cwd).

    A ``TEMPLEX_CONFIG`` naming a missing file disables discovery and
    yields None rather than falling back to the walk.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
