"""Template discovery: one walk over a tree, one composition plan per leaf.

The walk classifies every entry (see :func:`classify_entry`), then layouts
and include directories are ordered shallow to deep by path length. For
entries on a single ancestor chain that share a base name this is exactly
nesting depth, which is the only case a plan ever mixes.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterator
from typing import Protocol

from templex.domain.errors import DiscoveryError
from templex.domain.plans import CompositionPlan, build_plan, classify_entry, normalize_root
from templex.domain.types import EntryKind

logger = logging.getLogger(__name__)


class TreeWalker(Protocol):
    """Anything that can walk a template tree (see ``templex.infrastructure.filesystem``)."""

    def walk(self, top: str) -> Iterator[tuple[str, bool]]:
        """Yield ``(path, is_dir)`` for *top* and every descendant."""
        ...


def scan(
    source: TreeWalker,
    root: str = ".",
    *,
    include_dir: str = "includes",
    layout: str = "layout.html",
) -> list[CompositionPlan]:
    """Walk *root* once and return the composition plan of every leaf template.

    Raises:
        DiscoveryError: The walk failed; carries the offending path.
    """
    root = normalize_root(root)
    include_dir = posixpath.normpath(include_dir)

    include_dirs: list[str] = []
    layouts: list[str] = []
    templates: list[str] = []

    try:
        for path, is_dir in source.walk(root):
            kind = classify_entry(path, is_dir, include_dir=include_dir, layout=layout)
            if kind is EntryKind.INCLUDE_DIR:
                include_dirs.append(path)
            elif kind is EntryKind.LAYOUT:
                layouts.append(path)
            elif kind is EntryKind.TEMPLATE:
                templates.append(path)
    except OSError as exc:
        path = exc.filename if isinstance(exc.filename, str) else root
        raise DiscoveryError(path, exc) from exc

    # sorted() is stable: equal lengths keep discovery order
    layouts = sorted(layouts, key=len)
    include_dirs = sorted(include_dirs, key=len)

    plans = [
        build_plan(leaf, root=root, include_dirs=include_dirs, layouts=layouts)
        for leaf in templates
    ]
    logger.debug(
        "Scanned %s: %d templates, %d layouts, %d include dirs",
        root,
        len(templates),
        len(layouts),
        len(include_dirs),
    )
    return plans
