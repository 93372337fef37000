"""Composition plans and the pure path rules that build them.

All paths handled here are POSIX strings relative to a template source,
so identifiers come out ``/``-separated regardless of the host OS.
"""

from __future__ import annotations

import posixpath

from pydantic import BaseModel

from templex.domain.types import EntryKind


class CompositionPlan(BaseModel):
    """Ordered recipe used to compile one executable template.

    Attributes:
        identifier: Key the compiled template is registered under.
        include_dirs: Include directories applying to the leaf, shallow first.
        layouts: Layout files applying to the leaf, shallow first.
        leaf: The executable template itself.
    """

    model_config = {"frozen": True}

    identifier: str
    include_dirs: tuple[str, ...] = ()
    layouts: tuple[str, ...] = ()
    leaf: str

    @property
    def files(self) -> tuple[str, ...]:
        """Layout chain followed by the leaf, in compile order."""
        return (*self.layouts, self.leaf)


def normalize_root(root: str) -> str:
    """Clean a scan root the way paths yielded by a source are cleaned."""
    return posixpath.normpath(root.replace("\\", "/") or ".")


def classify_entry(path: str, is_dir: bool, *, include_dir: str, layout: str) -> EntryKind:
    """Classify one visited entry by name alone.

    Files directly inside an include directory are ignored here; they are
    only reached later by listing the include directory itself.
    """
    name = posixpath.basename(path)
    if is_dir:
        return EntryKind.INCLUDE_DIR if name == include_dir else EntryKind.IGNORED

    if posixpath.basename(posixpath.dirname(path)) == include_dir:
        return EntryKind.IGNORED
    if name == layout:
        return EntryKind.LAYOUT
    return EntryKind.TEMPLATE


def is_ancestor(directory: str, path: str) -> bool:
    """True if *directory* is *path*'s parent directory or one of its ancestors."""
    if directory in ("", "."):
        return True
    return path.startswith(directory.rstrip("/") + "/")


def derive_identifier(leaf: str, root: str) -> str:
    """Strip the scan root and the extension: ``root/profile/view.html`` -> ``profile/view``."""
    ident = leaf
    if root not in ("", "."):
        prefix = root.rstrip("/") + "/"
        if ident.startswith(prefix):
            ident = ident[len(prefix) :]
    stem, _ext = posixpath.splitext(ident)
    return stem


def build_plan(
    leaf: str,
    *,
    root: str,
    include_dirs: list[str],
    layouts: list[str],
) -> CompositionPlan:
    """Assemble the plan for *leaf* from pre-sorted include dirs and layouts."""
    return CompositionPlan(
        identifier=derive_identifier(leaf, root),
        include_dirs=tuple(d for d in include_dirs if is_ancestor(posixpath.dirname(d), leaf)),
        layouts=tuple(lay for lay in layouts if is_ancestor(posixpath.dirname(lay), leaf)),
        leaf=leaf,
    )
