"""Template sources: the directory-tree abstraction discovery and compilation read from.

A source addresses files by POSIX paths relative to its own base, so the
same tree yields the same paths (and identifiers) on every platform.

- :class:`DirectorySource` reads a directory on the local filesystem.
- :class:`PackageSource` reads files shipped inside an importable package
  via :mod:`importlib.resources` (wheels, zipapps, editable installs).
"""

from __future__ import annotations

import errno
import fnmatch
import os
import posixpath
from collections.abc import Iterator
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class TemplateSource(Protocol):
    """Read-only view of a template tree."""

    def walk(self, top: str) -> Iterator[tuple[str, bool]]:
        """Yield ``(path, is_dir)`` for *top* and every descendant.

        *top* comes first; children follow in lexical order, depth first.
        Raises :class:`OSError` (with ``filename`` set) on traversal failure.
        """
        ...

    def list_files(self, directory: str, pattern: str = "*") -> list[str]:
        """Return the immediate child files of *directory* matching *pattern*, sorted."""
        ...

    def read_text(self, path: str) -> str:
        """Return the UTF-8 contents of the file at *path*."""
        ...


def _join(parent: str, name: str) -> str:
    return name if parent in ("", ".") else posixpath.join(parent, name)


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


class DirectorySource:
    """Template tree rooted at a directory on the local filesystem."""

    def __init__(self, base: Path | str = ".") -> None:
        self.base = Path(base)

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.base)!r})"

    def _resolve(self, path: str) -> Path:
        return self.base / path if path not in ("", ".") else self.base

    def walk(self, top: str) -> Iterator[tuple[str, bool]]:
        start = self._resolve(top)
        if start.is_dir():
            yield top, True
            yield from self._walk_children(top)
        elif start.is_file():
            yield top, False
        else:
            raise _not_found(top)

    def _walk_children(self, directory: str) -> Iterator[tuple[str, bool]]:
        try:
            with os.scandir(self._resolve(directory)) as it:
                entries = sorted(((e.name, e.is_dir()) for e in it), key=lambda e: e[0])
        except OSError as exc:
            raise OSError(exc.errno, exc.strerror, directory) from exc

        for name, is_dir in entries:
            path = _join(directory, name)
            yield path, is_dir
            if is_dir:
                yield from self._walk_children(path)

    def list_files(self, directory: str, pattern: str = "*") -> list[str]:
        try:
            with os.scandir(self._resolve(directory)) as it:
                names = [e.name for e in it if e.is_file() and fnmatch.fnmatchcase(e.name, pattern)]
        except OSError as exc:
            raise OSError(exc.errno, exc.strerror, directory) from exc
        return [_join(directory, name) for name in sorted(names)]

    def read_text(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")


class PackageSource:
    """Template tree shipped as package data inside an importable package."""

    def __init__(self, package: str) -> None:
        self.package = package

    def __repr__(self) -> str:
        return f"PackageSource({self.package!r})"

    def _resolve(self, path: str) -> Traversable:
        node = resources.files(self.package)
        for part in path.split("/"):
            if part not in ("", "."):
                node = node.joinpath(part)
        return node

    def walk(self, top: str) -> Iterator[tuple[str, bool]]:
        start = self._resolve(top)
        if start.is_dir():
            yield top, True
            yield from self._walk_children(top, start)
        elif start.is_file():
            yield top, False
        else:
            raise _not_found(top)

    def _walk_children(self, directory: str, node: Traversable) -> Iterator[tuple[str, bool]]:
        for child in sorted(node.iterdir(), key=lambda c: c.name):
            path = _join(directory, child.name)
            is_dir = child.is_dir()
            yield path, is_dir
            if is_dir:
                yield from self._walk_children(path, child)

    def list_files(self, directory: str, pattern: str = "*") -> list[str]:
        node = self._resolve(directory)
        if not node.is_dir():
            raise _not_found(directory)
        names = [
            c.name for c in node.iterdir() if c.is_file() and fnmatch.fnmatchcase(c.name, pattern)
        ]
        return [_join(directory, name) for name in sorted(names)]

    def read_text(self, path: str) -> str:
        node = self._resolve(path)
        if not node.is_file():
            raise _not_found(path)
        return node.read_text(encoding="utf-8")
