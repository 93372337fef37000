"""Jinja2 adapter behind the compile-unit interface the registry drives.

A compile unit receives sources in two kinds of steps:

- ``add_partials(paths)``: partial templates, addressable by base name
  (``{% include "header.html" %}``). A later step replaces same-named
  partials, so deeper include directories win.
- ``compile(paths)``: the layout chain followed by the leaf. Each source
  after the first extends the one before it, so deeper ``{% block %}``
  definitions override shallower ones.

Every source is compiled eagerly so syntax errors surface when the unit is
built, never at render time. Engine exceptions propagate unchanged; the
service layer wraps them with paths and identifiers.
"""

from __future__ import annotations

import json
import posixpath
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from jinja2 import (
    BaseLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateNotFound,
    Undefined,
    select_autoescape,
)

AUTOESCAPE_EXTENSIONS = ("html", "htm", "xml")

# Chain members live under this prefix so a root-level leaf or layout never
# shadows a partial with the same base name.
CHAIN_PREFIX = "@chain/"


class SourceReader(Protocol):
    def read_text(self, path: str) -> str: ...


class Executable(Protocol):
    def render(self, data: Any) -> str: ...


class CompileUnit(Protocol):
    def add_partials(self, paths: Sequence[str]) -> None: ...

    def compile(self, paths: Sequence[str]) -> Executable: ...


class TemplateEngine(Protocol):
    def new_unit(self, name: str, functions: Mapping[str, Callable[..., Any]]) -> CompileUnit: ...


class _UnitLoader(BaseLoader):
    """Serves a unit's chain members by prefixed path and its partials by base name."""

    def __init__(self, unit: JinjaUnit) -> None:
        self._unit = unit

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str | None, Callable[[], bool]]:
        found = self._unit.lookup(template)
        if found is None:
            raise TemplateNotFound(template)
        text, filename = found
        return text, filename, lambda: True


class JinjaExecutable:
    """A compiled leaf template; safe to render concurrently."""

    def __init__(self, template: Template) -> None:
        self.template = template

    def render(self, data: Any) -> str:
        """Render *data*; a mapping becomes the context, and ``data`` is always bound."""
        context: dict[str, Any] = {"data": data}
        if isinstance(data, Mapping):
            context.update(data)
        return self.template.render(context)


class JinjaUnit:
    """One named Jinja2 environment composing partials, layouts and a leaf."""

    def __init__(self, name: str, source: SourceReader, environment: Environment) -> None:
        self.name = name
        self._source = source
        self._partials: dict[str, str] = {}
        self._chain: dict[str, str] = {}
        self._texts: dict[str, str] = {}
        environment.loader = _UnitLoader(self)
        self.environment = environment

    def lookup(self, template: str) -> tuple[str, str] | None:
        """Return ``(source, filename)`` for a chain member or partial name."""
        if template.startswith(CHAIN_PREFIX):
            text = self._chain.get(template)
            if text is None:
                return None
            return text, template.removeprefix(CHAIN_PREFIX)
        path = self._partials.get(template)
        if path is None:
            return None
        return self._texts[path], path

    def _read(self, path: str) -> str:
        text = self._source.read_text(path)
        self._texts[path] = text
        return text

    def add_partials(self, paths: Sequence[str]) -> None:
        for path in paths:
            name = posixpath.basename(path)
            self.environment.compile(self._read(path), name=name, filename=path)
            self._partials[name] = path

    def compile(self, paths: Sequence[str]) -> JinjaExecutable:
        if not paths:
            msg = "compile needs at least one template"
            raise ValueError(msg)

        parent: str | None = None
        for path in paths:
            text = self._read(path)
            if parent is not None:
                # same line, so error line numbers still match the file
                text = "{% extends " + json.dumps(parent) + " %}" + text
            name = CHAIN_PREFIX + path
            self.environment.compile(text, name=name, filename=path)
            self._chain[name] = text
            parent = name

        return JinjaExecutable(self.environment.get_template(CHAIN_PREFIX + paths[-1]))


class JinjaEngine:
    """Creates Jinja2-backed compile units reading from a template source."""

    def __init__(
        self,
        source: SourceReader,
        *,
        autoescape: bool | None = None,
        strict_undefined: bool = True,
        trim_blocks: bool = False,
        lstrip_blocks: bool = False,
    ) -> None:
        self.source = source
        self.autoescape = autoescape
        self.strict_undefined = strict_undefined
        self.trim_blocks = trim_blocks
        self.lstrip_blocks = lstrip_blocks

    def _environment(self) -> Environment:
        autoescape: bool | Callable[[str | None], bool]
        if self.autoescape is None:
            autoescape = select_autoescape(AUTOESCAPE_EXTENSIONS, default_for_string=False)
        else:
            autoescape = self.autoescape
        return Environment(
            autoescape=autoescape,
            undefined=StrictUndefined if self.strict_undefined else Undefined,
            trim_blocks=self.trim_blocks,
            lstrip_blocks=self.lstrip_blocks,
            keep_trailing_newline=True,
        )

    def new_unit(self, name: str, functions: Mapping[str, Callable[..., Any]]) -> JinjaUnit:
        """Create a unit whose templates can call *functions* as globals or filters."""
        env = self._environment()
        env.globals.update(functions)
        env.filters.update(functions)
        return JinjaUnit(name, self.source, env)
