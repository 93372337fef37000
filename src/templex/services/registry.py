"""Registry: compile every discovered template once, execute by identifier.

INVARIANT: build is all-or-nothing. A registry only exists once every plan
compiled; after that it is read-only, so ``execute`` may run concurrently
from many callers as long as each passes its own sink.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, TextIO

from templex.config.models import TemplexConfig
from templex.domain.discovery import scan
from templex.domain.errors import CompileError, DiscoveryError, NotFoundError, RenderError
from templex.domain.plans import CompositionPlan
from templex.infrastructure.engine import Executable, JinjaEngine, TemplateEngine
from templex.infrastructure.filesystem import DirectorySource, TemplateSource

logger = logging.getLogger(__name__)


class Registry:
    """Read-only mapping of template identifiers to compiled templates.

    Construct with :func:`build` (or :meth:`Registry.build`).
    """

    def __init__(
        self,
        templates: Mapping[str, Executable],
        plans: Mapping[str, CompositionPlan] | None = None,
    ) -> None:
        self._templates = MappingProxyType(dict(templates))
        self._plans = MappingProxyType(dict(plans or {}))

    @classmethod
    def build(
        cls,
        source: TemplateSource | Path | str,
        directory: str = ".",
        config: TemplexConfig | None = None,
        *,
        engine: TemplateEngine | None = None,
    ) -> Registry:
        return build(source, directory, config, engine=engine)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._templates))

    def __len__(self) -> int:
        return len(self._templates)

    def names(self) -> list[str]:
        """All registered identifiers, sorted."""
        return sorted(self._templates)

    def get_plan(self, name: str) -> CompositionPlan:
        """The composition plan *name* was compiled from."""
        try:
            return self._plans[name]
        except KeyError:
            raise NotFoundError(name) from None

    def render(self, name: str, data: Any = None) -> str:
        """Render *name* with *data* and return the output.

        Raises:
            NotFoundError: *name* is not registered.
            RenderError: The engine failed while rendering.
        """
        template = self._templates.get(name)
        if template is None:
            raise NotFoundError(name)
        try:
            return template.render(data)
        except Exception as exc:
            raise RenderError(name, exc) from exc

    def execute(self, name: str, sink: TextIO, data: Any = None) -> None:
        """Render *name* with *data* into *sink*.

        Output is written in one call after rendering succeeded, so a failed
        lookup or render leaves *sink* untouched.
        """
        sink.write(self.render(name, data))


def _compile(
    plan: CompositionPlan,
    source: TemplateSource,
    engine: TemplateEngine,
    config: TemplexConfig,
) -> Executable:
    unit = engine.new_unit(plan.identifier, config.functions)

    for include_dir in plan.include_dirs:
        try:
            partials = source.list_files(include_dir)
        except OSError as exc:
            raise DiscoveryError(include_dir, exc) from exc
        try:
            unit.add_partials(partials)
        except Exception as exc:
            raise CompileError([f"{include_dir}/*"], exc) from exc

    try:
        return unit.compile(plan.files)
    except Exception as exc:
        raise CompileError(plan.files, exc) from exc


def build(
    source: TemplateSource | Path | str,
    directory: str = ".",
    config: TemplexConfig | None = None,
    *,
    engine: TemplateEngine | None = None,
) -> Registry:
    """Discover every template under *directory* and compile it.

    Args:
        source: Template source, or a filesystem path wrapped in
            :class:`DirectorySource`.
        directory: Scan root, relative to *source*.
        config: Discovery and engine options; defaults to :class:`TemplexConfig`.
        engine: Compile engine; defaults to a :class:`JinjaEngine` over *source*.

    Raises:
        DiscoveryError: The tree could not be walked or listed.
        CompileError: The engine rejected a source.
    """
    if config is None:
        config = TemplexConfig()
    if isinstance(source, (str, Path)):
        source = DirectorySource(source)
    if engine is None:
        engine = JinjaEngine(
            source,
            autoescape=config.autoescape,
            strict_undefined=config.strict_undefined,
            trim_blocks=config.trim_blocks,
            lstrip_blocks=config.lstrip_blocks,
        )

    plans = scan(source, directory, include_dir=config.include_dir, layout=config.layout)

    templates: dict[str, Executable] = {}
    by_name: dict[str, CompositionPlan] = {}
    for plan in plans:
        previous = by_name.get(plan.identifier)
        if previous is not None:
            if config.fail_on_duplicate:
                msg = f"identifier {plan.identifier!r} also derived from {previous.leaf}"
                raise DiscoveryError(plan.leaf, msg)
            logger.warning(
                "Duplicate template identifier %r: %s replaces %s",
                plan.identifier,
                plan.leaf,
                previous.leaf,
            )

        templates[plan.identifier] = _compile(plan, source, engine, config)
        by_name[plan.identifier] = plan
        logger.debug(
            "Compiled %s from %d layouts and %d include dirs",
            plan.identifier,
            len(plan.layouts),
            len(plan.include_dirs),
        )

    return Registry(templates, by_name)
