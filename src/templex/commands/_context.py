"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Builds registries from the resolved settings and
routes templex errors to stderr with exit code 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

if TYPE_CHECKING:
    from templex.config.settings import TemplexSettings
    from templex.domain.errors import TemplexError
    from templex.domain.plans import CompositionPlan
    from templex.services.registry import Registry


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: TemplexSettings) -> None:
        self.settings = settings

        from templex.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def build(self, directory: str) -> Registry:
        """Build a registry for *directory*, exiting with code 1 on failure."""
        from templex.domain.errors import TemplexError
        from templex.services.registry import build

        try:
            return build(directory, config=self.settings.to_config())
        except TemplexError as exc:
            self.fail(exc)

    def scan(self, directory: str) -> list[CompositionPlan]:
        """Discover plans under *directory* without compiling them."""
        from templex.domain.discovery import scan
        from templex.domain.errors import TemplexError
        from templex.infrastructure.filesystem import DirectorySource

        config = self.settings.to_config()
        try:
            return scan(
                DirectorySource(directory),
                include_dir=config.include_dir,
                layout=config.layout,
            )
        except TemplexError as exc:
            self.fail(exc)

    def fail(self, error: TemplexError) -> NoReturn:
        """Report *error* on stderr and exit with code 1."""
        from templex.output.renderers import render_error

        click.echo(render_error(error, json_output=self.settings.json_output), err=True)
        raise SystemExit(1)
