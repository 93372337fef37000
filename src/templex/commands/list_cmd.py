"""Command: list the templates a directory composes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from templex.commands._base import TemplexCommand

if TYPE_CHECKING:
    from templex.commands._context import AppContext


@click.command(
    "list",
    cls=TemplexCommand,
    examples="""\
  templex list templates/
  templex list templates/ --scan-only
  templex --json list templates/
  templex --layout base.html --include-dir partials list templates/""",
)
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--scan-only", is_flag=True, help="Discover templates without compiling them.")
@click.pass_obj
def list_cmd(app: AppContext, directory: str, scan_only: bool) -> None:
    """List template identifiers with their layouts and include directories."""
    from templex.output.renderers import render_plans

    if scan_only:
        plans = sorted(app.scan(directory), key=lambda p: p.identifier)
    else:
        registry = app.build(directory)
        plans = [registry.get_plan(name) for name in registry.names()]

    click.echo(render_plans(plans, json_output=app.settings.json_output))
