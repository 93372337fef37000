"""Root CLI group for templex with global flags and command registration."""

from __future__ import annotations

import click

from templex import __version__
from templex.commands import register_commands
from templex.commands._base import TemplexGroup
from templex.commands._context import AppContext
from templex.config.settings import TemplexSettings


@click.group(cls=TemplexGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="templex")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--layout", default=None, help="Layout filename (default: layout.html).")
@click.option("--include-dir", default=None, help="Include directory name (default: includes).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    layout: str | None,
    include_dir: str | None,
) -> None:
    """templex — compose hierarchical templates from a directory tree."""
    ctx.ensure_object(dict)
    settings = TemplexSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
        layout=layout,
        include_dir=include_dir,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
