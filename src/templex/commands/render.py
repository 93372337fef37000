"""Command: render one template to stdout."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING, Any

import click

from templex.commands._base import TemplexCommand

if TYPE_CHECKING:
    from templex.commands._context import AppContext


@click.command(
    cls=TemplexCommand,
    examples="""\
  templex render templates/ profile/view
  templex render templates/ profile/view --data user.json
  echo '{"title": "Hi"}' | templex render templates/ profile/view --data -""",
)
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.argument("name")
@click.option(
    "--data",
    "data_file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="JSON file with the template data ('-' for stdin).",
)
@click.pass_obj
def render(app: AppContext, directory: str, name: str, data_file: IO[str] | None) -> None:
    """Render template NAME from DIRECTORY with optional JSON data."""
    from templex.domain.errors import TemplexError

    data: Any = None
    if data_file is not None:
        try:
            data = json.load(data_file)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON in {data_file.name}: {exc}"
            raise click.BadParameter(msg, param_hint="--data") from exc

    registry = app.build(directory)
    stdout = click.get_text_stream("stdout")
    try:
        registry.execute(name, stdout, data)
    except TemplexError as exc:
        app.fail(exc)
    stdout.flush()
