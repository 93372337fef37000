"""Click classes shared by templex commands.

Commands take an ``examples`` block (typical directory layouts and flag
combinations) that is printed by ``--examples`` instead of cluttering
``--help``.
"""

from __future__ import annotations

from typing import Any

import click


class TemplexCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    # eager, so a missing DIRECTORY argument does not abort first
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show example invocations and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class TemplexGroup(click.Group):
    """Root group; subcommands are :class:`TemplexCommand` by default."""

    command_class = TemplexCommand
