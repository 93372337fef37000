"""Subcommand modules for templex.

Provides register_commands() which uses deferred imports to keep
``templex --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from templex.commands.list_cmd import list_cmd
    from templex.commands.render import render

    cli.add_command(list_cmd)
    cli.add_command(render)
