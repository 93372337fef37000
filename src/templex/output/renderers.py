"""Rich renderers for registry listings and errors."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from templex.output.console import create_console, get_output

if TYPE_CHECKING:
    from templex.domain.errors import TemplexError
    from templex.domain.plans import CompositionPlan


def render_plans(plans: Sequence[CompositionPlan], *, json_output: bool = False) -> str:
    """Render composition plans as a table, or as a JSON array."""
    if json_output:
        return json.dumps([plan.model_dump(mode="json") for plan in plans], indent=2)

    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Template", style="tx.id", no_wrap=True)
    table.add_column("Layouts", style="tx.layout")
    table.add_column("Includes", style="tx.include")
    table.add_column("File", style="tx.path")
    for plan in plans:
        table.add_row(
            plan.identifier,
            "\n".join(plan.layouts) or "-",
            "\n".join(plan.include_dirs) or "-",
            plan.leaf,
        )

    console = create_console()
    console.print(table)
    return get_output(console).rstrip("\n")


def render_error(error: TemplexError, *, json_output: bool = False) -> str:
    """Render an error for stderr."""
    if json_output:
        return json.dumps({"ok": False, "error": error.to_dict()}, indent=2)

    console = create_console()
    console.print(Text.assemble(("ERROR", "tx.error"), f" {error.code}: {error}"))
    return get_output(console).rstrip("\n")
