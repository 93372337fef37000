"""Pydantic configuration models with code-baked defaults.

A registry is built from one explicit :class:`TemplexConfig`; there is no
process-wide default state. ``templex.toml`` (see :mod:`templex.config.settings`)
only ever carries overrides of these defaults.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_LAYOUT = "layout.html"
DEFAULT_INCLUDE_DIR = "includes"


def plain_name(value: str) -> str:
    """Strip surrounding slashes from a layout or include dir name and reject paths."""
    value = value.strip().strip("/")
    if not value or "/" in value or "\\" in value:
        msg = f"must be a single file or directory name, got {value!r}"
        raise ValueError(msg)
    return value


class TemplexConfig(BaseModel):
    """How a template tree is discovered and compiled.

    Attributes:
        layout: Filename of layout files, e.g. ``"layout.html"`` or ``"base.html"``.
        include_dir: Name of partial directories, e.g. ``"includes"`` or ``"inc"``.
        functions: Callables exposed to every template as globals and filters.
        autoescape: Force HTML escaping on/off; ``None`` decides by extension.
        strict_undefined: Fail rendering when the data lacks a referenced field.
        trim_blocks: Jinja2 ``trim_blocks``.
        lstrip_blocks: Jinja2 ``lstrip_blocks``.
        fail_on_duplicate: Treat two leaves deriving the same identifier as a
            build error instead of letting the last one win.
    """

    model_config = {"frozen": True}

    layout: str = DEFAULT_LAYOUT
    include_dir: str = DEFAULT_INCLUDE_DIR
    functions: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    autoescape: bool | None = None
    strict_undefined: bool = True
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    fail_on_duplicate: bool = False

    @field_validator("layout", "include_dir")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        return plain_name(value)
