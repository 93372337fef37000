"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TEMPLEX_*`` prefix
  3. TOML file    — ``templex.toml`` discovered via walk-up
  4. Code defaults — baked into :class:`TemplexConfig`

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`templex.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from templex.config.discovery import find_config
from templex.config.models import DEFAULT_INCLUDE_DIR, DEFAULT_LAYOUT, TemplexConfig, plain_name


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``templex.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class TemplexSettings(BaseSettings):
    """Settings for the ``templex`` CLI.

    Merges CLI flags, environment variables, ``templex.toml`` and
    code-baked defaults into a single frozen object.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TEMPLEX_",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Discovery / engine options ---
    layout: str = DEFAULT_LAYOUT
    include_dir: str = DEFAULT_INCLUDE_DIR
    autoescape: bool | None = None
    strict_undefined: bool = True
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    fail_on_duplicate: bool = False

    @field_validator("layout", "include_dir")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        return plain_name(value)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> TemplexSettings:
        """Construct settings from a CLI invocation.

        Discovers ``templex.toml`` via walk-up from *start* (or uses the
        explicit *config_path*). Flags passed as ``None`` are treated as
        unset so they don't shadow env vars or TOML values. Invalid values
        from any layer raise :class:`click.ClickException`.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        flags = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            msg = f"Invalid settings: {problems}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None

    def to_config(self, functions: dict[str, Callable[..., Any]] | None = None) -> TemplexConfig:
        """The :class:`TemplexConfig` these settings describe."""
        return TemplexConfig(
            layout=self.layout,
            include_dir=self.include_dir,
            functions=functions or {},
            autoescape=self.autoescape,
            strict_undefined=self.strict_undefined,
            trim_blocks=self.trim_blocks,
            lstrip_blocks=self.lstrip_blocks,
            fail_on_duplicate=self.fail_on_duplicate,
        )
