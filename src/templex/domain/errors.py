"""Error kinds raised while building and executing a template registry.

Every error carries the path(s) or identifier needed to pinpoint the failure.
Underlying exceptions are chained (``raise ... from exc``) and exposed as
``cause`` so callers can branch on kind and still inspect the root failure.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class TemplexError(Exception):
    """Base class for all templex errors."""

    code = "TEMPLEX_ERROR"

    def to_dict(self) -> dict[str, Any]:
        """Log/JSON serialization."""
        return {"code": self.code, "message": str(self)}


class DiscoveryError(TemplexError):
    """Traversal or listing of the template tree failed."""

    code = "DISCOVERY_ERROR"

    def __init__(self, path: str, cause: BaseException | str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f'error while scanning "{path}": {cause}')

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "path": self.path}


class CompileError(TemplexError):
    """The engine rejected one or more template sources."""

    code = "COMPILE_ERROR"

    def __init__(self, paths: Sequence[str], cause: BaseException) -> None:
        self.paths = tuple(paths)
        self.cause = cause
        super().__init__(f"error while parsing {list(self.paths)}: {cause}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "paths": list(self.paths)}


class NotFoundError(TemplexError):
    """No template is registered under the requested identifier."""

    code = "NOT_FOUND"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"template not found: {name}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "name": self.name}


class RenderError(TemplexError):
    """The engine failed while rendering a registered template."""

    code = "RENDER_ERROR"

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f'error executing template "{name}": {cause}')

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "name": self.name}
