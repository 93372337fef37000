"""templex — hierarchical template discovery and composition on top of Jinja2."""

from __future__ import annotations

from templex.config.models import TemplexConfig
from templex.domain.discovery import scan
from templex.domain.errors import (
    CompileError,
    DiscoveryError,
    NotFoundError,
    RenderError,
    TemplexError,
)
from templex.domain.plans import CompositionPlan
from templex.infrastructure.filesystem import DirectorySource, PackageSource, TemplateSource
from templex.services.registry import Registry, build

__version__ = "0.1.0"

__all__ = [
    "CompileError",
    "CompositionPlan",
    "DirectorySource",
    "DiscoveryError",
    "NotFoundError",
    "PackageSource",
    "Registry",
    "RenderError",
    "TemplateSource",
    "TemplexConfig",
    "TemplexError",
    "__version__",
    "build",
    "scan",
]
