"""Entry classification for template tree scans."""

from __future__ import annotations

from enum import StrEnum


class EntryKind(StrEnum):
    """What a visited filesystem entry contributes to composition."""

    INCLUDE_DIR = "include_dir"
    LAYOUT = "layout"
    TEMPLATE = "template"
    IGNORED = "ignored"
