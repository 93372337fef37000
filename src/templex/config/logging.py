"""Route templex diagnostics to stderr through structlog.

stdout belongs to rendered templates and ``list`` output, so every log line
goes to stderr: coloured console lines by default, JSON lines with
``--log-json``. The library itself only uses ``logging.getLogger(__name__)``
(scan summaries and per-template compiles at DEBUG, duplicate identifiers at
WARNING); the ``ProcessorFormatter`` gives those records structlog fields.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "templex"


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Install the stderr handler used by the ``templex`` CLI.

    Args:
        verbose: Show templex DEBUG records (scan and compile progress).
            Otherwise only duplicate-identifier warnings and worse appear.
        log_json: Emit JSON lines instead of console lines.
    """
    shared = _processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    # jinja2 and other libraries stay at WARNING even with --verbose
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
