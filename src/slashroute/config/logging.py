"""structlog setup shared by the CLI and by bot consumers embedding the router.

Everything goes to one stderr handler on the root logger, so stdlib loggers
(plugin discovery, pluggy) and structlog loggers (routing pipeline) render
the same way: a console renderer by default, JSON lines with ``log_json``.

Levels:
- ``verbose`` puts every ``slashroute`` logger at DEBUG.
- ``enhanced_logging`` (the callback option of the same name) puts only the
  routing pipeline at DEBUG, leaving CLI and config chatter at WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

ROOT_LOGGER = "slashroute"
ROUTING_LOGGERS = ("slashroute.router", "slashroute.services")
QUIET_LOGGERS = ("pluggy",)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _render_chain(log_json: bool, stream: TextIO) -> list[structlog.types.Processor]:
    if log_json:
        # route.send_failed and friends log with exc_info; JSON needs it as text.
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    colors = hasattr(stream, "isatty") and stream.isatty()
    return [structlog.dev.ConsoleRenderer(colors=colors)]


def set_enhanced_logging(enabled: bool) -> None:
    """Put the routing loggers at DEBUG, or back to inheriting their parent."""
    for name in ROUTING_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if enabled else logging.NOTSET)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    enhanced_logging: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and route all log output to *stream*.

    Args:
        verbose: DEBUG for all slashroute loggers; otherwise WARNING.
        log_json: JSON lines instead of console rendering.
        enhanced_logging: DEBUG for the routing pipeline only.
        stream: Destination; defaults to the current ``sys.stderr``.
    """
    out = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(log_json, out),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    set_enhanced_logging(enhanced_logging)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
