"""structlog configuration for lifeplan.

Library modules log through ``logging.getLogger(__name__)``. Once
:func:`configure_logging` has run, those stdlib records are rendered by
structlog's ``ProcessorFormatter``: colored console lines by default,
JSON lines with ``log_json``. Both go to stderr.

Values bound with :func:`user_context` (the acting user's short ID) are
merged into every record emitted inside the block.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

PACKAGE_LOGGER = "lifeplan"
_QUIET_LOGGERS = ("sqlalchemy",)


def short_id(value: str | None) -> str:
    """First 8 characters of an identifier; full user IDs never reach logs."""
    return (value or "")[:8]


@contextmanager
def user_context(user_id: str | None) -> Iterator[None]:
    """Bind the acting user's short ID to log records within the block."""
    with structlog.contextvars.bound_contextvars(user=short_id(user_id)):
        yield


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        verbose: Set the ``lifeplan`` logger to DEBUG. When False, WARNING.
        log_json: Render JSON lines instead of console output.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

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
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
