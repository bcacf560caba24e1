"""structlog configuration.

Learn: structlog sits on top of stdlib logging. Every module does
`logger = structlog.get_logger(__name__)` and logs dotted event names
with keyword context. The request id bound by RequestIdMiddleware is
merged into each entry through structlog.contextvars.
"""

import logging
import sys

import structlog

from devsocial.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog + stdlib logging once at startup."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())
