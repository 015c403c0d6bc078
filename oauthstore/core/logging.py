"""Logging configuration for the OAuth persistence core."""

import logging
import sys
from contextvars import ContextVar

# Context variable to store request_id across async calls
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds request_id to log records."""

    def filter(self, record):
        """Add request_id to the log record if available."""
        request_id = request_id_ctx.get()
        record.request_id = f"[{request_id}] " if request_id else ""
        return True


def configure_logging(debug: bool | None = None) -> logging.Logger:
    """Configure stderr logging with request ids for the embedding application.

    Nothing calls this on import; the application decides when to install
    handlers.

    Args:
        debug: Log the package at DEBUG level. Defaults to Settings.debug
            (OAUTHSTORE_DEBUG).

    Returns:
        The package logger
    """
    if debug is None:
        from oauthstore.config import get_settings

        debug = get_settings().debug

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(request_id)s%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    request_filter = RequestIdFilter()
    for handler in logging.root.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(request_filter)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if debug:
        logger.debug("Debug mode enabled")

    return logger


def mask_value(value: str | None, visible: int = 4) -> str:
    """Shorten a secret or token so it can appear in log lines."""
    if not value:
        return "<empty>"
    if len(value) <= visible:
        return "*" * len(value)
    return f"{value[:visible]}…"


# Package logger; silent until the application configures logging
logger = logging.getLogger("oauthstore")
logger.addHandler(logging.NullHandler())
