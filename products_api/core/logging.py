from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(requestId)s] - %(message)s"

# Set by RequestIdMiddleware for the duration of one request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """
    Make ``requestId`` always available to the formatter.

    Taken from ``extra`` when given, else from the current request context;
    records logged outside a request (startup) get "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "requestId"):
            record.requestId = request_id_var.get()
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Configure Python standard logging once for the whole service.

    Plain stdout output, container-friendly, each line tagged with the request id.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (reloads, tests).
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)
    root.setLevel(numeric_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger; module code calls it with ``__name__``."""
    return logging.getLogger(name or "products_api")
