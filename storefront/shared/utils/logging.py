# 📄 File: storefront/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up how the storefront writes its diary: one line per event, tagged with
# the request it belongs to, either human-readable or as JSON for log tools.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting via python-json-logger, a console
# format for development, and request correlation through a context variable
# injected into every record by a logging filter.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# storefront.main (startup), storefront.api.middleware.logging (request id),
# every module through logging.getLogger(__name__)

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from storefront.shared.config.settings import Settings

# Context variable for request tracking
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_logging_configured = False

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(request_id)s %(message)s"


class RequestContextFilter(logging.Filter):
    """
    Adds the current request id to every log record.
    """

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        record.service = self.service_name
        return True


def setup_logging(settings: Settings, force: bool = False) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        settings: Application settings (LOG_LEVEL, LOG_FORMAT, APP_NAME)
        force: Reconfigure even if logging was already configured

    Returns:
        The startup logger
    """
    global _logging_configured

    if _logging_configured and not force:
        return logging.getLogger("storefront.startup")

    numeric_level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    if settings.LOG_FORMAT == "json":
        formatter: logging.Formatter = JsonFormatter(
            JSON_FORMAT,
            rename_fields={"levelname": "level", "asctime": "timestamp", "name": "logger"},
            static_fields={"service": settings.APP_NAME.lower()},
        )
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestContextFilter(settings.APP_NAME.lower()))
    root_logger.addHandler(console_handler)

    # Uvicorn's own access log is replaced by the request logging stage
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )

    _logging_configured = True
    return logging.getLogger("storefront.startup")


@contextmanager
def log_context(request_id: Optional[str] = None) -> Iterator[str]:
    """
    Bind a request id to every log record emitted inside the block.

    Args:
        request_id: Request identifier (generated if omitted)
    """
    request_id = request_id or uuid4().hex
    token = request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        request_id_var.reset(token)
