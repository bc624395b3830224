# 📄 File: plant_health_api/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up the service's diary: every message is stamped with which request and which user
# it belongs to, and can be written as JSON so log tools can search it.

# 🧪 Purpose (Technical Summary):
# Structured logging built on the standard logging module and python-json-logger, with
# contextvars based request/user correlation injected into every record by a filter.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# plant_health_api.main (setup at startup), api.middleware.logging (request context),
# shared.core.dependencies (user context), every module through logging.getLogger(__name__)

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from plant_health_api.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

SERVICE_NAME = "plant-health-api"

_logging_configured = False


class RequestContextFilter(logging.Filter):
    """Copies the request and user context variables onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        record.user_id = user_id_var.get("")
        record.service = SERVICE_NAME
        return True


class ContextualFormatter(logging.Formatter):
    """Plain text formatter that shows the request id when there is one."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        request_id = getattr(record, "request_id", "")
        if request_id:
            return f"{message} [request_id={request_id}]"
        return message


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Emits one object per line with a UTC timestamp, level, logger name and
    the request/user correlation fields set by RequestContextFilter.
    """

    def add_fields(self, log_record: Dict, record: logging.LogRecord, message_dict: Dict) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = getattr(record, "service", SERVICE_NAME)
        for key in ("request_id", "user_id"):
            value = getattr(record, key, "")
            if value:
                log_record[key] = value
            else:
                log_record.pop(key, None)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Overrides settings.LOG_LEVEL
        log_format: "json" or "text", overrides settings.LOG_FORMAT

    Returns:
        The startup logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        formatter = JSONFormatter("%(message)s %(module)s %(funcName)s %(lineno)d")
    else:
        formatter = ContextualFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestContextFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier, generated when omitted
        user_id: User identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or "")
    try:
        yield {"request_id": request_id, "user_id": user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)


def bind_user(user_id: str) -> None:
    """Attach the authenticated user to the current request context."""
    user_id_var.set(user_id)


def get_request_id() -> str:
    return request_id_var.get("")
