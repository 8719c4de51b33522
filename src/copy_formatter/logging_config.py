# -*- coding: utf-8 -*-
"""
Structured JSON logging configuration.

Every record carries the service name and version, plus the ID of the
request being handled ("-" outside of a request).
"""
import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from . import __version__
from .config import settings
from .middleware import get_request_id

SERVICE_NAME = "copy-formatter"

LOG_FORMAT = "%(asctime)s %(name)s %(request_id)s %(message)s"

# Chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class RequestContextFilter(logging.Filter):
    """Attach the current request ID to log records."""

    def filter(self, record):
        record.request_id = get_request_id() or "-"
        return True


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter adding level, logger and service fields."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = SERVICE_NAME
        log_record["version"] = __version__


def build_formatter() -> ServiceJsonFormatter:
    return ServiceJsonFormatter(fmt=LOG_FORMAT, rename_fields={"asctime": "@timestamp"})


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Send all logging to stdout as JSON lines.

    Args:
        level: Overrides LOG_LEVEL when given (e.g. "DEBUG")
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.LOG_LEVEL).upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter())
    handler.addFilter(RequestContextFilter())
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
