"""
Structured logging configuration for the application.

Provides JSON-formatted logs for production and plain text for development.
Each JSON record also carries the request it was emitted under (method, path
and, once authenticated, the caller's user id).
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

_request_context: ContextVar[Dict[str, Any]] = ContextVar("request_context", default={})


@contextmanager
def request_context(**fields: Any) -> Iterator[None]:
    """Attach `fields` to every record logged inside the block."""
    token = _request_context.set({**_request_context.get(), **fields})
    try:
        yield
    finally:
        _request_context.reset(token)


def bind_request_context(**fields: Any) -> None:
    """Add fields to the current request's context, e.g. after authentication."""
    _request_context.set({**_request_context.get(), **fields})


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter with level, logger and source location on every record,
    plus the current request context.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName

        # Explicit `extra=` values win over the request context
        for key, value in _request_context.get().items():
            log_record.setdefault(key, value)

        # Add line number for errors/warnings
        if record.levelno >= logging.WARNING:
            log_record['line'] = record.lineno
            log_record['pathname'] = record.pathname


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level name, case-insensitive
        json_logs: JSON records (production) or plain text (development)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)

    if json_logs:
        formatter = CustomJsonFormatter(
            '%(timestamp)s %(level)s %(logger)s %(module)s %(funcName)s %(message)s'
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    # Quiet the storage, database and hashing libraries
    for name in ("urllib3", "boto3", "botocore", "s3transfer", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
