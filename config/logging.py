"""
Exam Prep API - Logging Configuration
"""
import sys
import logging
import json
from datetime import datetime, timezone
from typing import Any, Dict

from config.settings import get_settings


class JSONFormatter(logging.Formatter):
    """
    JSON Formatter for structured logging.
    One object per line so container log collectors can parse it.
    """

    def format(self, record: logging.LogRecord) -> str:
        settings = get_settings()

        log_obj: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "env": "dev" if settings.debug else "prod",
            "service": "exam-prep-api"
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
            log_obj["stack_trace"] = self.formatStack(record.stack_info) if record.stack_info else None

        # Extra fields passed via extra={"extra_data": {...}}
        if hasattr(record, "extra_data"):
            log_obj.update(record.extra_data)

        if hasattr(record, "request_id"):
            log_obj["request_id"] = record.request_id

        return json.dumps(log_obj, ensure_ascii=False, default=str)


def configure_logging():
    """Configure root logger: readable lines in debug, JSON otherwise"""
    settings = get_settings()

    root_logger = logging.getLogger()

    if settings.debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)

    if settings.debug:
        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        )
    else:
        formatter = JSONFormatter()

    handler.setFormatter(formatter)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []
    root_logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
