"""Structured logging utilities."""

import json
import logging
from typing import Any, Dict, Optional

_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info", "taskName",
}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Everything passed through ``extra=`` ends up as a record attribute
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Get a logger with JSON formatting configured."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def configure_root(level: str = "INFO") -> None:
    """Route every module logger through the JSON formatter."""
    root = logging.getLogger()
    if not any(isinstance(h.formatter, JSONFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.setLevel(level)


def log_fetch(
    logger: logging.Logger,
    user_id: str,
    lesson_count: int,
    absence_count: int,
    duration_ms: int,
) -> None:
    """Log fetch stage."""
    logger.info(
        "Records fetched",
        extra={
            "user_id": user_id,
            "stage": "fetch",
            "lesson_count": lesson_count,
            "absence_count": absence_count,
            "duration_ms": duration_ms,
        },
    )


def log_compute(
    logger: logging.Logger,
    user_id: str,
    total_real_lessons: int,
    total_absences: int,
    duration_ms: int,
) -> None:
    """Log snapshot computation stage."""
    logger.info(
        "Snapshot computed",
        extra={
            "user_id": user_id,
            "stage": "compute",
            "total_real_lessons": total_real_lessons,
            "total_absences": total_absences,
            "duration_ms": duration_ms,
        },
    )


def log_write(
    logger: logging.Logger,
    user_id: str,
    target: str,
    duration_ms: int,
) -> None:
    """Log write stage."""
    logger.info(
        f"Write to {target} completed",
        extra={
            "user_id": user_id,
            "stage": f"write_{target}",
            "duration_ms": duration_ms,
        },
    )


def log_cycle(
    logger: logging.Logger,
    successful: int,
    failed: int,
    duration_ms: int,
    failures: Optional[Dict[str, str]] = None,
) -> None:
    """Log the summary of a sync cycle."""
    extra: Dict[str, Any] = {
        "stage": "cycle",
        "successful": successful,
        "failed": failed,
        "duration_ms": duration_ms,
    }
    if failures:
        extra["failures"] = failures
    logger.info(f"Sync cycle completed: {successful} successful, {failed} failed", extra=extra)
