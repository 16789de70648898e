import functools
import json
import logging
import logging.handlers
import sys
import time
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Optional

from .config import LoggingSettings, get_settings

# Set by the HTTP logging middleware for the lifetime of a request.
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

AUDIT_LOGGER_NAME = "iar_uploader.audit"

# Marks handlers owned by setup_logging so a second call replaces only those
_HANDLER_TAG = "_iar_uploader"


class JSONFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message, request id and audit fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            entry["request_id"] = request_id
        entry.update(getattr(record, "audit", {}))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True


def _build_handler(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    handler.addFilter(RequestContextFilter())
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(logging_settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure the root logger from `LoggingSettings`.

    Console output always; a rotating file as well when `LOG_FILE_PATH` is set.
    Safe to call more than once: handlers from an earlier call are replaced,
    handlers installed by anything else (pytest, uvicorn) are left alone.
    """
    logging_settings = logging_settings or get_settings().logging

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, logging_settings.level.upper(), logging.INFO))
    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    if logging_settings.json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=logging_settings.format, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger.addHandler(_build_handler(logging.StreamHandler(sys.stdout), formatter))

    if logging_settings.file_path:
        file_path = Path(logging_settings.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=file_path,
            maxBytes=logging_settings.max_bytes,
            backupCount=logging_settings.backup_count,
            encoding="utf-8",
        )
        root_logger.addHandler(_build_handler(file_handler, formatter))

    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if get_settings().database_echo else logging.WARNING
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_execution_time(logger: logging.Logger, level: int = logging.INFO):
    """Log how long the wrapped call took, or how long it ran before failing."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.warning("%s failed after %.1f ms: %s", func.__qualname__, elapsed_ms, e)
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.log(level, "%s finished in %.1f ms", func.__qualname__, elapsed_ms)
            return result

        return wrapper

    return decorator


def audit_upload(file_name: str, success: bool, **fields: Any) -> None:
    """
    Record the outcome of one upload on the audit logger.

    The fields are attached to the record and appear as top-level keys in JSON
    output.
    """
    audit = {"event_type": "iar_upload", "file_name": file_name, "success": success, **fields}
    logging.getLogger(AUDIT_LOGGER_NAME).log(
        logging.INFO if success else logging.WARNING,
        "IAR upload %s: %s",
        "completed" if success else "rejected",
        file_name,
        extra={"audit": audit},
    )
