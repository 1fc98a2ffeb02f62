"""Logging utilities for ai-connectors."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


_LOG_RECORD_FIELDS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
    "stacklevel",
}

LOG_LEVEL_ENV = "AI_CONNECTORS_LOG_LEVEL"


class StructuredFormatter(logging.Formatter):
    """Formatter with ISO timestamps and context."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return timestamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _LOG_RECORD_FIELDS and not key.startswith("_")
        }
        if extras:
            try:
                serialized = json.dumps(extras, sort_keys=True, ensure_ascii=True, default=str)
            except (TypeError, ValueError):
                serialized = str(extras)
            return f"{message} | {serialized}"
        return message




class ConnectorsLogger:
    """Package logger: stderr at the configured level, plus an optional debug log file."""

    def __init__(self, name: str = "ai_connectors"):
        self.logger = logging.getLogger(name)
        level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level_name, logging.WARNING))
            console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
            self.logger.addHandler(console_handler)

        self._file_handler: Optional[logging.FileHandler] = None

    @property
    def log_file(self) -> Optional[Path]:
        if self._file_handler is None:
            return None
        return Path(self._file_handler.baseFilename)

    def attach_file_handler(self, log_file: Path) -> Path:
        """Mirror every record, debug included, to ``log_file``."""
        log_file = log_file.expanduser().resolve()
        if self.log_file == log_file:
            return log_file
        self.detach_file_handler()

        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(StructuredFormatter("%(asctime)s [%(levelname)s] %(message)s"))
        self.logger.addHandler(handler)
        self._file_handler = handler
        return log_file

    def detach_file_handler(self) -> None:
        if self._file_handler is None:
            return
        self.logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.error(message, *args, **kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.exception(message, *args, **kwargs)


_logger: Optional[ConnectorsLogger] = None


def get_logger() -> ConnectorsLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = ConnectorsLogger()
    return _logger


def enable_file_logging(log_file: Path) -> Path:
    """Also write package logs to ``log_file`` (``--log-file`` on the CLI)."""
    logger = get_logger()
    path = logger.attach_file_handler(log_file)
    logger.debug("[logging] File logging enabled", extra={"log_file": str(path)})
    return path


def disable_file_logging() -> None:
    get_logger().detach_file_handler()
