"""
Structured logging setup.

Provides JSON and text logging formatters for consistent log output.
Retrieval context passed through ``extra`` (pipeline stage, chunk position,
result size) is carried into both formats.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from config import settings

# Record attributes set through ``extra=`` by the retrieval pipeline
CONTEXT_FIELDS = ("stage", "document", "chunk_index", "chunk_count", "passage_count", "k")

# HTTP and client libraries used by the embedding backends log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3", "sentence_transformers")


def _context(record: logging.LogRecord) -> dict:
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.

    Produces single-line JSON objects for easy parsing by log aggregators.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ContextFormatter(logging.Formatter):
    """Plain-text formatter that appends retrieval context as ``[key=value ...]``."""

    def __init__(self) -> None:
        super().__init__('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = _context(record)
        if not context:
            return base
        return f"{base} [{' '.join(f'{key}={value}' for key, value in context.items())}]"


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level name. Defaults to settings.LOG_LEVEL.
        log_format: "json" or "text". Defaults to settings.LOG_FORMAT.
        quiet_loggers: Third-party loggers capped at WARNING so per-request
            client chatter does not drown out retrieval logs.

    Returns:
        The root logger configured with a single console handler.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level))

    # Remove existing handlers
    logger.handlers = []

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if log_format == "json" else ContextFormatter())
    logger.addHandler(handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
