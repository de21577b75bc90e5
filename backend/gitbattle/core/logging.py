"""
Structured Logging Configuration.

Supports two modes:
- text: Human-readable format for development
- json: Structured JSON format for production

Set LOG_FORMAT environment variable to "json" for production.
"""

import json
import logging
import os
import sys
from typing import Any, Dict

from gitbattle.core.tracing import TracingContext


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings with tracing context.

    Includes correlation_id and comparison_id from TracingContext so a
    comparison request and its persistence task can be followed together.
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = TracingContext.get()

        log_record: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
            "correlation_id": ctx.get("correlation_id", ""),
            "comparison_id": ctx.get("comparison_id", ""),
            "task_name": ctx.get("task_name", ""),
        }

        if hasattr(record, "task_id"):
            log_record["task_id"] = record.task_id

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging() -> None:
    """
    Setup logging for the application.

    Uses LOG_FORMAT env var to determine format:
    - "json": Structured JSON
    - "text" (default): Human-readable for development
    """
    root_logger = logging.getLogger()

    # Avoid adding multiple handlers
    if root_logger.handlers:
        return

    root_logger.setLevel(logging.INFO)

    handler = logging.StreamHandler(sys.stdout)

    log_format = os.getenv("LOG_FORMAT", "text").lower()

    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)

    root_logger.addHandler(handler)

    # Set lower level for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
