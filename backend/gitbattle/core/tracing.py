"""
Tracing Context - Thread-safe context management for request/task tracing.

Carries a correlation id from the HTTP request that started a comparison into
the Celery task that persists it, so both sides can be joined in the logs.

Usage:
    TracingContext.set(correlation_id="abc-123", comparison_id="octocat_vs_torvalds_1f2e")
    ctx = TracingContext.get()  # picked up by JSONFormatter
    TracingContext.clear()
"""

import uuid
from contextvars import ContextVar
from typing import Dict

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_comparison_id: ContextVar[str] = ContextVar("comparison_id", default="")
_task_name: ContextVar[str] = ContextVar("task_name", default="")


class TracingContext:
    """Thread-safe tracing context."""

    @staticmethod
    def set(
        correlation_id: str = "",
        comparison_id: str = "",
        task_name: str = "",
    ) -> None:
        """Set tracing context for current execution."""
        if correlation_id:
            _correlation_id.set(correlation_id)
        if comparison_id:
            _comparison_id.set(comparison_id)
        if task_name:
            _task_name.set(task_name)

    @staticmethod
    def get() -> Dict[str, str]:
        """Get current tracing context as dict."""
        return {
            "correlation_id": _correlation_id.get(),
            "comparison_id": _comparison_id.get(),
            "task_name": _task_name.get(),
        }

    @staticmethod
    def get_correlation_id() -> str:
        return _correlation_id.get()

    @staticmethod
    def generate_correlation_id() -> str:
        """Generate a new correlation ID."""
        return str(uuid.uuid4())

    @staticmethod
    def clear() -> None:
        _correlation_id.set("")
        _comparison_id.set("")
        _task_name.set("")
