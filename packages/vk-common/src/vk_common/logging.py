"""
Structured logging setup for Vibe Kanban.

Configures structlog for JSON-formatted structured logging. Every log
line includes timestamp, level, service name, and event. Per-call
context (channel, platform, path) is bound where the work happens.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _add_service(service: str) -> Any:
    def processor(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service)
        return event_dict

    return processor


def configure_logging(
    level: str = "INFO",
    *,
    json_output: bool = True,
    service: str = "notifications",
) -> None:
    """Configure structlog for the current process.

    Args:
        level: Minimum level name (``DEBUG`` … ``CRITICAL``).
        json_output: Render JSON lines; ``False`` uses the console renderer.
        service: Value of the ``service`` key on every log line.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer: Any = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service(service),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
