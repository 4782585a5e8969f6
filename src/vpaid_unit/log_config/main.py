"""Logging configuration and utilities."""

import contextlib
import logging
from typing import Any

import structlog


_SESSION_KEYS: set[str] = set()


def get_context_logger(name: str) -> structlog.BoundLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog processors for the ad unit.

    Args:
        level: Minimum log level name (e.g. "DEBUG", "INFO")
        json_output: Render JSON lines instead of console output
    """
    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=False,
    )


class AdSessionContext:
    """Context manager binding ad session fields to every log line."""

    def __init__(self, **context: Any):
        """Initialize with context variables.

        Args:
            **context: Context key-value pairs
        """
        self.context = context

    def __enter__(self):
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        structlog.contextvars.unbind_contextvars(*self.context.keys())


def update_playback_progress(**kwargs: Any) -> None:
    """Update playback progress in logging context.

    Args:
        **kwargs: Progress metrics to update
    """
    _SESSION_KEYS.update(kwargs)
    structlog.contextvars.bind_contextvars(**kwargs)


def set_session_context(**kwargs: Any) -> None:
    """Set ad session context in logging.

    Args:
        **kwargs: Context key-value pairs
    """
    _SESSION_KEYS.update(kwargs)
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_session_context() -> None:
    """Remove every key bound through this module from the logging context."""
    with contextlib.suppress(KeyError):
        structlog.contextvars.unbind_contextvars(*_SESSION_KEYS)
    _SESSION_KEYS.clear()


__all__ = [
    "get_context_logger",
    "configure_logging",
    "AdSessionContext",
    "update_playback_progress",
    "set_session_context",
    "clear_session_context",
]
