"""Logging configuration package."""

from .main import (
    AdSessionContext,
    clear_session_context,
    configure_logging,
    get_context_logger,
    set_session_context,
    update_playback_progress,
)


__all__ = [
    "get_context_logger",
    "configure_logging",
    "AdSessionContext",
    "update_playback_progress",
    "set_session_context",
    "clear_session_context",
]
