"""VPAID ad unit exception hierarchy.

The host never sees these exceptions: every public ad unit method converts
them into an ``AdError`` event. They exist so that the decoder, the surface
adapter and the settings loader can fail with a typed, context-carrying
error that the unit logs and reports.

Exception Hierarchy:
    VpaidException (base)
    ├── ParameterDecodeError
    │   └── MissingResourceError
    ├── PlaybackStartError
    └── VpaidConfigError
"""

from typing import Optional


class VpaidException(Exception):
    """Base exception for all ad unit errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize ad unit exception.

        Args:
            message: Human readable error message (reported as AdError message)
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ParameterDecodeError(VpaidException):
    """Raised when the AdParameters payload cannot be decoded.

    Attributes:
        payload_preview: First 200 characters of the offending payload
        field_name: Field that failed validation, if any
    """

    def __init__(
        self,
        message: str,
        payload_preview: Optional[str] = None,
        field_name: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if payload_preview:
            context["payload_preview"] = payload_preview[:200]
        if field_name:
            context["field_name"] = field_name
        super().__init__(message, context)
        self.payload_preview = payload_preview
        self.field_name = field_name


class MissingResourceError(ParameterDecodeError):
    """Raised when the decoded payload carries no video URL."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message, field_name="videoUrl", context=context)


class PlaybackStartError(VpaidException):
    """Raised when the playback surface fails to begin playback.

    Attributes:
        video_url: Resource the surface tried to play
        cause: Underlying surface exception, if any
    """

    def __init__(
        self,
        message: str,
        video_url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if video_url:
            context["video_url"] = video_url
        if cause is not None:
            context["cause"] = type(cause).__name__
        super().__init__(message, context)
        self.video_url = video_url
        self.cause = cause


class VpaidConfigError(VpaidException):
    """Raised when configuration cannot be loaded or is invalid.

    Attributes:
        config_path: Path of the configuration file, if any
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_path:
            context["config_path"] = config_path
        super().__init__(message, context)
        self.config_path = config_path


__all__ = [
    "VpaidException",
    "ParameterDecodeError",
    "MissingResourceError",
    "PlaybackStartError",
    "VpaidConfigError",
]
