"""VPAID event name constants."""

from enum import Enum


class AdEvent(str, Enum):
    """Events the ad unit emits to the host."""

    # Lifecycle
    AD_LOADED = "AdLoaded"
    AD_STARTED = "AdStarted"
    AD_PLAYING = "AdPlaying"
    AD_PAUSED = "AdPaused"
    AD_STOPPED = "AdStopped"
    AD_SKIPPED = "AdSkipped"
    AD_SKIPPABLE_STATE_CHANGE = "AdSkippableStateChange"

    # Progress
    AD_VIDEO_FIRST_QUARTILE = "AdVideoFirstQuartile"
    AD_VIDEO_MIDPOINT = "AdVideoMidpoint"
    AD_VIDEO_THIRD_QUARTILE = "AdVideoThirdQuartile"
    AD_VIDEO_COMPLETE = "AdVideoComplete"

    # Interaction
    AD_CLICK_THRU = "AdClickThru"
    AD_INTERACTION = "AdInteraction"
    AD_VOLUME_CHANGE = "AdVolumeChange"

    AD_ERROR = "AdError"


class UnitLogEvents(str, Enum):
    """Event type constants for structured logging."""

    # Protocol events
    HANDSHAKE = "vpaid.unit.handshake"
    INIT_STARTED = "vpaid.unit.init.started"
    INIT_FAILED = "vpaid.unit.init.failed"
    LOADED = "vpaid.unit.loaded"

    # Playback events
    START_REQUESTED = "vpaid.playback.start_requested"
    PLAYBACK_STARTED = "vpaid.playback.started"
    PLAYBACK_START_FAILED = "vpaid.playback.start_failed"
    PLAYBACK_PAUSED = "vpaid.playback.paused"
    PLAYBACK_RESUMED = "vpaid.playback.resumed"
    PLAYBACK_STOPPED = "vpaid.playback.stopped"
    PLAYBACK_COMPLETED = "vpaid.playback.completed"

    # Skip events
    SKIP_ENABLED = "vpaid.skip.enabled"
    SKIP_ACCEPTED = "vpaid.skip.accepted"
    SKIP_REJECTED = "vpaid.skip.rejected"

    # Quartile events
    QUARTILE_REACHED = "vpaid.quartile.reached"

    # Surface events
    SIGNAL_DROPPED = "vpaid.surface.signal_dropped"
    EVENT_EMITTED = "vpaid.event.emitted"
    EVENT_DROPPED = "vpaid.event.dropped"
    CALLBACK_FAILED = "vpaid.event.callback_failed"


__all__ = ["AdEvent", "UnitLogEvents"]
