"""
Metric name constants for the VPAID ad unit.

Standardized names keep dashboards consistent across hosts embedding the unit.
"""


class UnitMetrics:
    """Metric name constants for ad unit operations."""

    # Event bus counters
    EVENTS_EMITTED = "vpaid.events.emitted"
    EVENTS_DROPPED = "vpaid.events.dropped"
    CALLBACK_FAILURES = "vpaid.events.callback_failures"

    # Lifecycle counters
    INIT_FAILURES = "vpaid.unit.init.failures"
    START_FAILURES = "vpaid.playback.start.failures"
    SKIPS = "vpaid.playback.skips"
    SIGNALS_DROPPED = "vpaid.surface.signals.dropped"

    # Latency histograms
    TIME_TO_START_MS = "vpaid.playback.time_to_start.milliseconds"

    # Gauges
    ACTIVE_SESSIONS = "vpaid.unit.active_sessions"


class MetricLabels:
    """Standard label names for metrics."""

    EVENT_TYPE = "event_type"  # AdLoaded, AdVideoMidpoint, ...
    ERROR_TYPE = "error_type"  # Exception class name
    SIGNAL = "signal"  # progress, complete, interaction


__all__ = ["UnitMetrics", "MetricLabels"]
