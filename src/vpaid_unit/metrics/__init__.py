"""
Metrics collection for the VPAID ad unit.

Pluggable metrics interfaces for monitoring emitted events and playback
health. The default collector is a no-op with zero overhead.

Example:
    >>> from vpaid_unit.metrics import NoOpMetrics, PrometheusMetrics, UnitMetrics
    >>>
    >>> metrics = NoOpMetrics()
    >>> metrics.increment(UnitMetrics.EVENTS_EMITTED)  # No-op
    >>>
    >>> metrics = PrometheusMetrics()
    >>> metrics.increment(UnitMetrics.EVENTS_EMITTED, labels={'event_type': 'AdLoaded'})
"""

from .base import MetricsCollector, NoOpMetrics
from .constants import MetricLabels, UnitMetrics
from .prometheus import PrometheusMetrics

__all__ = [
    "MetricsCollector",
    "NoOpMetrics",
    "PrometheusMetrics",
    "UnitMetrics",
    "MetricLabels",
]
