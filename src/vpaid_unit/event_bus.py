"""Single-slot event registry between the ad unit and its host.

Each event name holds at most one callback. Subscribing again under the same
name replaces the previous callback; emitting a name nobody subscribed to is
silently dropped.
"""

import inspect
import types
from collections.abc import Callable
from enum import Enum
from typing import Any

from .events import UnitLogEvents
from .log_config import get_context_logger
from .metrics import MetricLabels, MetricsCollector, NoOpMetrics, UnitMetrics


EventCallback = Callable[[Any], Any]


class EventBus:
    """
    Mapping from event name to one bound host callback.

    Examples:
        >>> bus = EventBus()
        >>> received = []
        >>> bus.subscribe("AdLoaded", received.append)
        >>> bus.emit("AdLoaded", {"ok": True})
        >>> received
        [{'ok': True}]
        >>> bus.emit("AdStarted")  # no subscriber, dropped
    """

    def __init__(self, metrics: MetricsCollector | None = None):
        self._callbacks: dict[str, EventCallback] = {}
        self.metrics = metrics or NoOpMetrics()
        self.logger = get_context_logger("event_bus")

    @staticmethod
    def _name(event_name: Any) -> str:
        return event_name.value if isinstance(event_name, Enum) else event_name

    @staticmethod
    def _bind(callback: EventCallback, context: Any) -> EventCallback:
        # Plain functions get ``context`` as their first argument, like a method
        if context is not None and inspect.isfunction(callback):
            return types.MethodType(callback, context)
        return callback

    def subscribe(self, event_name: str, callback: EventCallback, context: Any = None) -> None:
        """
        Bind ``callback`` under ``event_name``, replacing any previous binding.

        Args:
            event_name: Event to listen for (e.g. "AdLoaded")
            callback: Called with the event data (None when the event has none)
            context: Optional object bound as the callback's first argument
        """
        if not event_name or callback is None:
            self.logger.warning(
                "Ignoring subscription without event name or callback",
                event_name=event_name,
            )
            return
        event_name = self._name(event_name)
        replaced = event_name in self._callbacks
        self._callbacks[event_name] = self._bind(callback, context)
        self.logger.debug("Subscribed", event_name=event_name, replaced=replaced)

    def unsubscribe(self, event_name: str) -> None:
        """Remove the binding for ``event_name``; unknown names are ignored."""
        event_name = self._name(event_name)
        if self._callbacks.pop(event_name, None) is not None:
            self.logger.debug("Unsubscribed", event_name=event_name)

    def is_subscribed(self, event_name: str) -> bool:
        return self._name(event_name) in self._callbacks

    def emit(self, event_name: str, data: Any = None) -> bool:
        """
        Invoke the callback bound to ``event_name`` synchronously.

        A callback that raises is logged and counted; the error never reaches
        the producer.

        Returns:
            True if a subscriber received the event
        """
        event_name = self._name(event_name)
        callback = self._callbacks.get(event_name)
        if callback is None:
            self.metrics.increment(
                UnitMetrics.EVENTS_DROPPED, labels={MetricLabels.EVENT_TYPE: event_name}
            )
            self.logger.debug(UnitLogEvents.EVENT_DROPPED.value, event_name=event_name)
            return False

        try:
            callback(data)
        except Exception as e:
            self.metrics.increment(
                UnitMetrics.CALLBACK_FAILURES, labels={MetricLabels.EVENT_TYPE: event_name}
            )
            self.logger.error(
                UnitLogEvents.CALLBACK_FAILED.value,
                event_name=event_name,
                error=str(e),
                error_type=type(e).__name__,
            )
        return True

    def clear(self) -> None:
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)


__all__ = ["EventBus", "EventCallback"]
