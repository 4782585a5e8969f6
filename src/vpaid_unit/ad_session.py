"""
Ad Session Domain Object

Holds the lifecycle state of the single ad session a unit plays: the ad
state, decoded creative parameters, skip eligibility, quartile flags and an
ordered history of the events emitted to the host. In-memory only.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .events import AdEvent
from .log_config import get_context_logger
from .parameters import AdParameters


class AdState(str, Enum):
    """Ad unit lifecycle state."""

    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


# Allowed transitions; STOPPED is terminal
_TRANSITIONS: dict[AdState, frozenset[AdState]] = {
    AdState.UNINITIALIZED: frozenset({AdState.LOADED, AdState.STOPPED}),
    AdState.LOADED: frozenset({AdState.PLAYING, AdState.STOPPED}),
    AdState.PLAYING: frozenset({AdState.PAUSED, AdState.STOPPED}),
    AdState.PAUSED: frozenset({AdState.PLAYING, AdState.STOPPED}),
    AdState.STOPPED: frozenset(),
}


@dataclass
class EmittedEvent:
    """One event delivered (or offered) to the host."""

    timestamp: float  # Time provider reading when emitted
    event: AdEvent
    offset_sec: float  # Media position when emitted
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary."""
        return {
            'timestamp': self.timestamp,
            'event': self.event.value,
            'offset_sec': self.offset_sec,
            'data': self.data,
        }


@dataclass
class QuartileTracker:
    """Tracks which progress events have fired; every flag is one-way."""

    first_quartile: bool = False
    midpoint: bool = False
    third_quartile: bool = False
    complete: bool = False

    def to_dict(self) -> dict[str, bool]:
        """Convert to dictionary."""
        return {
            'firstQuartile': self.first_quartile,
            'midpoint': self.midpoint,
            'thirdQuartile': self.third_quartile,
            'complete': self.complete,
        }


# (threshold, tracker attribute, event) in ascending threshold order
QUARTILES: tuple[tuple[float, str, AdEvent], ...] = (
    (0.25, "first_quartile", AdEvent.AD_VIDEO_FIRST_QUARTILE),
    (0.5, "midpoint", AdEvent.AD_VIDEO_MIDPOINT),
    (0.75, "third_quartile", AdEvent.AD_VIDEO_THIRD_QUARTILE),
)


@dataclass
class AdSession:
    """
    Domain object representing the one ad session of a unit.

    Attributes:
        session_id: Unique session identifier
        state: Current lifecycle state
        parameters: Decoded creative parameters (set by a successful init)
        skippable: Skip eligibility; once True it stays True
        quartiles: One-shot progress event flags
        current_offset_sec: Last media position seen by the unit
        start_time: Time provider reading when playback started
        end_time: Time provider reading when the session stopped
        events: Ordered history of emitted events
    """

    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: AdState = AdState.UNINITIALIZED
    parameters: AdParameters | None = None
    skippable: bool = False
    quartiles: QuartileTracker = field(default_factory=QuartileTracker)
    current_offset_sec: float = 0.0
    start_time: float | None = None
    end_time: float | None = None
    events: list[EmittedEvent] = field(default_factory=list)

    logger: Any = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Initialize logger after dataclass initialization."""
        if self.logger is None:
            self.logger = get_context_logger("ad_session")

    def can_transition(self, new_state: AdState) -> bool:
        return new_state in _TRANSITIONS[self.state]

    def transition(self, new_state: AdState) -> bool:
        """
        Move to ``new_state`` if the lifecycle allows it.

        Returns:
            True if the state changed
        """
        if not self.can_transition(new_state):
            self.logger.debug(
                "Transition ignored",
                session_id=self.session_id,
                current_state=self.state.value,
                requested_state=new_state.value,
            )
            return False

        previous = self.state
        self.state = new_state
        self.logger.debug(
            "State changed",
            session_id=self.session_id,
            from_state=previous.value,
            to_state=new_state.value,
        )
        return True

    @property
    def is_stopped(self) -> bool:
        return self.state == AdState.STOPPED

    def mark_skippable(self) -> bool:
        """Set the skippable flag. Returns True only on the false->true edge."""
        if self.skippable:
            return False
        self.skippable = True
        return True

    def pending_quartiles(self, progress: float) -> list[AdEvent]:
        """
        Return every unfired quartile crossed at ``progress``.

        Events come back in ascending threshold order. Nothing is marked
        here; call ``mark_quartile`` as each one is emitted.
        """
        return [
            event
            for threshold, attr, event in QUARTILES
            if progress >= threshold and not getattr(self.quartiles, attr)
        ]

    def mark_quartile(self, event: AdEvent) -> bool:
        """Set the flag for ``event``. Returns True only the first time."""
        for _, attr, quartile in QUARTILES:
            if quartile == event:
                if getattr(self.quartiles, attr):
                    return False
                setattr(self.quartiles, attr, True)
                return True
        raise ValueError(f"{event} is not a quartile event")

    def mark_complete(self) -> bool:
        """Set the completion flag. Returns True only the first time."""
        if self.quartiles.complete:
            return False
        self.quartiles.complete = True
        return True

    def record_event(
        self,
        event: AdEvent,
        current_time: float,
        data: dict[str, Any] | None = None,
    ) -> EmittedEvent:
        """Append an emitted event to the session history."""
        record = EmittedEvent(
            timestamp=current_time,
            event=event,
            offset_sec=self.current_offset_sec,
            data=data,
        )
        self.events.append(record)
        return record

    def event_names(self) -> list[str]:
        """Names of emitted events, in emission order."""
        return [record.event.value for record in self.events]

    def count(self, event: AdEvent) -> int:
        return sum(1 for record in self.events if record.event == event)

    def to_dict(self) -> dict[str, Any]:
        """Convert session to dictionary for inspection."""
        return {
            'session_id': self.session_id,
            'state': self.state.value,
            'parameters': self.parameters.to_dict() if self.parameters else None,
            'skippable': self.skippable,
            'quartiles': self.quartiles.to_dict(),
            'current_offset_sec': self.current_offset_sec,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'events': [e.to_dict() for e in self.events],
        }


__all__ = [
    "AdState",
    "AdSession",
    "EmittedEvent",
    "QuartileTracker",
    "QUARTILES",
]
