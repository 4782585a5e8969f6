"""
Time Provider Abstraction

Pluggable time source for the headless playback surface. The same tick loop
runs against wall-clock time in demos and against virtual time in tests.
"""

import asyncio
import time
from abc import ABC, abstractmethod

from .config import TimeMode
from .log_config import get_context_logger


class TimeProvider(ABC):
    """
    Abstract base class for time providers.

    Subclasses define what "now" means and how waiting advances it.
    """

    @abstractmethod
    def now(self) -> float:
        """Return current time in seconds (wall-clock or virtual)."""

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Wait for ``seconds`` of provider time."""

    def elapsed_time(self, start_time: float) -> float:
        """Seconds elapsed since an earlier ``now()`` reading."""
        return self.now() - start_time

    @abstractmethod
    def get_mode(self) -> TimeMode:
        """Get time provider mode identifier."""


class RealtimeTimeProvider(TimeProvider):
    """
    Wall-clock time provider.

    Uses ``time.monotonic()`` and ``asyncio.sleep()``.

    Examples:
        >>> provider = RealtimeTimeProvider()
        >>> start = provider.now()
        >>> await provider.sleep(0.5)
        >>> 0.45 < provider.elapsed_time(start) < 0.6
        True
    """

    def __init__(self):
        self.logger = get_context_logger("realtime_time_provider")
        self.logger.debug("Real-time time provider initialized")

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    def get_mode(self) -> TimeMode:
        return TimeMode.REAL


class SimulatedTimeProvider(TimeProvider):
    """
    Virtual time provider.

    ``sleep`` advances virtual time by ``seconds * speed`` and only yields to
    the event loop, so a 30 second creative plays out instantly.

    Examples:
        >>> provider = SimulatedTimeProvider(speed=2.0)
        >>> await provider.sleep(1.0)
        >>> provider.now()
        2.0
    """

    def __init__(self, speed: float = 1.0, initial_time: float = 0.0):
        """
        Initialize simulated time provider.

        Args:
            speed: Speed multiplier for virtual time (1.0 = normal)
            initial_time: Starting virtual time

        Raises:
            ValueError: If speed <= 0
        """
        if speed <= 0:
            raise ValueError(f"Speed must be positive, got {speed}")

        self.speed = speed
        self.virtual_time = initial_time
        self.logger = get_context_logger("simulated_time_provider")
        self.logger.debug(
            "Simulated time provider initialized",
            speed=self.speed,
            initial_time=self.virtual_time,
        )

    def now(self) -> float:
        return self.virtual_time

    async def sleep(self, seconds: float) -> None:
        self.virtual_time += seconds * self.speed
        # Yield control so other tasks (host callbacks, stop requests) can run
        await asyncio.sleep(0)

    def advance(self, seconds: float) -> None:
        """Advance virtual time without yielding."""
        self.virtual_time += seconds

    def get_mode(self) -> TimeMode:
        return TimeMode.SIMULATED


def create_time_provider(mode: TimeMode | str = TimeMode.SIMULATED, **kwargs) -> TimeProvider:
    """
    Factory function to create a time provider.

    Args:
        mode: 'real' or 'simulated'
        **kwargs: Passed to SimulatedTimeProvider

    Returns:
        Configured TimeProvider instance

    Examples:
        >>> create_time_provider("simulated", speed=4.0).get_mode()
        <TimeMode.SIMULATED: 'simulated'>
    """
    if TimeMode(mode) == TimeMode.SIMULATED:
        return SimulatedTimeProvider(**kwargs)
    return RealtimeTimeProvider()


__all__ = [
    "TimeProvider",
    "RealtimeTimeProvider",
    "SimulatedTimeProvider",
    "create_time_provider",
]
