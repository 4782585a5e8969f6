"""
Ad Unit Configuration Module

Dataclass configuration for the ad unit and its headless playback surface.
Values usually come from ``Settings.to_unit_config()`` but can be built
directly in code and tests.
"""

from dataclasses import dataclass, field
from enum import Enum


SUPPORTED_VPAID_VERSION = "2.0"


class TimeMode(str, Enum):
    """Time source for the headless surface."""

    REAL = "real"  # Wall-clock ticks
    SIMULATED = "simulated"  # Virtual time, no real sleeping


@dataclass
class HeadlessSurfaceConfig:
    """
    Configuration for the simulated playback surface.

    Attributes:
        duration_sec: Length of the simulated media in seconds
        tick_interval_sec: Position update granularity (seconds of media)
        time_mode: Wall-clock or virtual time
        speed: Virtual time multiplier (simulated mode only)
        fail_on_play: Make play() fail, to exercise the AdError path
        initial_volume: Volume reported before the host changes it

    Examples:
        Fast deterministic surface for tests:
        >>> config = HeadlessSurfaceConfig(
        ...     duration_sec=10.0,
        ...     tick_interval_sec=0.5,
        ...     time_mode=TimeMode.SIMULATED,
        ... )
    """

    duration_sec: float = 30.0
    tick_interval_sec: float = 0.25
    time_mode: TimeMode = TimeMode.SIMULATED
    speed: float = 1.0
    fail_on_play: bool = False
    initial_volume: float = 1.0


@dataclass
class AdUnitConfig:
    """
    Configuration for a VPAID ad unit.

    Attributes:
        vpaid_version: Version string returned from the handshake
        click_id: Identifier carried by AdClickThru
        interaction_id: Identifier carried by AdInteraction
        player_handles_click: Tell the host it should open the click URL
        start_muted: Create the surface muted (required for autoplay)
        inline: Request inline playback from the surface
        emit_progress_logs: Log every progress tick at debug level
        surface: Headless surface settings used by the default factory
    """

    vpaid_version: str = SUPPORTED_VPAID_VERSION
    click_id: str = "creative_click"
    interaction_id: str = "creative_mouseover"
    player_handles_click: bool = True
    start_muted: bool = True
    inline: bool = True
    emit_progress_logs: bool = False
    surface: HeadlessSurfaceConfig = field(default_factory=HeadlessSurfaceConfig)


__all__ = [
    "SUPPORTED_VPAID_VERSION",
    "TimeMode",
    "HeadlessSurfaceConfig",
    "AdUnitConfig",
]
