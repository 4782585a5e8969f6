"""
VPAID Ad Unit Package

A VPAID 2.0 linear video ad unit: the component a host player loads,
initializes, drives through its lifecycle and listens to for events.

This package provides:
- VpaidAdUnit: Lifecycle state machine and VPAID method surface
- EventBus: Single-slot event registry between the unit and its host
- HeadlessSurface: Simulated playback surface for tests and demos
- AdParameters: Decoded creative parameters
- Configuration, settings, logging and metrics helpers

Usage:
    from vpaid_unit import get_vpaid_ad, Slot

    unit = get_vpaid_ad()
    unit.handshake_version("2.0")
    unit.subscribe(on_loaded, "AdLoaded")
    unit.init_ad(640, 360, "normal", 500,
                 {"AdParameters": '{"videoUrl": "https://cdn.example.com/ad.mp4"}'},
                 {"slot": Slot(640, 360)})
    unit.start_ad()  # inside a running event loop
"""

from .ad_session import AdSession, AdState, EmittedEvent, QuartileTracker
from .ad_unit import VpaidAdUnit
from .config import SUPPORTED_VPAID_VERSION, AdUnitConfig, HeadlessSurfaceConfig, TimeMode
from .event_bus import EventBus
from .events import AdEvent, UnitLogEvents
from .exceptions import (
    MissingResourceError,
    ParameterDecodeError,
    PlaybackStartError,
    VpaidConfigError,
    VpaidException,
)
from .headless_surface import HeadlessSurface, headless_surface_factory
from .parameters import AdParameters, NeverSkippable, SkippableAfter, decode_ad_parameters
from .surface import InteractionKind, PlaybackSurface, Slot, SurfaceOptions
from .time_provider import (
    RealtimeTimeProvider,
    SimulatedTimeProvider,
    TimeProvider,
    create_time_provider,
)
from .unit_factory import UnitFactory, create_ad_unit, get_vpaid_ad

__version__ = "1.0.0"

__all__ = [
    # Main classes
    "VpaidAdUnit",
    "EventBus",
    "UnitFactory",
    "create_ad_unit",
    "get_vpaid_ad",
    # Session state
    "AdSession",
    "AdState",
    "EmittedEvent",
    "QuartileTracker",
    # Events
    "AdEvent",
    "UnitLogEvents",
    # Creative parameters
    "AdParameters",
    "NeverSkippable",
    "SkippableAfter",
    "decode_ad_parameters",
    # Surfaces
    "PlaybackSurface",
    "HeadlessSurface",
    "headless_surface_factory",
    "InteractionKind",
    "Slot",
    "SurfaceOptions",
    # Configuration
    "SUPPORTED_VPAID_VERSION",
    "AdUnitConfig",
    "HeadlessSurfaceConfig",
    "TimeMode",
    # Exceptions
    "VpaidException",
    "ParameterDecodeError",
    "MissingResourceError",
    "PlaybackStartError",
    "VpaidConfigError",
    # Time providers
    "TimeProvider",
    "RealtimeTimeProvider",
    "SimulatedTimeProvider",
    "create_time_provider",
]
