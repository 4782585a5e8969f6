"""Pytest configuration and shared fixtures for ad unit tests."""

import sys
from pathlib import Path

import pytest


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fakes import EventRecorder, FakeSurfaceFactory, RecordingMetrics, creative_data

from vpaid_unit.ad_unit import VpaidAdUnit
from vpaid_unit.config import AdUnitConfig, HeadlessSurfaceConfig, TimeMode
from vpaid_unit.log_config import clear_session_context
from vpaid_unit.surface import Slot
from vpaid_unit.time_provider import SimulatedTimeProvider


# ==================== Configuration Fixtures ====================


@pytest.fixture
def unit_config() -> AdUnitConfig:
    """Create default ad unit configuration."""
    return AdUnitConfig()


@pytest.fixture
def fast_surface_config() -> HeadlessSurfaceConfig:
    """Headless surface that plays a 10 second creative in virtual time."""
    return HeadlessSurfaceConfig(
        duration_sec=10.0,
        tick_interval_sec=0.5,
        time_mode=TimeMode.SIMULATED,
    )


# ==================== Unit Fixtures ====================


@pytest.fixture
def slot() -> Slot:
    return Slot(width=640, height=360)


@pytest.fixture
def surface_factory() -> FakeSurfaceFactory:
    return FakeSurfaceFactory(duration=10.0)


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def unit(unit_config, surface_factory, metrics) -> VpaidAdUnit:
    """Ad unit wired to a fake surface factory and recording metrics."""
    return VpaidAdUnit(
        config=unit_config,
        surface_factory=surface_factory,
        metrics=metrics,
        time_provider=SimulatedTimeProvider(),
    )


@pytest.fixture
def recorder(unit) -> EventRecorder:
    """Event recorder subscribed to every event of ``unit``."""
    return EventRecorder().attach(unit)


@pytest.fixture
def loaded_unit(unit, recorder, slot):
    """Unit initialized with a 5 second skippable creative."""
    unit.init_ad(
        640,
        360,
        "normal",
        500,
        creative_data(
            videoUrl="https://cdn.example.com/a.mp4",
            clickThroughUrl="https://advertiser.example.com",
            skippableAfter=5,
        ),
        {"slot": slot},
    )
    recorder.clear()
    return unit


@pytest.fixture(autouse=True)
def _clear_logging_context():
    yield
    clear_session_context()
