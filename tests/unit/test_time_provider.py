"""Unit tests for time providers."""

import pytest

from vpaid_unit.config import TimeMode
from vpaid_unit.time_provider import (
    RealtimeTimeProvider,
    SimulatedTimeProvider,
    TimeProvider,
    create_time_provider,
)


class TestRealtimeTimeProvider:
    """Test RealtimeTimeProvider (wall-clock time)."""

    def test_now_returns_time(self):
        """Test that now() is monotonic."""
        provider = RealtimeTimeProvider()
        t1 = provider.now()
        t2 = provider.now()

        assert isinstance(t1, float)
        assert t2 >= t1

    @pytest.mark.asyncio
    async def test_sleep(self):
        """Test async sleep with realtime provider."""
        provider = RealtimeTimeProvider()

        start = provider.now()
        await provider.sleep(0.05)

        assert provider.elapsed_time(start) >= 0.05

    def test_mode(self):
        assert RealtimeTimeProvider().get_mode() == TimeMode.REAL


class TestSimulatedTimeProvider:
    """Test SimulatedTimeProvider (virtual time)."""

    def test_creation(self):
        provider = SimulatedTimeProvider()

        assert provider.speed == 1.0
        assert provider.now() == 0.0

    def test_initial_time(self):
        provider = SimulatedTimeProvider(initial_time=100.0)

        assert provider.now() == 100.0

    @pytest.mark.parametrize("speed", [0, -1.0])
    def test_invalid_speed(self, speed):
        with pytest.raises(ValueError, match="Speed must be positive"):
            SimulatedTimeProvider(speed=speed)

    def test_advance(self):
        """Test advancing virtual time."""
        provider = SimulatedTimeProvider()

        provider.advance(5.0)

        assert provider.now() == 5.0
        assert provider.elapsed_time(2.0) == 3.0

    @pytest.mark.asyncio
    async def test_sleep_advances_virtual_time(self):
        """Test sleep moves virtual time by seconds * speed."""
        provider = SimulatedTimeProvider(speed=2.0)

        await provider.sleep(1.5)

        assert provider.now() == 3.0

    def test_mode(self):
        assert SimulatedTimeProvider().get_mode() == TimeMode.SIMULATED


class TestCreateTimeProvider:
    """Test create_time_provider factory."""

    def test_simulated_by_default(self):
        assert isinstance(create_time_provider(), SimulatedTimeProvider)

    def test_from_string(self):
        assert isinstance(create_time_provider("real"), RealtimeTimeProvider)
        assert isinstance(create_time_provider("simulated", speed=4.0), SimulatedTimeProvider)

    def test_speed_passed_through(self):
        provider = create_time_provider(TimeMode.SIMULATED, speed=4.0)

        assert provider.speed == 4.0

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            create_time_provider("warp")

    def test_is_abstract(self):
        with pytest.raises(TypeError):
            TimeProvider()  # type: ignore[abstract]
