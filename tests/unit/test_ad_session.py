"""Unit tests for the ad session record."""

import pytest

from vpaid_unit.ad_session import AdSession, AdState, QuartileTracker
from vpaid_unit.events import AdEvent


class TestAdState:
    """Test lifecycle transitions."""

    def test_initial_state(self):
        session = AdSession()

        assert session.state == AdState.UNINITIALIZED
        assert session.skippable is False
        assert session.events == []

    @pytest.mark.parametrize(
        "path",
        [
            [AdState.LOADED, AdState.PLAYING, AdState.PAUSED, AdState.PLAYING, AdState.STOPPED],
            [AdState.LOADED, AdState.STOPPED],
            [AdState.STOPPED],
        ],
    )
    def test_valid_paths(self, path):
        """Test the lifecycle paths the unit drives."""
        session = AdSession()

        for state in path:
            assert session.transition(state) is True

        assert session.state == path[-1]

    @pytest.mark.parametrize(
        "start, target",
        [
            (AdState.UNINITIALIZED, AdState.PLAYING),
            (AdState.UNINITIALIZED, AdState.PAUSED),
            (AdState.LOADED, AdState.PAUSED),
            (AdState.PLAYING, AdState.LOADED),
        ],
    )
    def test_invalid_transitions(self, start, target):
        session = AdSession(state=start)

        assert session.transition(target) is False
        assert session.state == start

    @pytest.mark.parametrize("target", list(AdState))
    def test_stopped_is_terminal(self, target):
        """Test nothing leaves STOPPED."""
        session = AdSession(state=AdState.STOPPED)

        assert session.transition(target) is False
        assert session.is_stopped


class TestSkippableFlag:
    """Test the monotonic skippable flag."""

    def test_mark_once(self):
        session = AdSession()

        assert session.mark_skippable() is True
        assert session.mark_skippable() is False
        assert session.skippable is True


class TestQuartiles:
    """Test quartile bookkeeping."""

    @staticmethod
    def fire(session, progress):
        fired = session.pending_quartiles(progress)
        for event in fired:
            session.mark_quartile(event)
        return fired

    def test_below_first_threshold(self):
        session = AdSession()

        assert session.pending_quartiles(0.2499) == []

    def test_exact_thresholds(self):
        """Test thresholds are inclusive."""
        session = AdSession()

        assert self.fire(session, 0.25) == [AdEvent.AD_VIDEO_FIRST_QUARTILE]
        assert self.fire(session, 0.5) == [AdEvent.AD_VIDEO_MIDPOINT]
        assert self.fire(session, 0.75) == [AdEvent.AD_VIDEO_THIRD_QUARTILE]

    def test_jump_returns_ascending(self):
        """Test a jump past several thresholds returns each once, in order."""
        session = AdSession()

        assert self.fire(session, 0.9) == [
            AdEvent.AD_VIDEO_FIRST_QUARTILE,
            AdEvent.AD_VIDEO_MIDPOINT,
            AdEvent.AD_VIDEO_THIRD_QUARTILE,
        ]
        assert self.fire(session, 1.0) == []

    def test_pending_does_not_mark(self):
        """Test flags stay unset until each quartile is marked."""
        session = AdSession()

        session.pending_quartiles(0.9)

        assert session.quartiles.first_quartile is False
        assert session.pending_quartiles(0.9) == [
            AdEvent.AD_VIDEO_FIRST_QUARTILE,
            AdEvent.AD_VIDEO_MIDPOINT,
            AdEvent.AD_VIDEO_THIRD_QUARTILE,
        ]

    def test_mark_quartile_once(self):
        session = AdSession()

        assert session.mark_quartile(AdEvent.AD_VIDEO_MIDPOINT) is True
        assert session.mark_quartile(AdEvent.AD_VIDEO_MIDPOINT) is False
        assert session.pending_quartiles(0.6) == [AdEvent.AD_VIDEO_FIRST_QUARTILE]

    def test_mark_non_quartile(self):
        with pytest.raises(ValueError):
            AdSession().mark_quartile(AdEvent.AD_STARTED)

    def test_flags_never_reset(self):
        """Test going backwards does not re-arm fired quartiles."""
        session = AdSession()
        self.fire(session, 0.6)

        assert session.pending_quartiles(0.1) == []
        assert session.pending_quartiles(0.6) == []
        assert session.quartiles.first_quartile is True
        assert session.quartiles.midpoint is True
        assert session.quartiles.third_quartile is False

    def test_mark_complete_once(self):
        session = AdSession()

        assert session.mark_complete() is True
        assert session.mark_complete() is False

    def test_tracker_to_dict(self):
        tracker = QuartileTracker(first_quartile=True)

        assert tracker.to_dict() == {
            "firstQuartile": True,
            "midpoint": False,
            "thirdQuartile": False,
            "complete": False,
        }


class TestEventHistory:
    """Test recorded event history."""

    def test_record_event_uses_current_offset(self):
        session = AdSession()
        session.current_offset_sec = 2.5

        record = session.record_event(AdEvent.AD_VIDEO_FIRST_QUARTILE, 100.0)

        assert record.offset_sec == 2.5
        assert record.timestamp == 100.0
        assert session.event_names() == ["AdVideoFirstQuartile"]

    def test_count(self):
        session = AdSession()
        session.record_event(AdEvent.AD_ERROR, 0.0, {"message": "a"})
        session.record_event(AdEvent.AD_ERROR, 1.0, {"message": "b"})

        assert session.count(AdEvent.AD_ERROR) == 2
        assert session.count(AdEvent.AD_LOADED) == 0

    def test_to_dict(self):
        session = AdSession(session_id="session-1")
        session.record_event(AdEvent.AD_LOADED, 1.0)

        data = session.to_dict()

        assert data["session_id"] == "session-1"
        assert data["state"] == "uninitialized"
        assert data["parameters"] is None
        assert data["events"] == [
            {"timestamp": 1.0, "event": "AdLoaded", "offset_sec": 0.0, "data": None}
        ]

    def test_unique_session_ids(self):
        assert AdSession().session_id != AdSession().session_id
