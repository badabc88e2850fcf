"""Tests for Tracker."""

from datetime import datetime, timezone

import pytest


class TestTrackerTrack:
    """Tests for Tracker.track() method."""

    @pytest.mark.asyncio
    async def test_track_creates_event(self, tracker, storage):
        """Test that track() creates a TraceEvent."""
        await tracker.track(
            event_type="case_viewed",
            actor="u1",
            data={"case_id": "c1"},
        )

        events = await storage.get_trace_events()
        assert len(events) == 1
        assert events[0].event_type == "case_viewed"
        assert events[0].actor == "u1"
        assert events[0].data == {"case_id": "c1"}

    @pytest.mark.asyncio
    async def test_track_generates_id(self, tracker, storage):
        """Test that track() generates a unique ID."""
        await tracker.track(event_type="case_viewed", actor="u1", data={})
        await tracker.track(event_type="case_viewed", actor="u1", data={})

        events = await storage.get_trace_events()
        assert len({e.id for e in events}) == 2

    @pytest.mark.asyncio
    async def test_track_generates_timestamp(self, tracker, storage):
        """Test that track() stamps the event with the current UTC time."""
        before = datetime.now(timezone.utc)

        await tracker.track(event_type="case_viewed", actor="u1", data={})

        events = await storage.get_trace_events()
        assert events[0].timestamp >= before.replace(microsecond=0)
        assert events[0].timestamp.tzinfo is not None
