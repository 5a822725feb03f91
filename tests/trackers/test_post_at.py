"""Tests for the Austrian Post tracker."""

from datetime import datetime

import pytest

from shipment_tracker.const import Status


class TestPostATUrls:
    def test_tracking_url(self, tracker_registry):
        url = tracker_registry.get("PostAT").tracking_url("RR123456789AT")

        assert url == "https://www.post.at/sendungsverfolgung.php/details?pnum1=RR123456789AT"

    def test_english_url(self, tracker_registry):
        url = tracker_registry.get("PostAT").tracking_url("RR123456789AT", "en")

        assert url == "https://www.post.at/en/track_trace.php/details?pnum1=RR123456789AT"

    def test_unsupported_language_falls_back(self, tracker_registry):
        url = tracker_registry.get("PostAT").tracking_url("RR123456789AT", "fr")

        assert url.startswith("https://www.post.at/sendungsverfolgung.php/details")


class TestPostATTrack:
    @pytest.mark.asyncio
    async def test_delivered(self, make_tracker):
        tracker, _ = make_tracker("PostAT", "delivered.txt")

        track = await tracker.track("RR123456789AT")

        assert len(track.events) == 5
        assert track.current_status() == Status.DELIVERED
        assert track.delivered()

        latest = track.latest_event()
        assert latest.date == datetime(2016, 3, 22, 11, 4)
        assert latest.description == "Zugestellt"
        assert latest.location == "1100 Wien"

    @pytest.mark.asyncio
    async def test_rows_without_location(self, make_tracker):
        tracker, _ = make_tracker("PostAT", "delivered.txt")

        track = await tracker.track("RR123456789AT")
        arrived = next(event for event in track.events if "angekommen" in event.description)

        assert arrived.location == ""
        assert arrived.status == Status.IN_TRANSIT

    @pytest.mark.asyncio
    async def test_pickup_is_case_insensitive(self, make_tracker):
        tracker, _ = make_tracker("PostAT", "pickup.txt")

        track = await tracker.track("RR123456789AT", "en")

        assert len(track.events) == 4
        assert track.current_status() == Status.PICKUP
        assert [event.status for event in track.events] == [
            Status.PICKUP,
            Status.IN_TRANSIT,
            Status.IN_TRANSIT,
            Status.UNKNOWN,
        ]
        assert track.events[-1].date is None
