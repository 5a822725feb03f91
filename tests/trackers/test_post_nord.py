"""Tests for the PostNord tracker."""

from datetime import datetime

import pytest

from shipment_tracker.config import TrackerSettings
from shipment_tracker.const import Status
from shipment_tracker.providers.client import build_client_registry
from shipment_tracker.trackers import PostNord


class TestPostNordUrls:
    def test_tracking_url_carries_the_api_key(self):
        tracker = PostNord(build_client_registry(), TrackerSettings(postnord_api_key="abc"))

        assert tracker.tracking_url("84971563697SE") == (
            "https://api2.postnord.com/rest/shipment/v5/trackandtrace/findByIdentifier.json"
            "?apikey=abc&id=84971563697SE&locale=en"
        )

    def test_locale(self, tracker_registry):
        assert "locale=sv" in tracker_registry.get("PostNord").tracking_url("84971563697SE", "sv")


class TestPostNordTrack:
    @pytest.mark.asyncio
    async def test_available_for_pickup(self, make_tracker):
        tracker, client = make_tracker("PostNord", "in_transit.txt")

        track = await tracker.track("84971563697SE")

        assert len(track.events) == 4
        assert track.current_status() == Status.PICKUP
        assert not track.delivered()
        assert track.latest_event().date == datetime(2017, 3, 3, 13, 2)
        assert "id=84971563697SE" in client.calls[0][1]

    @pytest.mark.asyncio
    async def test_locations(self, make_tracker):
        tracker, _ = make_tracker("PostNord", "in_transit.txt")

        track = await tracker.track("84971563697SE")

        assert [event.location for event in track.events] == ["Göteborg", "SE", "Stockholm", "Sweden"]
        assert [event.status for event in track.events][1:] == [Status.IN_TRANSIT] * 3
