"""Tests for the FedEx tracker."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from shipment_tracker.const import Status


class TestFedexUrls:
    def test_tracking_url(self, tracker_registry):
        url = tracker_registry.get("Fedex").tracking_url("123456789012")

        assert url == "https://www.fedex.com/apps/fedextrack/?tracknumbers=123456789012"

    def test_endpoint_url(self, tracker_registry):
        assert tracker_registry.get("Fedex").endpoint_url("123456789012") == "https://www.fedex.com/trackingCal/track"


class TestFedexTrack:
    @pytest.mark.asyncio
    async def test_delivered(self, make_tracker):
        tracker, _ = make_tracker("Fedex", "delivered.txt")

        track = await tracker.track("123456789012")

        assert len(track.events) == 6
        assert track.current_status() == Status.DELIVERED
        assert track.delivered()
        assert track.recipient == "K.MILLER"
        assert track.latest_event().date == datetime(2016, 4, 14, 10, 12, tzinfo=timezone(timedelta(hours=-5)))
        assert track.latest_event().location == "CHICAGO, IL"

    @pytest.mark.asyncio
    async def test_weights(self, make_tracker):
        tracker, _ = make_tracker("Fedex", "delivered.txt")

        track = await tracker.track("123456789012")

        assert track.get_additional_details("totalKgsWgt") == "2.3"
        assert track.get_additional_details("totalLbsWgt") == "5.0"

    @pytest.mark.asyncio
    async def test_posts_the_track_packages_request(self, make_tracker):
        tracker, client = make_tracker("Fedex", "delivered.txt")

        await tracker.track("123456789012")

        method, url, kwargs = client.calls[0]
        payload = json.loads(kwargs["data"]["data"])
        assert method == "POST"
        assert url == "https://www.fedex.com/trackingCal/track"
        assert kwargs["data"]["action"] == "trackpackages"
        assert payload["TrackPackagesRequest"]["trackingInfoList"][0]["trackNumberInfo"] == {
            "trackingNumber": "123456789012"
        }
