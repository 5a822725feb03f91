"""Tests for the AbstractTracker template shared by every carrier."""

import pytest

from shipment_tracker.app.models import Event, Track
from shipment_tracker.app.status import StatusResolver
from shipment_tracker.const import DATA_PROVIDER_ALT, Status
from shipment_tracker.exceptions import (
    DecodeFailure,
    FetchFailure,
    InvalidArgument,
    ParseFailure,
)
from shipment_tracker.providers.client import ClientRegistry, DataProvider
from shipment_tracker.trackers.base import AbstractTracker
from shipment_tracker.utils import parse_datetime


class RecordingClient(DataProvider):
    def __init__(self, body="{}"):
        self.body = body
        self.urls = []

    async def get(self, url, options=None):
        self.urls.append(url)
        return self.body


class FailingClient(DataProvider):
    async def get(self, url, options=None):
        raise FetchFailure(url, "connection refused")


class EchoTracker(AbstractTracker):
    """Minimal JSON tracker: {"events": [{"date": ..., "text": ...}]}"""

    carrier = "Echo"
    language = "de"
    status_resolver = StatusResolver([(Status.DELIVERED, ["delivered"])])

    def __init__(self, clients, settings=None):
        super().__init__(clients, settings)
        self.requests = []

    def _build_tracking_url(self, tracking_number, language=None, params=None):
        query = "&".join(f"{key}={value}" for key, value in sorted((params or {}).items()))
        return f"https://echo.example/{language or self.language}/{tracking_number}?{query}"

    def _build_endpoint_url(self, tracking_number, language=None, params=None):
        query = "&".join(f"{key}={value}" for key, value in sorted((params or {}).items()))
        return f"https://api.echo.example/{language or self.language}/{tracking_number}?{query}"

    async def build_response(self, contents, request):
        self.requests.append(request)
        data = self.decode_json(contents, request)
        # second read hits the call-scoped cache
        assert self.decode_json("not json", request) is data

        track = Track()
        for item in data["events"]:
            track.add_event(
                Event(
                    date=parse_datetime(item["date"]),
                    description=item["text"],
                    status=self.resolve_status(item["text"]),
                )
            )
        return track


BODY = (
    '{"events": ['
    '{"date": "2016-07-15 10:00:00", "text": "posted"},'
    '{"date": "2016-07-18 12:21:00", "text": "delivered"},'
    '{"date": "2016-07-16 08:00:00", "text": "sorted"}'
    "]}"
)


def _tracker(client=None):
    clients = ClientRegistry().register("default-http", client or RecordingClient(BODY))
    return EchoTracker(clients)


class TestTrack:
    @pytest.mark.asyncio
    async def test_returns_sorted_track(self):
        track = await _tracker().track("123")

        assert [event.description for event in track.events] == ["delivered", "sorted", "posted"]
        assert track.current_status() == Status.DELIVERED
        assert track.delivered()

    @pytest.mark.asyncio
    async def test_fetches_the_endpoint_url(self):
        client = RecordingClient(BODY)

        await _tracker(client).track("123")

        assert client.urls == ["https://api.echo.example/de/123?"]

    @pytest.mark.asyncio
    async def test_language_override(self):
        client = RecordingClient(BODY)
        tracker = _tracker(client)

        await tracker.track("123", language="EN")

        assert client.urls == ["https://api.echo.example/en/123?"]
        assert tracker.language == "de"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("language", ["deu", "d", ""])
    async def test_invalid_language_fails_before_fetch(self, language):
        client = RecordingClient(BODY)

        with pytest.raises(InvalidArgument):
            await _tracker(client).track("123", language=language)

        assert client.urls == []

    @pytest.mark.asyncio
    async def test_flat_params_reach_the_endpoint(self):
        client = RecordingClient(BODY)

        await _tracker(client).track("123", params={"foo": "bar"})

        assert client.urls == ["https://api.echo.example/de/123?foo=bar"]

    @pytest.mark.asyncio
    async def test_split_params_reach_only_their_url(self):
        client = RecordingClient(BODY)
        tracker = _tracker(client)

        await tracker.track(
            "123",
            params={"tracking_url": {"page": "1"}, "endpoint_url": {"api": "2"}},
        )

        request = tracker.requests[0]
        assert client.urls == ["https://api.echo.example/de/123?api=2"]
        assert request.tracking_url_params == {"page": "1"}
        assert request.endpoint_url_params == {"api": "2"}

    @pytest.mark.asyncio
    async def test_invalid_params_fail_before_fetch(self):
        client = RecordingClient(BODY)

        with pytest.raises(InvalidArgument):
            await _tracker(client).track("123", params={"foo": {"deep": "map"}})

        assert client.urls == []

    @pytest.mark.asyncio
    async def test_request_state_is_not_shared_between_calls(self):
        tracker = _tracker()

        await tracker.track("123")
        await tracker.track("456", language="en")

        first, second = tracker.requests
        assert first.tracking_number == "123"
        assert second.tracking_number == "456"
        assert first.language == "de"
        assert second.language == "en"
        assert first.cache is not second.cache

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self):
        with pytest.raises(FetchFailure):
            await _tracker(FailingClient()).track("123")

    @pytest.mark.asyncio
    async def test_missing_keys_become_parse_failures(self):
        with pytest.raises(ParseFailure) as exc_info:
            await _tracker(RecordingClient('{"no_events": []}')).track("123")

        assert exc_info.value.carrier == "Echo"
        assert exc_info.value.tracking_number == "123"
        assert "123" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unparseable_dates_become_parse_failures(self):
        body = '{"events": [{"date": "yesterday-ish", "text": "posted"}]}'

        with pytest.raises(ParseFailure):
            await _tracker(RecordingClient(body)).track("123")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["<html>", "", "{}", "[]"])
    async def test_undecodable_json(self, body):
        with pytest.raises(DecodeFailure):
            await _tracker(RecordingClient(body)).track("123")


class TestTrackingUrl:
    def test_is_pure_and_needs_no_data_provider(self):
        tracker = EchoTracker(ClientRegistry())

        first = tracker.tracking_url("123", "en", {"foo": "bar"})
        second = tracker.tracking_url("123", "en", {"foo": "bar"})

        assert first == second == "https://echo.example/en/123?foo=bar"

    def test_split_params_apply_only_to_their_url(self):
        tracker = EchoTracker(ClientRegistry())
        params = {"tracking_url": {"page": "1"}, "endpoint_url": {"api": "2"}}

        assert tracker.tracking_url("123", "en", params) == "https://echo.example/en/123?page=1"
        assert tracker.endpoint_url("123", "en", params) == "https://api.echo.example/en/123?api=2"

    def test_flat_params_apply_to_both_urls(self):
        tracker = EchoTracker(ClientRegistry())

        assert tracker.tracking_url("123", "en", {"foo": "bar"}).endswith("?foo=bar")
        assert tracker.endpoint_url("123", "en", {"foo": "bar"}).endswith("?foo=bar")

    def test_invalid_params(self):
        with pytest.raises(InvalidArgument):
            EchoTracker(ClientRegistry()).tracking_url("123", params={"foo": {"deep": "map"}})


class TestDataProviders:
    def test_use_data_provider(self):
        clients = ClientRegistry().register("default-http", RecordingClient()).register("alt-http", RecordingClient())
        tracker = EchoTracker(clients)

        assert tracker.use_data_provider(DATA_PROVIDER_ALT) is tracker
        assert tracker.data_provider == DATA_PROVIDER_ALT
        assert tracker.get_data_provider() is clients.get(DATA_PROVIDER_ALT)

    def test_unknown_data_provider(self):
        tracker = EchoTracker(ClientRegistry())

        with pytest.raises(InvalidArgument):
            tracker.use_data_provider("carrier-pigeon")

    def test_abstract_tracker_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            AbstractTracker(ClientRegistry())

    def test_resolve_without_table_is_unknown(self):
        class Bare(EchoTracker):
            status_resolver = None

        assert Bare(ClientRegistry()).resolve_status("delivered") == Status.UNKNOWN
