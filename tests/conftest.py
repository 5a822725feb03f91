"""Shared fixtures: data providers that answer from files instead of the network."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from shipment_tracker.providers.client import DataProvider
from shipment_tracker.registry import TrackerRegistry

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(carrier: str, name: str) -> str:
    return (FIXTURES / carrier / name).read_text(encoding="utf-8")


class FileMapperClient(DataProvider):
    """Answers every request with fixture file contents.

    ``mapping`` maps a URL substring to a file name; the first matching
    entry wins and ``default`` covers everything else. Calls are recorded.
    """

    def __init__(self, carrier: str, default: Optional[str] = None, mapping: Optional[Dict[str, str]] = None) -> None:
        self.carrier = carrier
        self.default = default
        self.mapping = mapping or {}
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

    def _contents(self, url: str) -> str:
        for needle, name in self.mapping.items():
            if needle in url:
                return read_fixture(self.carrier, name)
        if self.default is None:
            raise AssertionError(f"No fixture mapped for {url}")
        return read_fixture(self.carrier, self.default)

    async def get(self, url: str, options: Optional[Dict[str, Any]] = None) -> str:
        self.calls.append(("GET", url, {"options": options}))
        return self._contents(url)

    async def request(self, method, url, headers=None, data=None, json=None) -> str:
        self.calls.append((method, url, {"headers": headers, "data": data, "json": json}))
        return self._contents(url)


class StaticClient(DataProvider):
    """Answers every request with the same body."""

    def __init__(self, body: str = "") -> None:
        self.body = body
        self.calls: List[str] = []

    async def get(self, url: str, options: Optional[Dict[str, Any]] = None) -> str:
        self.calls.append(url)
        return self.body

    async def request(self, method, url, headers=None, data=None, json=None) -> str:
        self.calls.append(url)
        return self.body


@pytest.fixture
def tracker_registry():
    return TrackerRegistry()


@pytest.fixture
def make_tracker(tracker_registry):
    """Build a tracker for a carrier that reads the given fixture files."""

    def _make(carrier: str, default: Optional[str] = None, mapping: Optional[Dict[str, str]] = None):
        client = FileMapperClient(carrier, default, mapping)
        return tracker_registry.get(carrier, client=client), client

    return _make


@pytest.fixture
def static_tracker(tracker_registry):
    """Build a tracker for a carrier whose data provider always returns ``body``."""

    def _make(carrier: str, body: str = ""):
        client = StaticClient(body)
        return tracker_registry.get(carrier, client=client), client

    return _make
