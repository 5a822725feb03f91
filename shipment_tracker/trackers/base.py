"""Base tracker - the fetch, parse and normalize template every carrier follows."""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..app.models import Track
from ..app.status import StatusResolver
from ..config import TrackerSettings, split_params
from ..const import DATA_PROVIDER_DEFAULT, DEFAULT_LANGUAGE, Status
from ..exceptions import DecodeFailure, InvalidArgument, ParseFailure, ShipmentTrackerError
from ..providers.client import ClientRegistry, DataProvider

_LOGGER = logging.getLogger(__name__)


@dataclass
class TrackingRequest:
    """State scoped to a single ``track()`` call."""

    tracking_number: str
    language: str
    tracking_url_params: Dict[str, Any] = field(default_factory=dict)
    endpoint_url_params: Dict[str, Any] = field(default_factory=dict)
    cache: Dict[str, Any] = field(default_factory=dict)


class AbstractTracker(ABC):
    """Base class for carrier trackers.

    Subclasses build the user facing URL, optionally a separate endpoint
    URL, and turn the fetched content into a Track. ``track()`` runs the
    steps in a fixed order and always returns the events sorted.
    """

    carrier: str = ""
    language: str = DEFAULT_LANGUAGE
    default_data_provider: str = DATA_PROVIDER_DEFAULT
    status_resolver: Optional[StatusResolver] = None

    def __init__(self, clients: ClientRegistry, settings: Optional[TrackerSettings] = None) -> None:
        """Initialize the tracker.

        Args:
            clients: Data providers the tracker may fetch with
            settings: Optional settings, defaults apply when omitted
        """
        self._clients = clients
        self.settings = settings or TrackerSettings()
        self._data_provider = self.default_data_provider

    @property
    def name(self) -> str:
        return self.carrier or type(self).__name__

    @property
    def data_provider(self) -> str:
        """Name of the data provider used for fetching."""
        return self._data_provider

    def use_data_provider(self, name: str) -> "AbstractTracker":
        """Select the data provider to fetch with.

        Raises:
            InvalidArgument: If no provider is registered under the name
        """
        if name not in self._clients:
            raise InvalidArgument(f"No data provider registered as [{name}]")
        self._data_provider = name
        return self

    def get_data_provider(self) -> DataProvider:
        return self._clients.get(self._data_provider)

    @staticmethod
    def validate_language(language: str) -> str:
        if not isinstance(language, str) or len(language) != 2:
            raise InvalidArgument(f"Invalid language [{language}].")
        return language.lower()

    def new_request(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> TrackingRequest:
        """Validate the arguments of a ``track()`` call into request state."""
        tracking_params, endpoint_params = split_params(params)
        if language is not None:
            language = self.validate_language(language)

        return TrackingRequest(
            tracking_number=tracking_number,
            language=language or self.language,
            tracking_url_params=tracking_params,
            endpoint_url_params=endpoint_params,
        )

    async def track(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Track:
        """Track the given number.

        Args:
            tracking_number: Carrier issued identifier, passed through unvalidated
            language: Optional 2-letter language code, the tracker default otherwise
            params: Extra query params, flat or split by ``tracking_url``/``endpoint_url``

        Returns:
            Track with events sorted, most recent first

        Raises:
            InvalidArgument: For a malformed language or params, before any fetch
            FetchFailure: If the carrier could not be reached
            ParseFailure: If the content lacks the expected structure
        """
        request = self.new_request(tracking_number, language, params)

        url = self._build_endpoint_url(tracking_number, request.language, request.endpoint_url_params)
        _LOGGER.debug("Tracking %s with %s via %s", tracking_number, self.name, url)

        contents = await self.fetch(url, request)

        try:
            track = await self.build_response(contents, request)
        except ShipmentTrackerError:
            raise
        except (KeyError, IndexError, TypeError, ValueError) as err:
            raise ParseFailure(self.name, tracking_number, f"{type(err).__name__}: {err}") from err

        _LOGGER.debug("Parsed %d events for %s", len(track.events), tracking_number)
        return track.sort_events()

    def tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Build the URL of the user friendly tracking page. Performs no I/O.

        Raises:
            InvalidArgument: For malformed params
        """
        tracking_params, _ = split_params(params)
        return self._build_tracking_url(tracking_number, language, tracking_params)

    def endpoint_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Build the URL the tracking data is fetched from."""
        _, endpoint_params = split_params(params)
        return self._build_endpoint_url(tracking_number, language, endpoint_params)

    @abstractmethod
    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Build the tracking page URL from params meant for it alone."""

    def _build_endpoint_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        # in most cases the data is fetched from the tracking page itself
        return self._build_tracking_url(tracking_number, language, params)

    async def fetch(self, url: str, request: TrackingRequest) -> str:
        return await self.get_data_provider().get(url)

    @abstractmethod
    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        """Parse fetched content into a Track."""

    def resolve_status(self, text: Optional[str]) -> Status:
        if self.status_resolver is None:
            return Status.UNKNOWN
        return self.status_resolver.resolve(text)

    def parse_failure(self, request: TrackingRequest, reason: Optional[str] = None) -> ParseFailure:
        return ParseFailure(self.name, request.tracking_number, reason)

    def decode_json(self, contents: str, request: TrackingRequest) -> Any:
        """Decode a JSON response, memoized for the duration of the request."""
        if "json" in request.cache:
            return request.cache["json"]

        try:
            data = json.loads(contents)
        except (TypeError, ValueError) as err:
            raise DecodeFailure(self.name, request.tracking_number, str(err)) from err

        if not data:
            raise DecodeFailure(self.name, request.tracking_number, "empty document")

        request.cache["json"] = data
        return data

    def __repr__(self) -> str:
        return f"<{type(self).__name__} language={self.language} data_provider={self._data_provider}>"
