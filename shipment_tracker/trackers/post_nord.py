"""PostNord tracker."""

import logging
from typing import Any, Dict, Optional

from ..app.models import Event, Track
from ..app.status import MATCH_EXACT, StatusResolver
from ..const import POST_NORD_ENDPOINT, Status
from ..utils import parse_datetime
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url

_LOGGER = logging.getLogger(__name__)


class PostNord(AbstractTracker):
    """Reads the PostNord track and trace API.

    Requires an API key, taken from the ``POSTNORD_API_KEY`` setting.
    """

    carrier = "PostNord"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, ["DELIVERED"]),
            (Status.IN_TRANSIT, ["INFORMED", "EN_ROUTE", "OTHER"]),
            (Status.PICKUP, ["AVAILABLE_FOR_DELIVERY"]),
        ],
        match=MATCH_EXACT,
    )

    @property
    def api_key(self) -> str:
        return self.settings.postnord_api_key

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        return build_url(
            POST_NORD_ENDPOINT,
            {"apikey": self.api_key, "id": tracking_number, "locale": language or self.language},
            params,
        )

    async def fetch(self, url: str, request: TrackingRequest) -> str:
        if not self.api_key:
            _LOGGER.warning("POSTNORD_API_KEY not configured, the request will likely be rejected")
        return await super().fetch(url, request)

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        response = self.decode_json(contents, request)
        item = response["TrackingInformationResponse"]["shipments"][0]["items"][0]

        track = Track()
        for event in item["events"]:
            track.add_event(
                Event(
                    location=self._get_location(event["location"]),
                    description=event["eventDescription"],
                    date=parse_datetime(event["eventTime"]),
                    status=self.resolve_status(event["status"]),
                )
            )

        return track

    @staticmethod
    def _get_location(location: Dict[str, Any]) -> str:
        for key in ("city", "displayName", "country"):
            if key in location:
                return location[key]
        return ""
