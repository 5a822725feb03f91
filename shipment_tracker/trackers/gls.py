"""GLS tracker."""

import json
import logging
from typing import Any, Dict, List, Optional

from ..app.models import Event, Track
from ..app.status import MATCH_EXACT, StatusResolver
from ..const import GLS_ENDPOINT, GLS_PARCEL_SHOP_URL, GLS_TRACKING_URLS, Status
from ..exceptions import DecodeFailure
from ..utils import parse_datetime
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url

_LOGGER = logging.getLogger(__name__)


class GLS(AbstractTracker):
    """Reads the GLS track and trace REST endpoint.

    Statuses are resolved from GLS event numbers. When a parcel waits in a
    parcel shop, the shop's address and opening hours are fetched with a
    second request and attached to the track as ``parcelShop``.
    """

    carrier = "GLS"
    language = "de"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, [
                "3.120",  # unconfirmed
                "3.121",
                "3.0",
            ]),
            (Status.IN_TRANSIT, [
                "0.0",
                "0.100",
                "1.0",
                "11.0",
                "2.0",
                "2.106",
                "2.29",
                "4.40",
                "90.132",
                "35.40",
                "8.0",
                "6.211",
            ]),
            (Status.PICKUP, [
                "3.124",
            ]),
        ],
        match=MATCH_EXACT,
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        language = language or self.language
        url = GLS_TRACKING_URLS.get(language, GLS_TRACKING_URLS["de"])

        return build_url(url, {"match": tracking_number}, params)

    def _build_endpoint_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        url = GLS_ENDPOINT.format(language=language or self.language)

        return build_url(url, {"match": tracking_number}, params)

    @staticmethod
    def parcel_shop_details_url(shop_id: str) -> str:
        return build_url(
            GLS_PARCEL_SHOP_URL,
            {
                "jsonpCallback": "C",
                "appId": "s0Ej52VXrLa6AUJEenti",
                "layerId": "48",
                "query": f"[like]/name3/{shop_id}",
                "rangeQuery": "",
                "limit": "1",
            },
        )

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        response = self.decode_json(contents, request)

        if "exceptionText" in response:
            raise self.parse_failure(request, response["exceptionText"])

        status = response["tuStatus"][0]
        event_numbers = status["progressBar"]["evtNos"]

        track = Track()
        for index, history_item in enumerate(status["history"]):
            event_number = event_numbers[index]
            event_status = self.resolve_status(event_number)

            event = Event(
                status=event_status,
                location=self._get_location(history_item),
                description=history_item["evtDscr"],
                date=parse_datetime(f"{history_item['date']} {history_item['time']}"),
            )
            event.add_additional_details("eventNumber", event_number)
            track.add_event(event)

            if event_status == Status.DELIVERED:
                track.recipient = status.get("signature", {}).get("value")

            if event_status == Status.PICKUP and "parcelShop" not in track.details:
                shop_id = status["parcelShop"]["psID"]
                track.add_additional_details("parcelShop", await self._get_parcel_shop_details(shop_id, request))

        return track

    @staticmethod
    def _get_location(history_item: Dict[str, Any]) -> str:
        address = history_item["address"]
        return f"{address['city']}, {address['countryName']}"

    async def _get_parcel_shop_details(self, shop_id: str, request: TrackingRequest) -> Dict[str, Any]:
        url = self.parcel_shop_details_url(shop_id)
        _LOGGER.debug("Fetching GLS parcel shop %s", shop_id)

        contents = await self.fetch(url, request)
        return self._parse_parcel_shop_details(contents, request)

    def _parse_parcel_shop_details(self, contents: str, request: TrackingRequest) -> Dict[str, Any]:
        # JSONP: C({...});
        payload = contents.strip()[2:-2]
        try:
            response = json.loads(payload)
        except ValueError as err:
            raise DecodeFailure(self.name, request.tracking_number, f"parcel shop details: {err}") from err

        if not response.get("locations"):
            return {}

        location = response["locations"][0]
        details = {
            "name": location["name1"],
            "street": location["street"],
            "zip": location["postalCode"],
            "city": location["city"],
            "phone": location.get("phone", ""),
            "workingHours": self._get_working_hours(location["description"]),
        }

        additional_info = self._get_additional_info(location)
        if additional_info:
            details["additionalInfo"] = additional_info

        return details

    @staticmethod
    def _get_working_hours(description: str) -> List[str]:
        # "Mo: 08:00-12:00|#14:00-18:00|Di: ..."
        return description.replace("|#", "; ").replace("#", "").split("|")

    @staticmethod
    def _get_additional_info(location: Dict[str, Any]) -> Optional[str]:
        for attribute in location.get("customAttributes", []):
            if attribute["name"] == "ADDITIONAL_INFO":
                return attribute["value"]
        return None
