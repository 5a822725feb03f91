"""FedEx tracker."""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from ..app.models import Event, Track
from ..app.status import MATCH_EXACT, StatusResolver
from ..const import FEDEX_SERVICE_ENDPOINT, FEDEX_TRACKING_URL, Status
from ..utils import parse_datetime
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url


class Fedex(AbstractTracker):
    """Posts a TrackPackagesRequest to the FedEx tracking service."""

    carrier = "Fedex"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, ["DL"]),
            (Status.IN_TRANSIT, ["PU", "OC", "AR", "DP", "OD"]),
        ],
        match=MATCH_EXACT,
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        return build_url(FEDEX_TRACKING_URL, {"tracknumbers": tracking_number}, params)

    def _build_endpoint_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        return build_url(FEDEX_SERVICE_ENDPOINT, params)

    async def fetch(self, url: str, request: TrackingRequest) -> str:
        return await self.get_data_provider().request(
            "POST",
            url,
            headers={"Accept": "application/json"},
            data={
                "data": self._build_request_data(request.tracking_number),
                "action": "trackpackages",
            },
        )

    @staticmethod
    def _build_request_data(tracking_number: str) -> str:
        return json.dumps(
            {
                "TrackPackagesRequest": {
                    "trackingInfoList": [
                        {"trackNumberInfo": {"trackingNumber": tracking_number}},
                    ]
                }
            }
        )

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        package = self.decode_json(contents, request)["TrackPackagesResponse"]["packageList"][0]

        track = Track()
        for scan_event in package["scanEventList"]:
            status = self.resolve_status(scan_event["statusCD"])
            track.add_event(
                Event(
                    location=scan_event["scanLocation"],
                    description=scan_event["status"],
                    date=self._get_date(scan_event),
                    status=status,
                )
            )

            if status == Status.DELIVERED and package.get("receivedByNm"):
                track.recipient = package["receivedByNm"]

        for weight in ("totalKgsWgt", "totalLbsWgt"):
            if weight in package:
                track.add_additional_details(weight, package[weight])

        return track

    @staticmethod
    def _get_date(scan_event: Dict[str, Any]) -> Optional[datetime]:
        # date "2016-04-12", time "14:22:00", gmtOffset "-05:00"
        return parse_datetime(f"{scan_event['date']}T{scan_event['time']}{scan_event['gmtOffset']}")
