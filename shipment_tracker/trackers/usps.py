"""USPS tracker."""

from typing import Any, Dict, Optional

from ..app.models import Event, Track
from ..app.status import StatusResolver
from ..const import DATA_PROVIDER_ALT, USPS_SERVICE_ENDPOINT, Status
from ..utils import parse_datetime
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url, cells, to_soup


class USPS(AbstractTracker):
    """Scrapes the USPS Track & Confirm results table.

    Rows that belong to the same day leave date and location empty, so
    the previous row's values are carried forward.
    """

    carrier = "USPS"
    default_data_provider = DATA_PROVIDER_ALT
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, [
                "Delivered",
            ]),
            (Status.IN_TRANSIT, [
                "Notice Left",
                "Arrived at Unit",
                "Departed USPS Facility",
                "Arrived at USPS Facility",
                "Processed Through Sort Facility",
                "Origin Post is Preparing Shipment",
                "Acceptance",
                "Out for Delivery",
                "Sorting Complete",
            ]),
        ]
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        return build_url(USPS_SERVICE_ENDPOINT, {"qtc_tLabels1": tracking_number}, params)

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        table = to_soup(contents).select_one("table#tc-hits")
        if table is None:
            raise self.parse_failure(request, "tracking history table not found")

        track = Track()
        last_location = ""
        last_date = None

        for row in table.select("tr.detail-wrapper"):
            date, description, location = [value.replace(" ,", ",") for value in cells(row)[:3]]

            last_location = location or last_location
            last_date = parse_datetime(date) or last_date

            track.add_event(
                Event(
                    date=last_date,
                    description=description,
                    location=last_location,
                    status=self.resolve_status(description),
                )
            )

        return track
