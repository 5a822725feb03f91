"""Dachser tracker."""

import re
from datetime import datetime
from typing import Any, Dict, Optional

from lxml import etree

from ..app.models import Event, Track
from ..app.status import MATCH_EXACT, StatusResolver
from ..const import DACHSER_ENDPOINT, Status
from ..exceptions import DecodeFailure
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url, cells, to_soup

_TIME = re.compile(r"(\d{2}:\d{2})")
_WEIGHT = re.compile(r"(?:Weight|Gewicht)\s+(\d+)\s*kg")
_DETAILS = re.compile(r"NVE/SSCC\s+(\d+)\s+Consignment number\s+(\d+)")


class Dachser(AbstractTracker):
    """Posts to the Dachser partner portal and reads its ajax response.

    The response is a wicket XML envelope whose ``ide`` component carries
    the HTML of the shipment status. Only the latest status is published,
    so the track holds a single event.
    """

    carrier = "Dachser"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, ["Delivered"]),
            (Status.IN_TRANSIT, ["Ausgang Verladeterminal"]),
        ],
        match=MATCH_EXACT,
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        return build_url(DACHSER_ENDPOINT.format(tracking_number=tracking_number), params)

    async def fetch(self, url: str, request: TrackingRequest) -> str:
        return await self.get_data_provider().request("POST", url)

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        soup = to_soup(self._extract_html(contents, request))

        heading = soup.find("th")
        if heading is None:
            raise self.parse_failure(request, "status table not found")

        status_row = heading.find_parent("tr").find_next_sibling("tr")
        if status_row is None:
            raise self.parse_failure(request, "status row not found")

        _, date, time, status, location = cells(status_row)[:5]

        track = Track()
        track.add_event(
            Event(
                date=self._get_date(date, time),
                status=self.resolve_status(status),
                location=location,
                description=status,
            )
        )

        text = soup.get_text(" ")
        weight = _WEIGHT.search(text)
        track.add_additional_details("weight", int(weight.group(1)) if weight else None)

        details = _DETAILS.search(text)
        track.add_additional_details("nve", details.group(1) if details else None)
        track.add_additional_details("consignment_number", details.group(2) if details else None)

        return track

    def _extract_html(self, contents: str, request: TrackingRequest) -> str:
        try:
            root = etree.fromstring(contents.encode("utf-8"))
        except etree.XMLSyntaxError as err:
            raise DecodeFailure(self.name, request.tracking_number, str(err)) from err

        return "".join(
            "".join(component.itertext())
            for component in root.iter("component")
            if component.get("id") == "ide"
        )

    @staticmethod
    def _get_date(date: str, time: str) -> datetime:
        time_match = _TIME.search(time)
        time = time_match.group(1) if time_match else "00:00"

        date_format = "%m/%d/%Y %H:%M" if "/" in date else "%d.%m.%Y %H:%M"
        return datetime.strptime(f"{date} {time}", date_format)
