"""Swiss Post tracker."""

import re
from typing import Any, Dict, Optional

from ..app.models import Event, Track
from ..app.status import StatusResolver
from ..const import POST_CH_SERVICE_ENDPOINT, Status
from ..utils import parse_datetime
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url, cells, to_soup

_ITEM_MARKER = re.compile(r"ITM_IMP_(.*?)\s")
_DATE_NOISE = re.compile(r"[a-zA-Z,]")


class PostCH(AbstractTracker):
    """Scrapes the Swiss Post EasyTrack events table."""

    carrier = "PostCH"
    language = "de"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, [
                "Delivered",
                "Zugestellt",
            ]),
            (Status.IN_TRANSIT, [
                "Mailed",
                "Aufgabe",
                "Sorting",
                "Sortierung",
                "Postal customs clearance",
                "Im Postverzollungsprozess",
                "Handed to customs",
                "An Zoll übergeben",
                "Arrival at border point",
                "Ankunft Grenzstelle Bestimmungsland",
                "Departure from border point",
                "Abgang Grenzstelle Aufgabeland",
                "Registered for collection",
                "Zur Abholung gemeldet",
                "Arrival at delivery post office",
                "Ankunft Zustellstelle",
            ]),
        ]
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        return build_url(
            POST_CH_SERVICE_ENDPOINT,
            {"formattedParcelCodes": tracking_number, "lang": language or self.language},
            params,
        )

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        table = to_soup(contents).select_one("table.events_view.fullview_tabledata")
        if table is None:
            raise self.parse_failure(request, "events table not found")

        track = Track()
        last_location = ""

        for row in table.select("tbody tr"):
            values = [_ITEM_MARKER.sub("", value + " ").strip() for value in cells(row)]
            date, time, description = values[:3]
            location = values[3] if len(values) > 3 else ""
            last_location = location or last_location

            track.add_event(
                Event(
                    # "Mi 18.07.2015" and "17:26"
                    date=parse_datetime(f"{_DATE_NOISE.sub('', date).strip()} {time}", dayfirst=True),
                    description=description,
                    location=last_location,
                    status=self.resolve_status(description),
                )
            )

        return track
