"""Austrian Post (Post AG) tracker."""

import re
from typing import Any, Dict, Optional

from bs4 import Tag

from ..app.models import Event, Track
from ..app.status import StatusResolver
from ..const import POST_AT_ENDPOINTS, Status
from ..utils import parse_datetime
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url, node_value, to_soup

# "Datum: 21.03.2016 10:32 Sendung in Zustellung; 1100 Wien"
_ROW = re.compile(r"(date|datum): ([\d.:\s]+)(.*?)(?:; (.*)|$)", re.IGNORECASE)


class PostAT(AbstractTracker):
    """Scrapes the post.at Sendungsverfolgung history list."""

    carrier = "PostAT"
    language = "de"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, [
                "Delivered",
                "Zugestellt",
            ]),
            (Status.IN_TRANSIT, [
                "Item posted abroad",
                "Postaufgabe im Ausland",
                "Item ready for international transport",
                "Sendung für Auslandstransport bereit",
                "Item in process of delivery",
                "Sendung in Zustellung",
                "Item being processed in Austria",
                "Sendung in Bearbeitung Österreich",
                "Item arrived in Austria",
                "Sendung in Österreich angekommen",
                "soon ready for pick up",
                "In Kürze abholbereit",
            ]),
            (Status.PICKUP, [
                "ready for pick up",
                "Sendung abholbereit",
            ]),
        ],
        case_sensitive=False,
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        language = language if language in POST_AT_ENDPOINTS else self.language

        return build_url(POST_AT_ENDPOINTS[language], {"pnum1": tracking_number}, params)

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        history = to_soup(contents).select_one("div.sendungsstatus-history")
        if history is None:
            raise self.parse_failure(request, "status history not found")

        track = Track()
        for row in history.select("ul li"):
            track.add_event(self._event_from_row(row))

        return track

    def _event_from_row(self, row: Tag) -> Event:
        match = _ROW.search(node_value(row) or "")
        if not match:
            return Event()

        _, date, description, location = match.groups()
        description = description.strip()

        return Event(
            date=parse_datetime(date, dayfirst=True),
            description=description,
            location=location or "",
            status=self.resolve_status(description),
        )
