"""UPS tracker."""

from datetime import datetime
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from ..app.models import Event, Track
from ..app.status import StatusResolver
from ..const import UPS_SERVICE_ENDPOINT, Status
from ..utils import parse_datetime
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url, cells, node_value, to_soup


class UPS(AbstractTracker):
    """Scrapes the UPS WebTracking shipment progress table."""

    carrier = "UPS"
    language = "de"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, [
                "Delivered",
                "Zugestellt",
            ]),
            (Status.IN_TRANSIT, [
                "Auftrag verarbeitet",
                "Ready for UPS",
                "Scan",
                "Out For Delivery",
                "receiver requested a hold for a future delivery date",
                "receiver was not available at the time of the first delivery attempt",
                "war beim 1. Zustellversuch nicht anwesend",
                "Adresse wurde korrigiert und die Zustellung neu terminiert",
                "The address has been corrected",
                "A final attempt will be made",
                "ltiger Versuch erfolgt",
            ]),
            (Status.WARNING, [
                "attempting to obtain a new delivery address",
                "eine neue Zustelladresse für den Empf",
                "nderung für dieses Paket ist in Bearbeitung",
                "A delivery change for this package is in progress",
                "The receiver was not available at the time of the final delivery attempt",
            ]),
            (Status.EXCEPTION, [
                "Exception",
                "Adressfehlers konnte die Sendung nicht zugestellt",
                "nger ist unbekannt",
                "The address is incomplete",
                "ist falsch",
                "is incorrect",
                "ltigen Zustellversuch nicht anwesend",
                "receiver was not available at the time of the final delivery attempt",
            ]),
        ]
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        language = language or self.language

        return build_url(
            UPS_SERVICE_ENDPOINT,
            {
                "loc": "de_DE" if language == "de" else "en_US",
                "track": "yes",
                "trackNums": tracking_number,
            },
            params,
        )

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        soup = to_soup(contents)

        table = soup.select_one("table.dataTable")
        if table is None:
            raise self.parse_failure(request, "shipment progress table not found")

        track = Track()
        last_location = ""

        for row in table.find_all("tr")[1:]:  # first row is the heading
            location, date, time, description = cells(row)[:4]
            last_location = location or last_location
            status = self.resolve_status(description)

            track.add_event(
                Event(
                    location=last_location,
                    date=self._get_date(date, time),
                    description=description,
                    status=status,
                )
            )

            if status == Status.DELIVERED:
                recipient = self._get_recipient(soup)
                if recipient:
                    track.recipient = recipient

        return track

    @staticmethod
    def _get_date(date: str, time: str) -> Optional[datetime]:
        # German pages use 18.07.2016, English ones 07/18/2016
        return parse_datetime(f"{date} {time}", dayfirst="." in date)

    @staticmethod
    def _get_recipient(soup: BeautifulSoup) -> Optional[str]:
        nodes = soup.select("fieldset dl dt")
        if len(nodes) > 3:
            return node_value(nodes[3])
        return None
