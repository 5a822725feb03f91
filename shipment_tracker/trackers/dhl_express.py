"""DHL Express tracker."""

import re
from datetime import datetime
from typing import Any, Dict, Optional

from ..app.models import Event, Track
from ..app.status import MATCH_PREFIX, StatusResolver
from ..const import DHL_EXPRESS_ENDPOINT, DHL_EXPRESS_TRACKING_URLS, Status
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url

# German month and weekday names as they appear in checkpoint dates
_DATE_TRANSLATIONS = {
    "Januar": "January",
    "Februar": "February",
    "März": "March",
    "Mai": "May",
    "Juni": "June",
    "Juli": "July",
    "Oktober": "October",
    "Dezember": "December",
    "Montag": "Monday",
    "Dienstag": "Tuesday",
    "Mittwoch": "Wednesday",
    "Donnerstag": "Thursday",
    "Freitag": "Friday",
    "Samstag": "Saturday",
    "Sonntag": "Sunday",
}
_GERMAN_DATE_WORDS = re.compile(r"\b(" + "|".join(_DATE_TRANSLATIONS) + r")\b")


class DHLExpress(AbstractTracker):
    """Reads the DHL Express shipment tracking JSON endpoint."""

    carrier = "DHLExpress"
    language = "de"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, [
                "Delivered - Signed",
                "Sendung zugestellt - übernommen",
            ]),
            (Status.IN_TRANSIT, [
                "With delivery courier",
                "Sendung in Zustellung",
                "Arrived at",
                "Ankunft in der",
                "Departed Facility",
                "Verlässt DHL-Niederlassung",
                "Transferred through",
                "Sendung im Transit",
                "Processed at",
                "Sendung sortiert",
                "Clearance processing",
                "Verzollung abgeschlossen",
                "Customs status updated",
                "Verzollungsstatus aktualisiert",
                "Shipment picked up",
                "Sendung abgeholt",
            ]),
        ],
        match=MATCH_PREFIX,
    )

    def _build_tracking_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        language = language or self.language
        url = DHL_EXPRESS_TRACKING_URLS.get(language, DHL_EXPRESS_TRACKING_URLS["de"])

        return build_url(url, {"AWB": tracking_number, "brand": "DHL"}, params)

    def _build_endpoint_url(
        self,
        tracking_number: str,
        language: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        return build_url(
            DHL_EXPRESS_ENDPOINT,
            {"AWB": tracking_number, "languageCode": language or self.language},
            params,
        )

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        shipment = self.decode_json(contents, request)["results"][0]

        track = Track()
        for checkpoint in shipment["checkpoints"]:
            event = Event(
                status=self.resolve_status(checkpoint["description"]),
                location=checkpoint.get("location") or "",
                description=checkpoint["description"],
                date=self._get_date(checkpoint),
            )
            if "pIds" in checkpoint:
                event.add_additional_details("pieces", checkpoint["pIds"])

            track.add_event(event)

        if shipment.get("delivery", {}).get("status") == "delivered":
            track.recipient = shipment.get("signature", {}).get("signatory")

        pieces = shipment.get("pieces") or {}
        if "pIds" in pieces:
            track.add_additional_details("pieces", pieces["pIds"])

        return track

    @staticmethod
    def _get_date(checkpoint: Dict[str, Any]) -> datetime:
        date_string = _GERMAN_DATE_WORDS.sub(lambda match: _DATE_TRANSLATIONS[match.group(1)], checkpoint["date"])

        # "Monday, July 18, 2016" + "12:21"
        return datetime.strptime(f"{date_string.strip()} {checkpoint['time'].strip()}", "%A, %B %d, %Y %H:%M")
