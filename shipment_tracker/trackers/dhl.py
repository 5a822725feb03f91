"""DHL (Germany) parcel tracker."""

import logging
import re
from datetime import datetime
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup, Tag

from ..app.models import Event, Track
from ..app.status import StatusResolver
from ..const import DHL_SERVICE_ENDPOINT, Status
from .base import AbstractTracker, TrackingRequest
from .helpers import build_url, cells, description_for_term, node_value, to_soup

_LOGGER = logging.getLogger(__name__)

_DATE_NOISE = re.compile(r"[a-zA-Z,]")


class DHL(AbstractTracker):
    """Scrapes the DHL Sendungsverfolgung history table."""

    carrier = "DHL"
    language = "de"
    status_resolver = StatusResolver(
        [
            (Status.DELIVERED, [
                "aus der PACKSTATION abgeholt",
                "erfolgreich zugestellt",
                "hat die Sendung in der Filiale abgeholt",
                "des Nachnahme-Betrags an den Zahlungsempf",
                "Sendung wurde zugestellt an",
                "Die Sendung wurde ausgeliefert",
                "shipment has been successfully delivered",
                "recipient has picked up the shipment from the retail outlet",
                "recipient has picked up the shipment from the PACKSTATION",
                "item has been sent",
            ]),
            (Status.IN_TRANSIT, [
                "in das Zustellfahrzeug geladen",
                "im Start-Paketzentrum bearbeitet",
                "im Ziel-Paketzentrum bearbeitet",
                "im Paketzentrum bearbeitet",
                "Auftragsdaten zu dieser Sendung wurden vom Absender elektronisch an DHL",
                "auf dem Weg zur PACKSTATION",
                "wird in eine PACKSTATION weitergeleitet",
                "Die Sendung wurde abgeholt",
                "im Export-Paketzentrum bearbeitet",
                "Sendung wird ins Zielland transportiert und dort an die Zustellorganisation",
                "vom Absender in der Filiale eingeliefert",
                "Sendung konnte nicht in die PACKSTATION eingestellt werden und wurde in eine Filiale",
                "Sendung konnte nicht zugestellt werden und wird jetzt zur Abholung in die Filiale/Agentur gebracht",
                "shipment has been picked up",
                "instruction data for this shipment have been provided",
                "shipment has been processed",
                "shipment has been posted by the sender",
                "hipment has been loaded onto the delivery vehicle",
                "A 2nd attempt at delivery is being made",
                "shipment is on its way to the PACKSTATION",
                "forwarded to a PACKSTATION",
                "shipment could not be delivered to the PACKSTATION and has been forwarded to a retail outlet",
                "shipment could not be delivered, and the recipient has been notified",
                "Es erfolgt ein 2. Zustellversuch",
            ]),
            (Status.PICKUP, [
                "Die Sendung liegt in der PACKSTATION",
                "Uhrzeit der Abholung kann der Benachrichtigungskarte entnommen werden",
                "earliest time when it can be picked up can be found on the notification card",
                "shipment is ready for pick-up at the PACKSTATION",
            ]),
            (Status.WARNING, [
                "attempting to obtain a new delivery address",
                "eine neue Zustelladresse für den Empf",
                "Sendung wurde fehlgeleitet und konnte nicht zugestellt werden. Die Sendung wird umadressiert und an den",
                "shipment was misrouted and could not be delivered. The shipment will be readdressed and forwarded to the recipient",
            ]),
            (Status.EXCEPTION, [
                "cksendung eingeleitet",
                "Adressfehlers konnte die Sendung nicht zugestellt",
                "nger ist unbekannt",
                "The address is incomplete",
                "ist falsch",
                "is incorrect",
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
            DHL_SERVICE_ENDPOINT,
            {"lang": language or self.language, "idc": tracking_number},
            params,
        )

    async def build_response(self, contents: str, request: TrackingRequest) -> Track:
        soup = to_soup(contents)

        table = soup.select_one("div#pieceEvents0 table")
        if table is None:
            raise self.parse_failure(request, "history table not found")

        track = Track()
        for row in table.find_all("tr"):
            if not row.find("td"):
                continue  # heading

            event = self._parse_row(row)
            track.add_event(event)

            if event.status == Status.DELIVERED:
                recipient = self._get_recipient(soup)
                if recipient:
                    track.recipient = recipient
                else:
                    _LOGGER.debug("No recipient listed for delivered shipment %s", request.tracking_number)

        return track

    def _parse_row(self, row: Tag) -> Event:
        date, location, description = cells(row)[:3]

        return Event(
            date=self._get_date(date),
            location=location,
            description=description,
            status=self.resolve_status(description),
        )

    @staticmethod
    def _get_date(date_string: str) -> datetime:
        # "Sa, 18.07.16 12:21 Uhr" or "Sat, 18.07.16 12:21 h"
        date_string = _DATE_NOISE.sub("", date_string).strip()
        return datetime.strptime(date_string, "%d.%m.%y %H:%M")

    @staticmethod
    def _get_recipient(soup: BeautifulSoup) -> Optional[str]:
        details = soup.select_one("div.parcel-details")
        if details is None:
            return None

        recipient = description_for_term(details, ["Empfänger", "Recipient"])
        if recipient:
            return recipient

        # older pages list the recipient as the second description without a term
        nodes = details.select("dl dd")
        if len(nodes) > 1:
            return node_value(nodes[1])
        return None
