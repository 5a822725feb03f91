"""Data models for shipment tracking - carrier-agnostic."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..const import Status
from ..exceptions import InvalidArgument, MissingDetail
from ..utils import ensure_utf8, parse_datetime

MISSING = object()


class AdditionalDetails:
    """Open-ended key/value sidecar for carrier specific data."""

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(data or {})

    def add(self, key: str, value: Any) -> "AdditionalDetails":
        """Set a detail, replacing any previous value for the key."""
        self._data[key] = value
        return self

    def get(self, key: Optional[str] = None, default: Any = MISSING) -> Any:
        """Get one detail, or a copy of all details when no key is given.

        Raises:
            MissingDetail: If the key was never set and no default is given
        """
        if key is None:
            return dict(self._data)
        if key in self._data:
            return self._data[key]
        if default is MISSING:
            raise MissingDetail(key)
        return default

    def has(self) -> bool:
        return bool(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdditionalDetails):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"AdditionalDetails({self._data!r})"


class _HasDetails:
    """Delegates the additional-details API to a ``details`` bag."""

    details: AdditionalDetails

    def add_additional_details(self, key: str, value: Any):
        self.details.add(key, value)
        return self

    def get_additional_details(self, key: Optional[str] = None, default: Any = MISSING) -> Any:
        return self.details.get(key, default)

    def has_additional_details(self) -> bool:
        return self.details.has()


@dataclass(frozen=True)
class Event(_HasDetails):
    """Represents a single tracking event."""

    location: str = ""
    date: Optional[datetime] = None
    description: str = ""
    status: Status = Status.UNKNOWN
    details: AdditionalDetails = field(default_factory=AdditionalDetails, compare=False)

    def __post_init__(self) -> None:
        # frozen, so normalised values are written through object.__setattr__
        object.__setattr__(self, "location", ensure_utf8(self.location or ""))
        object.__setattr__(self, "description", ensure_utf8(self.description or ""))
        if isinstance(self.details, dict):
            object.__setattr__(self, "details", AdditionalDetails(self.details))
        try:
            object.__setattr__(self, "status", Status(self.status))
        except ValueError as err:
            raise InvalidArgument(f"Unknown status [{self.status}]") from err

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Create an event from a field map, ignoring unrelated keys.

        A string ``date`` is parsed, a string ``status`` is coerced to Status.
        """
        eligible = {key: data[key] for key in ("date", "location", "description", "status") if key in data}
        if "date" in eligible:
            eligible["date"] = parse_datetime(eligible["date"])
        return cls(**eligible)


class Track(_HasDetails):
    """The full event history of one shipment."""

    def __init__(self, events: Optional[Iterable[Event]] = None) -> None:
        self._events: List[Event] = list(events or [])
        self._events_are_sorted = False
        self._recipient: Optional[str] = None
        self.details = AdditionalDetails()

    @property
    def events(self) -> List[Event]:
        return list(self._events)

    def add_event(self, event: Event) -> "Track":
        self._events.append(event)
        self._events_are_sorted = False
        return self

    def has_events(self) -> bool:
        return bool(self._events)

    def delivered(self) -> bool:
        """Check if any event marks the shipment as delivered."""
        return any(event.status == Status.DELIVERED for event in self._events)

    def current_status(self) -> Status:
        latest = self.latest_event()
        return latest.status if latest else Status.UNKNOWN

    def latest_event(self) -> Optional[Event]:
        """Get the latest event.

        After sort_events() this is the most recent event by date. Before
        sorting it is the last event added, since carriers list history in
        arbitrary order. Tracks returned by a tracker are always sorted.
        """
        if not self._events:
            return None
        return self._events[0] if self._events_are_sorted else self._events[-1]

    @property
    def recipient(self) -> Optional[str]:
        """Name of whoever accepted the shipment, None when not known."""
        return self._recipient

    @recipient.setter
    def recipient(self, value: Optional[str]) -> None:
        self._recipient = ensure_utf8(value) if value else None

    def sort_events(self) -> "Track":
        """Sort events by date descending, undated events last."""
        self._events.sort(key=_sort_key, reverse=True)
        self._events_are_sorted = True
        return self

    def __repr__(self) -> str:
        return (
            f"Track(events={len(self._events)}, status={self.current_status().value}, "
            f"recipient={self._recipient!r})"
        )


def _sort_key(event: Event) -> tuple:
    # aware dates compare as naive UTC so carriers may mix both
    date = event.date
    if date is not None and date.tzinfo is not None:
        date = date.astimezone(timezone.utc).replace(tzinfo=None)
    return (date is not None, date)
