"""Track parcels across carriers with one normalized model."""

from .app.models import AdditionalDetails, Event, Track
from .app.status import StatusResolver
from .config import TrackerSettings, load_settings
from .const import Status
from .exceptions import (
    DecodeFailure,
    FetchFailure,
    InvalidArgument,
    MissingDetail,
    ParseFailure,
    ShipmentTrackerError,
    UnknownCarrier,
)
from .providers.client import DataProvider
from .registry import TrackerRegistry, get_tracker, register_tracker, registry
from .trackers.base import AbstractTracker

__version__ = "1.0.0"

__all__ = [
    "AbstractTracker",
    "AdditionalDetails",
    "DataProvider",
    "DecodeFailure",
    "Event",
    "FetchFailure",
    "InvalidArgument",
    "MissingDetail",
    "ParseFailure",
    "ShipmentTrackerError",
    "Status",
    "StatusResolver",
    "Track",
    "TrackerRegistry",
    "TrackerSettings",
    "UnknownCarrier",
    "get_tracker",
    "load_settings",
    "register_tracker",
    "registry",
]
