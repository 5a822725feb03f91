"""Carrier name to tracker lookup."""

import importlib
import inspect
import logging
from typing import Dict, List, Mapping, Optional, Type, Union

from .config import TrackerSettings
from .const import DATA_PROVIDER_CUSTOM
from .exceptions import InvalidArgument, UnknownCarrier
from .providers.client import DataProvider, build_client_registry
from .trackers import (
    DHL,
    GLS,
    UPS,
    USPS,
    AbstractTracker,
    Dachser,
    DHLExpress,
    Fedex,
    PostAT,
    PostCH,
    PostNord,
)

_LOGGER = logging.getLogger(__name__)

TrackerType = Type[AbstractTracker]

DEFAULT_TRACKERS: Dict[str, TrackerType] = {
    "DHL": DHL,
    "DHLExpress": DHLExpress,
    "UPS": UPS,
    "USPS": USPS,
    "GLS": GLS,
    "Fedex": Fedex,
    "PostAT": PostAT,
    "PostCH": PostCH,
    "PostNord": PostNord,
    "Dachser": Dachser,
}


class TrackerRegistry:
    """Builds trackers by carrier name.

    Names are matched case-insensitively. Registering a name that already
    exists replaces the previous tracker.
    """

    def __init__(self, trackers: Optional[Mapping[str, TrackerType]] = None) -> None:
        self._trackers: Dict[str, TrackerType] = {}
        self._names: Dict[str, str] = {}

        for name, tracker in (DEFAULT_TRACKERS if trackers is None else trackers).items():
            self.set(name, tracker)

    def get(
        self,
        name: str,
        client: Optional[DataProvider] = None,
        settings: Optional[TrackerSettings] = None,
    ) -> AbstractTracker:
        """Create a tracker for the carrier.

        Args:
            name: Carrier name, e.g. "DHL"
            client: Optional data provider, registered and selected as "custom"
            settings: Optional settings for the tracker and its data providers

        Raises:
            UnknownCarrier: If nothing is registered under the name
        """
        tracker_class = self._trackers.get(name.lower()) if isinstance(name, str) else None
        if tracker_class is None:
            raise UnknownCarrier(name)

        tracker = tracker_class(build_client_registry(settings, client), settings)
        if client is not None:
            tracker.use_data_provider(DATA_PROVIDER_CUSTOM)

        return tracker

    def set(self, name: str, tracker: Union[TrackerType, str]) -> "TrackerRegistry":
        """Register a tracker class, or the dotted path of one, under a name.

        Raises:
            InvalidArgument: If the tracker cannot be resolved or is not a concrete AbstractTracker
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgument(f"Invalid carrier name [{name}]")

        if isinstance(tracker, str):
            tracker = self._import(tracker)

        if not (isinstance(tracker, type) and issubclass(tracker, AbstractTracker)):
            raise InvalidArgument(f"[{tracker!r}] is not a tracker")
        if inspect.isabstract(tracker):
            raise InvalidArgument(f"[{tracker.__name__}] leaves abstract methods unimplemented")

        _LOGGER.debug("Registering tracker %s as %s", tracker.__name__, name)
        self._trackers[name.lower()] = tracker
        self._names[name.lower()] = name
        return self

    def names(self) -> List[str]:
        return sorted(self._names.values())

    def __contains__(self, name: str) -> bool:
        return isinstance(name, str) and name.lower() in self._trackers

    @staticmethod
    def _import(path: str) -> object:
        # "package.module:Class" or "package.module.Class"
        module_name, _, attribute = path.rpartition(":") if ":" in path else path.rpartition(".")
        if not module_name or not attribute:
            raise InvalidArgument(f"Invalid tracker path [{path}]")

        try:
            module = importlib.import_module(module_name)
        except ImportError as err:
            raise InvalidArgument(f"Cannot import tracker module [{module_name}]") from err

        try:
            return getattr(module, attribute)
        except AttributeError:
            raise InvalidArgument(f"No tracker [{attribute}] in [{module_name}]") from None


registry = TrackerRegistry()


def get_tracker(
    name: str,
    client: Optional[DataProvider] = None,
    settings: Optional[TrackerSettings] = None,
) -> AbstractTracker:
    """Create a tracker from the default registry."""
    return registry.get(name, client, settings)


def register_tracker(name: str, tracker: Union[TrackerType, str]) -> None:
    """Register a tracker in the default registry."""
    registry.set(name, tracker)
