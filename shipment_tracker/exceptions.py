"""Errors raised by the shipment tracker."""

from typing import Optional


class ShipmentTrackerError(Exception):
    """Base error for the shipment tracker."""


class UnknownCarrier(ShipmentTrackerError, LookupError):
    """Error to indicate no tracker is registered for a carrier."""

    def __init__(self, carrier: str) -> None:
        super().__init__(f"Unknown carrier [{carrier}]")
        self.carrier = carrier


class InvalidArgument(ShipmentTrackerError, ValueError):
    """Error to indicate a malformed argument or registration."""


class MissingDetail(ShipmentTrackerError, KeyError):
    """Error to indicate an additional detail was never set."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No additional data set for [{key}].")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class FetchFailure(ShipmentTrackerError):
    """Error to indicate the carrier endpoint could not be reached."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        message = f"Could not fetch [{url}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url


class ParseFailure(ShipmentTrackerError):
    """Error to indicate the fetched content lacks the expected structure."""

    def __init__(
        self, carrier: str, tracking_number: Optional[str], reason: Optional[str] = None
    ) -> None:
        message = f"Unable to parse {carrier} tracking data for [{tracking_number}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.carrier = carrier
        self.tracking_number = tracking_number


class DecodeFailure(ParseFailure):
    """Error to indicate the fetched JSON or XML could not be decoded at all."""
