"""Carrier trackers."""

from .base import AbstractTracker, TrackingRequest
from .dachser import Dachser
from .dhl import DHL
from .dhl_express import DHLExpress
from .fedex import Fedex
from .gls import GLS
from .post_at import PostAT
from .post_ch import PostCH
from .post_nord import PostNord
from .ups import UPS
from .usps import USPS

__all__ = [
    "AbstractTracker",
    "TrackingRequest",
    "DHL",
    "DHLExpress",
    "Dachser",
    "Fedex",
    "GLS",
    "PostAT",
    "PostCH",
    "PostNord",
    "UPS",
    "USPS",
]
