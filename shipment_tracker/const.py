"""Constants for the shipment tracker."""

from enum import Enum


class Status(str, Enum):
    """Normalized shipment status."""

    UNKNOWN = "unknown"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    PICKUP = "pickup"
    EXCEPTION = "exception"
    WARNING = "warning"


# Data provider names
DATA_PROVIDER_DEFAULT = "default-http"
DATA_PROVIDER_ALT = "alt-http"
DATA_PROVIDER_CUSTOM = "custom"

DEFAULT_LANGUAGE = "en"

# Request configuration
REQUEST_TIMEOUT = 30  # seconds
MAX_RETRIES = 3
RETRY_DELAY_BASE = 2  # Base delay in seconds for exponential backoff
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Environment keys
ENV_TIMEOUT = "SHIPMENT_TRACKER_TIMEOUT"
ENV_MAX_RETRIES = "SHIPMENT_TRACKER_MAX_RETRIES"
ENV_USER_AGENT = "SHIPMENT_TRACKER_USER_AGENT"
ENV_POSTNORD_API_KEY = "POSTNORD_API_KEY"

# URL parameter partition keys
PARAMS_TRACKING_URL = "tracking_url"
PARAMS_ENDPOINT_URL = "endpoint_url"

# Carrier endpoints
DHL_SERVICE_ENDPOINT = "http://nolp.dhl.de/nextt-online-public/set_identcodes.do"
DHL_EXPRESS_ENDPOINT = "http://www.dhl.com/shipmentTracking"
DHL_EXPRESS_TRACKING_URLS = {
    "de": "http://www.dhl.com/en/hidden/component_library/express/local_express/dhl_de_tracking/de/sendungsverfolgung_dhlde.html",
    "en": "http://www.dhl.com/en/hidden/component_library/express/local_express/dhl_de_tracking/en/tracking_dhlde.html",
}
UPS_SERVICE_ENDPOINT = "http://wwwapps.ups.com/WebTracking/track"
USPS_SERVICE_ENDPOINT = "https://tools.usps.com/go/TrackConfirmAction"
GLS_ENDPOINT = "https://gls-group.eu/app/service/open/rest/DE/{language}/rstt001"
GLS_TRACKING_URLS = {
    "de": "https://gls-group.eu/DE/de/paketverfolgung",
    "en": "https://gls-group.eu/DE/en/parcel-tracking",
}
GLS_PARCEL_SHOP_URL = "http://api.customlocation.nokia.com/v1/search/attribute"
FEDEX_TRACKING_URL = "https://www.fedex.com/apps/fedextrack/"
FEDEX_SERVICE_ENDPOINT = "https://www.fedex.com/trackingCal/track"
POST_AT_ENDPOINTS = {
    "de": "https://www.post.at/sendungsverfolgung.php/details",
    "en": "https://www.post.at/en/track_trace.php/details",
}
POST_CH_SERVICE_ENDPOINT = "https://service.post.ch/EasyTrack/submitParcelData.do"
POST_NORD_ENDPOINT = "https://api2.postnord.com/rest/shipment/v5/trackandtrace/findByIdentifier.json"
DACHSER_ENDPOINT = (
    "http://partner.dachser.com/shp2/?wicket:interface=:5:pnlHead:frmHead:btnSearch::"
    "IActivePageBehaviorListener:0:-1&wicket:ignoreIfNotActive=true"
    "&random=0.35369399622175934&tfiSearch={tracking_number}"
)
