"""Configuration schemas for the shipment tracker."""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import voluptuous as vol

from .const import (
    DEFAULT_USER_AGENT,
    ENV_MAX_RETRIES,
    ENV_POSTNORD_API_KEY,
    ENV_TIMEOUT,
    ENV_USER_AGENT,
    MAX_RETRIES,
    PARAMS_ENDPOINT_URL,
    PARAMS_TRACKING_URL,
    REQUEST_TIMEOUT,
)
from .exceptions import InvalidArgument

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(ENV_TIMEOUT, default=REQUEST_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(ENV_MAX_RETRIES, default=MAX_RETRIES): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(ENV_USER_AGENT, default=DEFAULT_USER_AGENT): str,
        vol.Optional(ENV_POSTNORD_API_KEY, default=""): str,
    },
    extra=vol.REMOVE_EXTRA,
)

QUERY_VALUE = vol.Any(str, int, float, bool)
QUERY_PARAMS_SCHEMA = vol.Schema({str: QUERY_VALUE})

PARAMS_SCHEMA = vol.Schema(
    vol.Any(
        {
            vol.Required(PARAMS_TRACKING_URL): QUERY_PARAMS_SCHEMA,
            vol.Optional(PARAMS_ENDPOINT_URL): QUERY_PARAMS_SCHEMA,
        },
        {
            vol.Optional(PARAMS_TRACKING_URL): QUERY_PARAMS_SCHEMA,
            vol.Required(PARAMS_ENDPOINT_URL): QUERY_PARAMS_SCHEMA,
        },
        QUERY_PARAMS_SCHEMA,
    )
)

FETCH_OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional("timeout"): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional("headers"): {str: str},
    }
)


@dataclass(frozen=True)
class TrackerSettings:
    """Process-level settings passed to trackers and HTTP clients."""

    timeout: float = REQUEST_TIMEOUT
    max_retries: int = MAX_RETRIES
    user_agent: str = DEFAULT_USER_AGENT
    postnord_api_key: str = ""


def load_settings(env: Optional[Mapping[str, str]] = None) -> TrackerSettings:
    """Build settings from environment variables.

    Args:
        env: Mapping to read from, defaults to ``os.environ``

    Returns:
        Validated TrackerSettings

    Raises:
        InvalidArgument: If a value cannot be coerced
    """
    env = os.environ if env is None else env
    try:
        data = SETTINGS_SCHEMA(dict(env))
    except vol.Invalid as err:
        raise InvalidArgument(f"Invalid tracker settings: {err}") from err

    return TrackerSettings(
        timeout=data[ENV_TIMEOUT],
        max_retries=data[ENV_MAX_RETRIES],
        user_agent=data[ENV_USER_AGENT],
        postnord_api_key=data[ENV_POSTNORD_API_KEY],
    )


def validate_fetch_options(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Validate the options map accepted by a data provider's ``get``."""
    try:
        return FETCH_OPTIONS_SCHEMA(options or {})
    except vol.Invalid as err:
        raise InvalidArgument(f"Invalid fetch options: {err}") from err


def split_params(
    params: Optional[Dict[str, Any]],
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Partition URL params into tracking-URL and endpoint-URL params.

    A flat map applies to both URLs. A map keyed by ``tracking_url`` and/or
    ``endpoint_url`` applies each part only to its own URL.
    """
    if not params:
        return {}, {}

    try:
        params = PARAMS_SCHEMA(params)
    except vol.Invalid as err:
        raise InvalidArgument(f"Invalid URL params: {err}") from err

    if PARAMS_TRACKING_URL not in params and PARAMS_ENDPOINT_URL not in params:
        return dict(params), dict(params)

    return (
        dict(params.get(PARAMS_TRACKING_URL, {})),
        dict(params.get(PARAMS_ENDPOINT_URL, {})),
    )
