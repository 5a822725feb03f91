"""Text and date helpers shared by models and trackers."""

import logging
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as date_parser

_LOGGER = logging.getLogger(__name__)


def ensure_utf8(value: Any) -> Any:
    """Return value with every string in it as valid UTF-8 text.

    Bytes are decoded as UTF-8, falling back to Latin-1 for legacy pages.
    Lists and dicts are walked recursively, anything else is returned as is.
    """
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.decode("latin-1")
    if isinstance(value, str):
        # Lone surrogates cannot be encoded, replace them
        return value.encode("utf-8", "replace").decode("utf-8")
    if isinstance(value, dict):
        return {key: ensure_utf8(item) for key, item in value.items()}
    if isinstance(value, list):
        return [ensure_utf8(item) for item in value]
    return value


def squash_whitespace(value: Optional[str]) -> str:
    """Trim a string and collapse runs of whitespace into one space."""
    if not value:
        return ""
    return " ".join(value.split())


def parse_datetime(value: Any, dayfirst: bool = False) -> Optional[datetime]:
    """Parse a carrier date string.

    Args:
        value: datetime, ISO string or free-form date string
        dayfirst: Read ambiguous numeric dates as day.month

    Returns:
        Parsed datetime, or None for an empty value

    Raises:
        ValueError: If a non-empty string cannot be parsed
    """
    if value is None or isinstance(value, datetime):
        return value

    value = str(value).strip()
    if not value:
        return None

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass

    try:
        return date_parser.parse(value, dayfirst=dayfirst)
    except (ValueError, OverflowError) as err:
        _LOGGER.debug("Failed to parse datetime: %s", value)
        raise ValueError(f"Unparseable date [{value}]") from err
