"""Zone Offset Resolution
-----------------------

Maps a zone reference and a UTC instant to the zone's UTC offset in minutes.

A zone reference is one of:
  - a zone identifier: "America/Los_Angeles", "UTC", "GMT+2", "+05:30"
  - an OffsetTable (pre-built per-zone offsets)
  - a datetime.tzinfo (zoneinfo.ZoneInfo, dateutil.tz zones, datetime.timezone)

Offsets count minutes *behind* UTC, the same sign convention offset tables use:

  >>> offset_minutes("America/Los_Angeles", 1460289600000)  # 2016-04-10T12:00Z, PDT
  420
  >>> offset_minutes("Europe/Berlin", 1460289600000)        # CEST
  -120
  >>> offset_minutes("UTC", 0)
  0
"""

from __future__ import annotations
import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Optional, Union

try:
    from dateutil import tz
    from dateutil.zoneinfo import get_zonefile_instance
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

from relativetime.errors import ConfigurationError, UnknownTimeZone
from relativetime.utils.resolver import suggest_closest
from relativetime.zones.zonetable import OffsetTable

logger = logging.getLogger(__name__)

ZoneReference = Union[str, OffsetTable, tzinfo]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_UTC_NAMES = {"UTC", "GMT", "Z", "UT"}

# "GMT+2", "UTC-07:00", "+0530", "-8"
_OFFSET_PATTERN = re.compile(r"(?:GMT|UTC)?([+-])(\d{1,2})(?::?(\d{2}))?", re.IGNORECASE)


# ---- Offset strings ----

def is_offset_string(value: str) -> bool:
    """True if value is a bare UTC offset such as "GMT+2" or "-07:00"."""
    return _OFFSET_PATTERN.fullmatch(value.strip()) is not None


def parse_offset_minutes(value: str) -> int:
    """Parse a formatted UTC offset into minutes behind UTC.

    "GMT", "UTC" and anything unparsable map to 0.

    Examples:
        >>> parse_offset_minutes("GMT-7")
        420
        >>> parse_offset_minutes("UTC+05:30")
        -330
        >>> parse_offset_minutes("GMT")
        0
    """
    value = value.strip()
    if value.upper() in _UTC_NAMES:
        return 0
    match = _OFFSET_PATTERN.search(value)
    if not match:
        return 0
    sign = -1 if match.group(1) == "-" else 1
    hours = int(match.group(2))
    minutes = int(match.group(3)) if match.group(3) else 0
    return -sign * (hours * 60 + minutes)


# ---- Zone identifiers ----

@lru_cache(maxsize=1)
def known_zone_names() -> tuple[str, ...]:
    """Zone identifiers bundled with python-dateutil."""
    return tuple(sorted(get_zonefile_instance().zones))


@lru_cache(maxsize=None)
def resolve_zone(identifier: str) -> tzinfo:
    """Resolve a zone identifier to a tzinfo, memoized per identifier.

    Resolution order:
      1. UTC aliases ("UTC", "GMT", "Z")
      2. Fixed offsets ("GMT+2", "-07:00")
      3. dateutil.tz.gettz (system zoneinfo, then dateutil's bundled data)

    Raises:
        UnknownTimeZone: If the identifier cannot be resolved. The error
            carries the closest known zone name when one is similar enough.
    """
    name = identifier.strip()
    if not name:
        raise UnknownTimeZone(identifier)

    if name.upper() in _UTC_NAMES:
        return tz.UTC

    # Fixed offsets must be handled before gettz, which reads "UTC+3" as a
    # POSIX TZ string with inverted sign.
    if is_offset_string(name):
        minutes_behind = parse_offset_minutes(name)
        return tz.tzoffset(name, -minutes_behind * 60)

    zone = tz.gettz(name)
    if zone is None:
        raise UnknownTimeZone(identifier, suggest_closest(name, known_zone_names()))

    logger.debug(f"Resolved time zone {name!r} to {zone!r}")
    return zone


# ---- Offsets ----

def _tzinfo_offset_minutes(zone: tzinfo, epoch_ms: int) -> int:
    moment = (EPOCH + timedelta(milliseconds=epoch_ms)).astimezone(zone)
    delta = moment.utcoffset()
    if delta is None:
        return 0
    return -round(delta.total_seconds() / 60)


def offset_minutes(zone: ZoneReference, epoch_ms: int) -> int:
    """UTC offset of zone at the given instant, in minutes behind UTC.

    Args:
        zone: Zone identifier, OffsetTable or tzinfo
        epoch_ms: UTC instant in milliseconds since the epoch

    Returns:
        Offset in minutes (positive west of Greenwich)

    Raises:
        UnknownTimeZone: If a zone identifier cannot be resolved
        ConfigurationError: If zone is not a recognized zone reference
    """
    if isinstance(zone, OffsetTable):
        return zone.offset_at(epoch_ms)
    if isinstance(zone, str):
        return _tzinfo_offset_minutes(resolve_zone(zone), epoch_ms)
    if isinstance(zone, tzinfo):
        return _tzinfo_offset_minutes(zone, epoch_ms)
    raise ConfigurationError(f"Unsupported zone reference: {zone!r}")


# ---- Zone identity ----

def zone_key(zone: Optional[ZoneReference]):
    """Comparable identity for a zone reference.

    Identifiers compare by stripped name, tables by content, ZoneInfo objects
    by key, other tzinfo objects by equality. Fixed zero-offset tzinfos
    (dateutil.tz.UTC, datetime.timezone.utc) are keyed as "UTC".

        >>> zone_key(timezone.utc) == zone_key(tz.UTC) == zone_key("UTC")
        True
    """
    if isinstance(zone, str):
        return zone.strip()
    if isinstance(zone, (timezone, tz.tzutc, tz.tzoffset)) and zone.utcoffset(None) == timedelta(0):
        return "UTC"
    key = getattr(zone, "key", None)
    if isinstance(key, str):
        return key
    return zone


def same_zone(a: Optional[ZoneReference], b: Optional[ZoneReference]) -> bool:
    """True if two zone references name the same zone."""
    return zone_key(a) == zone_key(b)


def zone_label(zone: Optional[ZoneReference]) -> str:
    """Short human-readable name for messages."""
    if isinstance(zone, str):
        return zone
    if isinstance(zone, OffsetTable):
        return zone.name or repr(zone)
    key = getattr(zone, "key", None)
    return key if isinstance(key, str) else repr(zone)


def clear_cache():
    """Clear resolved-zone caches."""
    resolve_zone.cache_clear()
    known_zone_names.cache_clear()
    logger.info("Cleared zone resolution cache")


__all__ = [
    "ZoneReference",
    "offset_minutes",
    "parse_offset_minutes",
    "is_offset_string",
    "resolve_zone",
    "known_zone_names",
    "zone_key",
    "same_zone",
    "zone_label",
    "clear_cache",
]
