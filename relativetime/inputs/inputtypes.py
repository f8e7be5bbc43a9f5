"""Temporal input variants.

Four explicit shapes a caller can hand to the formatter:

  EpochMillis(value)           bare millisecond count, needs a zone from context
  Instant(epoch_ms)            absolute UTC point, needs a zone from context
  ZonedDateTime(epoch_ms, zone)  UTC point plus its own zone
  PlainDateTime(fields)        wall-clock fields with no UTC anchor

Examples:
  >>> Instant.from_iso("2016-04-10T11:59:01Z").epoch_ms
  1460289541000
  >>> ZonedDateTime.from_iso("2016-04-09T17:00:00-07:00[America/Los_Angeles]").epoch_ms
  1460246400000
  >>> PlainDateTime.from_iso("2016-04-10 12:00:00").fields.hour
  12
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

try:
    from dateutil import parser as dateutil_parser
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

from relativetime.errors import MissingZoneContext, UnsupportedInputKind
from relativetime.timestamp.zonedtimestamp import ZonedTimestamp, datetime_to_epoch_ms
from relativetime.zones.zoneconvert import LocalFields, to_utc
from relativetime.zones.zoneoffset import ZoneReference

# 2016-04-10T12:00:00.000+02:00[Europe/Berlin], offset optional
_ZONED_ISO = re.compile(
    r"^(?P<local>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?)"
    r"(?P<offset>Z|[+-]\d{2}:?\d{2})?"
    r"\[(?P<zone>[^\]]+)\]$"
)


def _parse_iso(text: str, kind: str) -> datetime:
    try:
        return dateutil_parser.isoparse(text.strip())
    except (ValueError, OverflowError) as e:
        raise UnsupportedInputKind(f"Unsupported ISO string for {kind}: {text!r}") from e


@dataclass(frozen=True)
class EpochMillis:
    """Milliseconds since the epoch, with no zone."""

    value: int


@dataclass(frozen=True)
class Instant:
    """An absolute UTC point with no zone."""

    epoch_ms: int

    @classmethod
    def from_iso(cls, text: str) -> "Instant":
        """Parse an ISO 8601 instant; an offset or Z is required."""
        dt = _parse_iso(text, "Instant")
        if dt.tzinfo is None:
            raise MissingZoneContext(f"Instant string {text!r} has no offset; append Z or ±HH:MM")
        return cls(datetime_to_epoch_ms(dt))

    def to_zoned(self, zone: ZoneReference) -> "ZonedDateTime":
        return ZonedDateTime(self.epoch_ms, zone)


@dataclass(frozen=True)
class ZonedDateTime:
    """A UTC point plus the zone it should be read in."""

    epoch_ms: int
    zone: ZoneReference

    @classmethod
    def from_iso(cls, text: str, *, disambiguation: str = "later") -> "ZonedDateTime":
        """Parse `<local>[±HH:MM|Z][<zone>]`.

        With an offset the instant is exact. Without one the local time is
        resolved in the bracketed zone using the disambiguation policy.
        """
        match = _ZONED_ISO.match(text.strip())
        if not match:
            raise UnsupportedInputKind(f"Unsupported ZonedDateTime string: {text!r}")
        zone = match.group("zone")
        if match.group("offset"):
            dt = _parse_iso(match.group("local") + match.group("offset"), "ZonedDateTime")
            return cls(datetime_to_epoch_ms(dt), zone)
        fields = LocalFields.from_datetime(_parse_iso(match.group("local"), "ZonedDateTime"))
        return cls(to_utc(zone, fields, disambiguation=disambiguation), zone)

    @classmethod
    def from_timestamp(cls, ts: ZonedTimestamp) -> "ZonedDateTime":
        return cls(ts.epoch_ms, ts.zone)

    def with_time_zone(self, zone: ZoneReference) -> "ZonedDateTime":
        return ZonedDateTime(self.epoch_ms, zone)

    def to_instant(self) -> Instant:
        return Instant(self.epoch_ms)


@dataclass(frozen=True)
class PlainDateTime:
    """Wall-clock fields with no zone and no UTC anchor."""

    fields: LocalFields

    @classmethod
    def from_fields(
        cls,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> "PlainDateTime":
        return cls(LocalFields(year, month, day, hour, minute, second, millisecond))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "PlainDateTime":
        return cls(LocalFields.from_datetime(dt))

    @classmethod
    def from_iso(cls, text: str) -> "PlainDateTime":
        """Parse an ISO 8601 date-time without offset ("2016-04-10T12:00:00")."""
        dt = _parse_iso(text, "PlainDateTime")
        if dt.tzinfo is not None:
            raise UnsupportedInputKind(f"PlainDateTime string {text!r} must not carry an offset")
        return cls.from_datetime(dt)


def zone_of(value) -> Optional[ZoneReference]:
    """Zone carried by a variant, or None for zone-less variants."""
    if isinstance(value, ZonedDateTime):
        return value.zone
    return None


__all__ = [
    "EpochMillis",
    "Instant",
    "ZonedDateTime",
    "PlainDateTime",
    "zone_of",
]
