"""Zoned Timestamp
----------------

A UTC instant paired with a zone reference. Wall-clock fields are derived on
read through the zone converter and never stored.

Edits return new values. Each edit reads the current wall-clock fields,
replaces some of them, and resolves the result back to UTC using the offset in
force before the edit as the starting hint, so an edit that crosses a
daylight-saving transition stays continuous:

  >>> ts = ZonedTimestamp.from_fields("America/Los_Angeles", 2016, 11, 6, 12, 0)
  >>> ts.start_of("day").hour
  0
  >>> ts.start_of("day").offset_minutes   # PDT before the transition
  420
  >>> ts.offset_minutes                    # PST after it
  480

Equality and ordering compare the instant only; the zone is ignored.
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from relativetime.errors import ConfigurationError, MissingZoneContext
from relativetime.zones.zoneconvert import LocalFields, to_local, to_utc
from relativetime.zones.zoneoffset import EPOCH, ZoneReference, offset_minutes, zone_label

Clock = Callable[[], int]

# Fields reset when truncating to each unit, coarse to fine.
_START_OF = [
    ("year", "month", 1),
    ("month", "day", 1),
    ("day", "hour", 0),
    ("hour", "minute", 0),
    ("minute", "second", 0),
    ("second", "millisecond", 0),
]

TRUNCATION_UNITS = tuple(unit for unit, _, _ in _START_OF)


def current_epoch_ms() -> int:
    """Wall-clock now in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def datetime_to_epoch_ms(dt: datetime) -> int:
    """Epoch milliseconds of an aware datetime."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise MissingZoneContext(f"Naive datetime {dt.isoformat()} has no zone; attach a tzinfo")
    return (dt - EPOCH) // timedelta(milliseconds=1)


@dataclass(frozen=True, order=True)
class ZonedTimestamp:
    """(epoch_ms, zone) value with derived wall-clock fields.

    Args:
        epoch_ms: UTC instant in milliseconds since the epoch
        zone: Zone identifier, OffsetTable or tzinfo
        disambiguation: Policy for repeated or skipped local times when
            resolving edits ("later", "earlier" or "raise")
    """

    epoch_ms: int
    zone: ZoneReference = field(compare=False)
    disambiguation: str = field(default="later", compare=False, repr=False)

    # ---- Constructors ----

    @classmethod
    def from_fields(
        cls,
        zone: ZoneReference,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        *,
        disambiguation: str = "later",
    ) -> "ZonedTimestamp":
        """Build from wall-clock fields in a zone."""
        fields = LocalFields(year, month, day, hour, minute, second, millisecond)
        return cls.from_local_fields(zone, fields, disambiguation=disambiguation)

    @classmethod
    def from_local_fields(
        cls,
        zone: ZoneReference,
        fields: LocalFields,
        *,
        disambiguation: str = "later",
    ) -> "ZonedTimestamp":
        epoch_ms = to_utc(zone, fields, disambiguation=disambiguation)
        return cls(epoch_ms, zone, disambiguation)

    @classmethod
    def from_datetime(cls, dt: datetime, zone: Optional[ZoneReference] = None) -> "ZonedTimestamp":
        """Build from an aware datetime, keeping its tzinfo unless zone is given."""
        return cls(datetime_to_epoch_ms(dt), zone if zone is not None else dt.tzinfo)

    @classmethod
    def now(cls, zone: ZoneReference, clock: Optional[Clock] = None) -> "ZonedTimestamp":
        return cls(int((clock or current_epoch_ms)()), zone)

    # ---- Reads ----

    def local_fields(self) -> LocalFields:
        return to_local(self.zone, self.epoch_ms)[0]

    @property
    def offset_minutes(self) -> int:
        return offset_minutes(self.zone, self.epoch_ms)

    @property
    def year(self) -> int:
        return self.local_fields().year

    @property
    def month(self) -> int:
        return self.local_fields().month

    @property
    def day(self) -> int:
        return self.local_fields().day

    @property
    def hour(self) -> int:
        return self.local_fields().hour

    @property
    def minute(self) -> int:
        return self.local_fields().minute

    @property
    def second(self) -> int:
        return self.local_fields().second

    @property
    def millisecond(self) -> int:
        return self.local_fields().millisecond

    # ---- Edits ----

    def replace(self, **changes) -> "ZonedTimestamp":
        """New timestamp with some wall-clock fields replaced.

        Out-of-range values roll over (month=13 is January of the next year).
        """
        fields, hint = to_local(self.zone, self.epoch_ms)
        try:
            edited = fields.replace(**changes)
        except TypeError as e:
            raise ConfigurationError(f"Unknown wall-clock field in {sorted(changes)}") from e
        epoch_ms = to_utc(self.zone, edited, hint, disambiguation=self.disambiguation)
        return ZonedTimestamp(epoch_ms, self.zone, self.disambiguation)

    def with_month(self, month: int) -> "ZonedTimestamp":
        return self.replace(month=month)

    def with_day(self, day: int) -> "ZonedTimestamp":
        return self.replace(day=day)

    def with_hour(self, hour: int) -> "ZonedTimestamp":
        return self.replace(hour=hour)

    def with_minute(self, minute: int) -> "ZonedTimestamp":
        return self.replace(minute=minute)

    def with_second(self, second: int) -> "ZonedTimestamp":
        return self.replace(second=second)

    def with_millisecond(self, millisecond: int) -> "ZonedTimestamp":
        return self.replace(millisecond=millisecond)

    def start_of(self, unit: str) -> "ZonedTimestamp":
        """Truncate to the start of year, month, day, hour, minute or second."""
        if unit not in TRUNCATION_UNITS:
            raise ConfigurationError(f"Cannot truncate to unit {unit!r}. Use one of {TRUNCATION_UNITS}")
        start = TRUNCATION_UNITS.index(unit)
        changes = {name: value for _, name, value in _START_OF[start:]}
        return self.replace(**changes)

    def with_time_zone(self, zone: ZoneReference) -> "ZonedTimestamp":
        """Same instant, viewed in another zone."""
        return ZonedTimestamp(self.epoch_ms, zone, self.disambiguation)

    def clone(self) -> "ZonedTimestamp":
        return ZonedTimestamp(self.epoch_ms, self.zone, self.disambiguation)

    # ---- Conversions ----

    def to_datetime(self) -> datetime:
        """Aware datetime in UTC."""
        return EPOCH + timedelta(milliseconds=self.epoch_ms)

    def isoformat(self) -> str:
        """ISO 8601 with offset and bracketed zone, e.g. 2016-04-10T05:00:00.000-07:00[America/Los_Angeles]."""
        fields, offset = to_local(self.zone, self.epoch_ms)
        sign = "-" if offset > 0 else "+"
        hours, minutes = divmod(abs(offset), 60)
        return (
            f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d}"
            f"T{fields.hour:02d}:{fields.minute:02d}:{fields.second:02d}.{fields.millisecond:03d}"
            f"{sign}{hours:02d}:{minutes:02d}[{zone_label(self.zone)}]"
        )

    def __str__(self) -> str:
        return self.isoformat()


__all__ = [
    "ZonedTimestamp",
    "Clock",
    "TRUNCATION_UNITS",
    "current_epoch_ms",
    "datetime_to_epoch_ms",
]
