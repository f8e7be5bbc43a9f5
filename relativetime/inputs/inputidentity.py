"""Temporal input classification and coercion.

Raw values are tagged once at the boundary with classify(), then turned into
ZonedTimestamp values by to_zoned_timestamp(), the one conversion path.

  int, float                   -> EpochMillis
  aware datetime               -> ZonedDateTime (zone = its tzinfo)
  naive datetime               -> PlainDateTime
  ZonedTimestamp               -> ZonedDateTime
  EpochMillis, Instant,
  ZonedDateTime, PlainDateTime -> unchanged

Everything else is rejected with UnsupportedInputKind; strings are never
parsed implicitly.
"""

from __future__ import annotations
import math
from datetime import date, datetime
from typing import Union

from relativetime.errors import UnsupportedInputKind
from relativetime.inputs.inputtypes import EpochMillis, Instant, PlainDateTime, ZonedDateTime
from relativetime.timestamp.zonedtimestamp import ZonedTimestamp, datetime_to_epoch_ms
from relativetime.zones.zoneoffset import ZoneReference

TemporalInput = Union[EpochMillis, Instant, ZonedDateTime, PlainDateTime]

# Plain date-times are differenced as pure calendar fields in a zero-offset zone.
PLAIN_ZONE = "UTC"


def classify(value) -> TemporalInput:
    """Tag a raw value with its temporal input variant.

    Raises:
        UnsupportedInputKind: If value is not a recognized temporal input

    Examples:
        >>> classify(1460289600000)
        EpochMillis(value=1460289600000)
        >>> classify(datetime(2016, 4, 10, 12))
        PlainDateTime(fields=LocalFields(year=2016, month=4, day=10, hour=12, minute=0, second=0, millisecond=0))
    """
    if isinstance(value, (EpochMillis, Instant, ZonedDateTime, PlainDateTime)):
        return value

    if isinstance(value, ZonedTimestamp):
        return ZonedDateTime.from_timestamp(value)

    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            return ZonedDateTime(datetime_to_epoch_ms(value), value.tzinfo)
        return PlainDateTime.from_datetime(value)

    if isinstance(value, bool):
        raise UnsupportedInputKind(f"Booleans are not temporal inputs: {value!r}")

    if isinstance(value, int):
        return EpochMillis(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedInputKind(f"Epoch milliseconds must be finite, got {value!r}")
        return EpochMillis(int(value))

    if isinstance(value, date):
        raise UnsupportedInputKind(
            f"Dates without a time are not supported: {value!r}; use datetime.combine(...)"
        )

    raise UnsupportedInputKind(
        f"Unsupported temporal input of type {type(value).__name__}: {value!r}. "
        "Expected epoch milliseconds, datetime, ZonedTimestamp, Instant, ZonedDateTime or PlainDateTime"
    )


def is_zone_less(value: TemporalInput) -> bool:
    """True for variants that need a zone from context (EpochMillis, Instant)."""
    return isinstance(value, (EpochMillis, Instant))


def to_zoned_timestamp(
    value: TemporalInput,
    zone: ZoneReference,
    *,
    disambiguation: str = "later",
) -> ZonedTimestamp:
    """Convert a tagged input into a ZonedTimestamp read in zone.

    Zoned inputs are converted into zone, keeping their instant. Plain inputs
    are placed in zone by their wall-clock fields.
    """
    if isinstance(value, EpochMillis):
        return ZonedTimestamp(int(value.value), zone, disambiguation)
    if isinstance(value, Instant):
        return ZonedTimestamp(int(value.epoch_ms), zone, disambiguation)
    if isinstance(value, ZonedDateTime):
        return ZonedTimestamp(int(value.epoch_ms), zone, disambiguation)
    if isinstance(value, PlainDateTime):
        return ZonedTimestamp.from_local_fields(zone, value.fields, disambiguation=disambiguation)
    raise UnsupportedInputKind(f"Not a tagged temporal input: {value!r}")


__all__ = [
    "TemporalInput",
    "PLAIN_ZONE",
    "classify",
    "is_zone_less",
    "to_zoned_timestamp",
]
