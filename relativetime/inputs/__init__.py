"""Inputs module: temporal input variants and their conversion.

Public API:
    EpochMillis, Instant, ZonedDateTime, PlainDateTime
        Explicitly tagged temporal inputs

    classify(value) -> TemporalInput
        Tag a raw value (int, datetime, ZonedTimestamp, ...) once

    to_zoned_timestamp(value, zone) -> ZonedTimestamp
        The single conversion path into the internal timestamp type
"""

from relativetime.inputs.inputtypes import (
    EpochMillis,
    Instant,
    ZonedDateTime,
    PlainDateTime,
    zone_of,
)
from relativetime.inputs.inputidentity import (
    TemporalInput,
    PLAIN_ZONE,
    classify,
    is_zone_less,
    to_zoned_timestamp,
)

__all__ = [
    "EpochMillis",
    "Instant",
    "ZonedDateTime",
    "PlainDateTime",
    "zone_of",
    "TemporalInput",
    "PLAIN_ZONE",
    "classify",
    "is_zone_less",
    "to_zoned_timestamp",
]
