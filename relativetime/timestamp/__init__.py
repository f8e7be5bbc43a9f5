"""Timestamp module: the zoned timestamp value type.

Public API:
    ZonedTimestamp(epoch_ms, zone)
        UTC instant plus zone, with wall-clock accessors and edits

Examples:
    >>> from relativetime.timestamp import ZonedTimestamp
    >>> ts = ZonedTimestamp.from_fields("Europe/Berlin", 2016, 4, 10, 14, 0)
    >>> ts.epoch_ms
    1460289600000
    >>> ts.with_hour(2).isoformat()
    '2016-04-10T02:00:00.000+02:00[Europe/Berlin]'
"""

from relativetime.timestamp.zonedtimestamp import (
    ZonedTimestamp,
    Clock,
    TRUNCATION_UNITS,
    current_epoch_ms,
    datetime_to_epoch_ms,
)

__all__ = [
    "ZonedTimestamp",
    "Clock",
    "TRUNCATION_UNITS",
    "current_epoch_ms",
    "datetime_to_epoch_ms",
]
