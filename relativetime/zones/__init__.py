"""Zones module for offset lookup and local/UTC conversion.

Public API:
    offset_minutes(zone, epoch_ms) -> int
        UTC offset of a zone at an instant (minutes behind UTC)

    to_local(zone, epoch_ms) -> (LocalFields, int)
        Wall-clock fields of an instant in a zone

    to_utc(zone, local, hint_offset_minutes=None, *, disambiguation="later") -> int
        Resolve wall-clock fields to an instant via fixed-point iteration

    OffsetTable, load_offset_table(path), load_zone_table(zone_name)
        Pre-built offset tables, from memory or from .parquet/.csv files

Examples:
    >>> from relativetime.zones import offset_minutes, to_local, to_utc, LocalFields
    >>> offset_minutes("Europe/Berlin", 1460289600000)
    -120
    >>> fields, offset = to_local("UTC", 1460289600000)
    >>> fields
    LocalFields(year=2016, month=4, day=10, hour=12, minute=0, second=0, millisecond=0)
    >>> to_utc("UTC", fields)
    1460289600000
"""

from relativetime.zones.zonetable import (
    OffsetTable,
    load_offset_table,
    load_zone_table,
    ZONE_TABLES_ENV,
)
from relativetime.zones import zoneoffset as _zoneoffset
from relativetime.zones.zoneoffset import (
    ZoneReference,
    offset_minutes,
    parse_offset_minutes,
    resolve_zone,
    same_zone,
    zone_key,
    zone_label,
)
from relativetime.zones.zoneconvert import (
    LocalFields,
    local_timestamp,
    fields_from_local_timestamp,
    to_local,
    to_utc,
    DISAMBIGUATION_POLICIES,
)


def clear_cache():
    """Clear loaded-table and resolved-zone caches."""
    load_zone_table.cache_clear()
    _zoneoffset.clear_cache()


__all__ = [
    "OffsetTable",
    "load_offset_table",
    "load_zone_table",
    "ZONE_TABLES_ENV",
    "ZoneReference",
    "offset_minutes",
    "parse_offset_minutes",
    "resolve_zone",
    "same_zone",
    "zone_key",
    "zone_label",
    "LocalFields",
    "local_timestamp",
    "fields_from_local_timestamp",
    "to_local",
    "to_utc",
    "DISAMBIGUATION_POLICIES",
    "clear_cache",
]
