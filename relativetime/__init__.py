"""Relative Time - Relative time phrases with zone-aware calendar differences

Public API for describing a target time relative to a reference "now":
"59 seconds ago", "in 6 hours", "yesterday", "last month", "in 9 months".

Usage:
    from relativetime import RelativeTimeFormatter, relative_time
    from relativetime import ZonedDateTime, Instant, PlainDateTime

    # Format with the shared English formatter
    now = ZonedDateTime.from_iso("2016-04-10T12:00:00Z[UTC]")
    relative_time(ZonedDateTime.from_iso("2016-04-09T18:00:00Z[UTC]"), now=now)  # 'yesterday'

    # Zoned targets are compared in their own zone
    la = ZonedDateTime.from_iso("2016-04-09T17:00:00-07:00[America/Los_Angeles]")
    relative_time(la, now=now)  # 'yesterday'

    # Force a unit
    relative_time(ZonedDateTime.from_iso("2016-01-01T00:00:00Z[UTC]"), now=now, unit="hour")
    # '2,412 hours ago'

    # Configure a formatter once and reuse it
    rtf = RelativeTimeFormatter(time_zone="Europe/Berlin", zone_policy="strict")
    rtf.format(1460289541000, now=1460289600000)  # '59 seconds ago'

    # Raw numbers
    diff = rtf.difference(1460246400000, now=1460289600000)
    diff.days, diff.hours  # (0, -12) in Berlin
"""

__version__ = "0.0.1"

# ============================================================================
# Formatting API
# ============================================================================
# Primary interface: relativetime.format.formatapi
# Phrases: relativetime.format.formatphrases

from .format.formatapi import (
    RelativeTimeFormatter,   # Primary API - configured formatter facade
    relative_time,           # Format with the shared default formatter
    default_formatter,       # The shared default formatter
)

from .format.formatphrases import (
    EnglishPhrases,           # Built-in English unit phrases
    resolve_unit_formatters,  # Injected formatter -> one callable per unit
)

# ============================================================================
# Temporal Inputs
# ============================================================================

from .inputs.inputtypes import (
    EpochMillis,     # Bare epoch milliseconds, zone from context
    Instant,         # Absolute UTC point, zone from context
    ZonedDateTime,   # UTC point plus its own zone
    PlainDateTime,   # Wall-clock fields without a zone
)

from .inputs.inputidentity import (
    classify,            # Tag a raw value as a temporal input variant
    to_zoned_timestamp,  # Convert a variant into a ZonedTimestamp
)

# ============================================================================
# Timestamps & Differences
# ============================================================================

from .timestamp.zonedtimestamp import (
    ZonedTimestamp,  # UTC instant plus zone with wall-clock accessors
)

from .difference.diffengine import (
    DifferenceSet,   # Memoized per-unit differences
    difference,      # Difference two timestamps sharing a zone
)

from .difference.diffselect import (
    THRESHOLD,       # Best-fit promotion thresholds
    select_unit,     # Best-fit unit for a set of differences
)

from .difference.diffunits import (
    UNITS,           # Reportable units, coarse to fine
    BEST_FIT,        # "best-fit"
)

# ============================================================================
# Time Zones
# ============================================================================

from .zones.zoneoffset import (
    offset_minutes,  # Minutes behind UTC of a zone at an instant
    resolve_zone,    # Zone identifier -> tzinfo
)

from .zones.zoneconvert import (
    LocalFields,     # Wall-clock calendar fields
    to_local,        # Instant -> wall-clock fields in a zone
    to_utc,          # Wall-clock fields in a zone -> instant
)

from .zones.zonetable import (
    OffsetTable,        # Pre-built (until_ms, offset_minutes) table
    load_offset_table,  # Load a table from .parquet/.csv
    load_zone_table,    # Load a named zone's table from standard locations
)

from .zones import clear_cache  # Reset zone caches

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    RelativeTimeError,
    UnsupportedInputKind,
    ZoneMismatch,
    MissingZoneContext,
    ConfigurationError,
    UnknownTimeZone,
    AmbiguousLocalTime,
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "RelativeTimeFormatter",  # Configured formatter facade
    "relative_time",          # Format with the shared default formatter

    # ========================================================================
    # Formatting
    # ========================================================================
    "default_formatter",
    "EnglishPhrases",
    "resolve_unit_formatters",

    # ========================================================================
    # Temporal Inputs
    # ========================================================================
    "EpochMillis",
    "Instant",
    "ZonedDateTime",
    "PlainDateTime",
    "classify",
    "to_zoned_timestamp",

    # ========================================================================
    # Timestamps & Differences
    # ========================================================================
    "ZonedTimestamp",
    "DifferenceSet",
    "difference",
    "THRESHOLD",
    "select_unit",
    "UNITS",
    "BEST_FIT",

    # ========================================================================
    # Time Zones
    # ========================================================================
    "offset_minutes",
    "resolve_zone",
    "LocalFields",
    "to_local",
    "to_utc",
    "OffsetTable",
    "load_offset_table",
    "load_zone_table",
    "clear_cache",

    # ========================================================================
    # Errors
    # ========================================================================
    "RelativeTimeError",
    "UnsupportedInputKind",
    "ZoneMismatch",
    "MissingZoneContext",
    "ConfigurationError",
    "UnknownTimeZone",
    "AmbiguousLocalTime",
]
