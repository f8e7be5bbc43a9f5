"""Difference module: per-unit differences and best-fit unit selection.

Public API:
    difference(now, target, *, correct_past_hour=False) -> DifferenceSet
        Memoized signed differences in year/month/day/hour/minute/second

    select_unit(abs_diff) -> str
        Best-fit unit for a set of differences

    THRESHOLD
        Fixed promotion thresholds used by select_unit

Examples:
    >>> from relativetime.timestamp import ZonedTimestamp
    >>> from relativetime.difference import difference, select_unit
    >>> now = ZonedTimestamp.from_fields("UTC", 2016, 4, 10, 12)
    >>> diff = difference(now, ZonedTimestamp.from_fields("UTC", 2010, 6, 1, 12))
    >>> unit = select_unit(diff.absolute())
    >>> unit, diff[unit]
    ('year', -6)
"""

from relativetime.difference.diffunits import (
    UNITS,
    BEST_FIT,
    UNIT_MS,
    validate_unit,
)
from relativetime.difference.diffengine import (
    DifferenceSet,
    AbsoluteDifference,
    difference,
    days_in_month,
)
from relativetime.difference.diffselect import (
    THRESHOLD,
    select_unit,
)

__all__ = [
    "UNITS",
    "BEST_FIT",
    "UNIT_MS",
    "validate_unit",
    "DifferenceSet",
    "AbsoluteDifference",
    "difference",
    "days_in_month",
    "THRESHOLD",
    "select_unit",
]
