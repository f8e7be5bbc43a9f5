"""Difference Engine
------------------

Signed integer differences between a reference "now" and a target, in each
reportable unit, both read as wall-clock fields in one shared zone.

Counting rules:
  - year:  target.year - now.year
  - month: years * 12 + (target.month - now.month)
  - day: subtract the wall-clock dates (start of day in the shared zone), so
    a 23 or 25 hour daylight-saving day still counts as one day
  - hour, minute, second: truncate both timestamps to the start of the unit,
    subtract the instants, divide by the unit length, and round toward the
    direction of travel (floor when the target is later, ceil when earlier)

So two times on the same calendar day are 0 days apart, and any pair that
crosses midnight is at least one day apart in the direction of the gap.

Each unit is computed on first access and memoized on the DifferenceSet, so a
value never changes once read.

Examples:
    >>> from relativetime.timestamp import ZonedTimestamp
    >>> now = ZonedTimestamp.from_fields("UTC", 2016, 4, 10, 12)
    >>> target = ZonedTimestamp.from_fields("UTC", 2016, 4, 9, 18)
    >>> diff = difference(now, target)
    >>> diff.days, diff.hours, diff.minutes
    (-1, -18, -1080)
"""

from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterator

try:
    from dateutil.relativedelta import relativedelta
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

from relativetime.difference.diffunits import UNIT_MS, UNITS, validate_unit
from relativetime.errors import ZoneMismatch
from relativetime.timestamp.zonedtimestamp import ZonedTimestamp
from relativetime.zones.zoneconvert import LocalFields, local_timestamp
from relativetime.zones.zoneoffset import same_zone, zone_label


def days_in_month(year: int, month: int) -> int:
    """Number of days in a calendar month.

    Examples:
        >>> days_in_month(2016, 2)
        29
        >>> days_in_month(2015, 2)
        28
    """
    return (datetime(year, month, 1) + relativedelta(months=1, days=-1)).day


def _floor_div(value: int, unit_ms: int) -> int:
    return value // unit_ms


def _ceil_div(value: int, unit_ms: int) -> int:
    return -((-value) // unit_ms)


def _midnight(fields: LocalFields) -> int:
    return local_timestamp(LocalFields(fields.year, fields.month, fields.day))


class DifferenceSet:
    """Per-unit signed differences from now to target, memoized.

    Args:
        now: Reference timestamp
        target: Timestamp being described
        correct_past_hour: Report -1 instead of 0 hours when the target is
            in the past within the same clock hour

    Raises:
        ZoneMismatch: If now and target carry different zones
    """

    def __init__(self, now: ZonedTimestamp, target: ZonedTimestamp, *, correct_past_hour: bool = False):
        if not same_zone(now.zone, target.zone):
            raise ZoneMismatch(
                f"Cannot difference across zones: now in {zone_label(now.zone)}, "
                f"target in {zone_label(target.zone)}"
            )
        self.now = now
        self.target = target
        self.correct_past_hour = correct_past_hour
        self.ms = target.epoch_ms - now.epoch_ms
        self._divide = _floor_div if self.ms > 0 else _ceil_div
        self._now_fields: LocalFields = now.local_fields()
        self._target_fields: LocalFields = target.local_fields()
        self._cache: Dict[str, int] = {}

    # ---- Access ----

    def get(self, unit: str) -> int:
        validate_unit(unit, allow_best_fit=False)
        if unit not in self._cache:
            self._cache[unit] = self._compute(unit)
        return self._cache[unit]

    def __getitem__(self, unit: str) -> int:
        return self.get(unit)

    def __iter__(self) -> Iterator[str]:
        return iter(UNITS)

    @property
    def years(self) -> int:
        return self.get("year")

    @property
    def months(self) -> int:
        return self.get("month")

    @property
    def days(self) -> int:
        return self.get("day")

    @property
    def hours(self) -> int:
        return self.get("hour")

    @property
    def minutes(self) -> int:
        return self.get("minute")

    @property
    def seconds(self) -> int:
        return self.get("second")

    @property
    def calendar_days(self) -> int:
        """Day-of-month delta carried across the month boundary.

        The raw day-of-month subtraction is adjusted by the length of the
        bordering month whenever the months differ: now's month when the
        target is later, the target's month when it is earlier.
        Jan 31 → Mar 2 gives 2, not -29.
        """
        n, t = self._now_fields, self._target_fields
        value = t.day - n.day
        if self.months:
            if self.ms > 0:
                value += days_in_month(n.year, n.month)
            else:
                value -= days_in_month(t.year, t.month)
        return value

    @property
    def is_future(self) -> bool:
        return self.ms > 0

    def absolute(self) -> "AbsoluteDifference":
        return AbsoluteDifference(self)

    def as_dict(self) -> Dict[str, int]:
        return {unit: self.get(unit) for unit in UNITS}

    def __repr__(self) -> str:
        computed = ", ".join(f"{unit}={self._cache[unit]}" for unit in UNITS if unit in self._cache)
        return f"DifferenceSet(ms={self.ms}{', ' + computed if computed else ''})"

    # ---- Computation ----

    def _compute(self, unit: str) -> int:
        if unit == "year":
            return self._target_fields.year - self._now_fields.year
        if unit == "month":
            return self.years * 12 + self._target_fields.month - self._now_fields.month

        if unit == "day":
            span = _midnight(self._target_fields) - _midnight(self._now_fields)
        else:
            span = self.target.start_of(unit).epoch_ms - self.now.start_of(unit).epoch_ms
        value = self._divide(span, UNIT_MS[unit])

        if unit == "hour" and self.correct_past_hour and value == 0 and self.ms < 0:
            value = -1
        return value


class AbsoluteDifference:
    """Magnitude view over a DifferenceSet, sharing its memo cache."""

    def __init__(self, diff: DifferenceSet):
        self._diff = diff

    def get(self, unit: str) -> int:
        return abs(self._diff.get(unit))

    def __getitem__(self, unit: str) -> int:
        return self.get(unit)

    def __iter__(self) -> Iterator[str]:
        return iter(UNITS)

    @property
    def years(self) -> int:
        return self.get("year")

    @property
    def months(self) -> int:
        return self.get("month")

    @property
    def days(self) -> int:
        return self.get("day")

    @property
    def hours(self) -> int:
        return self.get("hour")

    @property
    def minutes(self) -> int:
        return self.get("minute")

    @property
    def seconds(self) -> int:
        return self.get("second")


def difference(
    now: ZonedTimestamp,
    target: ZonedTimestamp,
    *,
    correct_past_hour: bool = False,
) -> DifferenceSet:
    """Differences from now to target; both must share a zone."""
    return DifferenceSet(now, target, correct_past_hour=correct_past_hour)


__all__ = ["DifferenceSet", "AbsoluteDifference", "difference", "days_in_month"]
