"""Local/UTC Conversion
---------------------

Converts UTC instants to wall-clock fields in a zone and back.

UTC → local is direct: look up the offset at the instant and shift.

Local → UTC has no closed form because the offset depends on the instant being
solved for. It is resolved by fixed-point iteration:

  1. Guess an offset (the caller's hint, else the offset at the local
     timestamp read as if it were UTC).
  2. Shift by the guess, look up the offset at the result, shift again.
  3. Stop when the result no longer moves (converged), or when it bounces
     back to the previous candidate (oscillation), or after 8 rounds.

Oscillation happens in the gap a spring-forward transition skips; convergence
on one of two valid answers happens in the hour a fall-back transition
repeats. When no hint is given, both cases are settled by a disambiguation
policy: "later" (default), "earlier" or "raise".

Key Design Principles:
  1. All arithmetic is on integer milliseconds, proleptic Gregorian calendar
  2. A hint offset keeps field edits continuous across transitions
  3. Conversion never fails on a missed bound, it returns its best candidate
"""

from __future__ import annotations
import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple, Union

from relativetime.errors import AmbiguousLocalTime, ConfigurationError
from relativetime.zones.zoneoffset import ZoneReference, offset_minutes, zone_label

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60_000
MS_PER_DAY = 86_400_000

MAX_ITERATIONS = 8

DISAMBIGUATION_POLICIES = ("later", "earlier", "raise")

_LOCAL_EPOCH = datetime(1970, 1, 1)
_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class LocalFields:
    """Wall-clock calendar fields with no zone attached. Month is 1-based."""

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def replace(self, **changes) -> "LocalFields":
        return dataclasses.replace(self, **changes)

    def to_local_timestamp(self) -> int:
        return local_timestamp(self)

    def normalized(self) -> "LocalFields":
        """Fields with overflow rolled into range (month 13 → January next year)."""
        return fields_from_local_timestamp(local_timestamp(self))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "LocalFields":
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, dt.microsecond // 1000)

    def to_datetime(self) -> datetime:
        """Naive datetime for the (normalized) fields."""
        return _LOCAL_EPOCH + timedelta(milliseconds=local_timestamp(self))


def local_timestamp(fields: LocalFields) -> int:
    """Milliseconds since 1970-01-01T00:00 of the wall-clock fields, read as UTC.

    Out-of-range fields roll over: month 13 is January of the next year,
    day 0 is the last day of the previous month, hour 24 is the next day.

    Examples:
        >>> local_timestamp(LocalFields(1970, 1, 2))
        86400000
        >>> local_timestamp(LocalFields(2015, 13, 1)) == local_timestamp(LocalFields(2016, 1, 1))
        True
    """
    year = fields.year + (fields.month - 1) // 12
    month = (fields.month - 1) % 12 + 1
    month_start = datetime(year, month, 1) - _LOCAL_EPOCH
    within = timedelta(
        days=fields.day - 1,
        hours=fields.hour,
        minutes=fields.minute,
        seconds=fields.second,
        milliseconds=fields.millisecond,
    )
    return month_start // _ONE_MS + within // _ONE_MS


def fields_from_local_timestamp(local_ms: int) -> LocalFields:
    """Decompose local milliseconds into calendar fields."""
    moment = _LOCAL_EPOCH + timedelta(milliseconds=local_ms)
    return LocalFields.from_datetime(moment)


def to_local(zone: ZoneReference, epoch_ms: int) -> Tuple[LocalFields, int]:
    """Wall-clock fields of an instant in a zone, with the offset used.

    Examples:
        >>> fields, offset = to_local("America/Los_Angeles", 1460289600000)
        >>> fields.hour, offset
        (5, 420)
    """
    offset = offset_minutes(zone, epoch_ms)
    return fields_from_local_timestamp(epoch_ms - offset * MS_PER_MINUTE), offset


def _disambiguate(local_ms: int, first: int, second: int, policy: str, zone: ZoneReference) -> int:
    earlier, later = min(first, second), max(first, second)
    if policy == "raise":
        raise AmbiguousLocalTime(local_ms, earlier, later)
    chosen = later if policy == "later" else earlier
    logger.debug(
        f"Local timestamp {local_ms} in {zone_label(zone)} resolved to {policy} instant {chosen} "
        f"(candidates {earlier}, {later})"
    )
    return chosen


def _alternate_fixed_point(zone: ZoneReference, local_ms: int, found_ms: int) -> Optional[int]:
    """Second valid instant for local_ms, if a transition within a day repeats it."""
    found_offset = offset_minutes(zone, found_ms)
    for probe in (found_ms - MS_PER_DAY, found_ms + MS_PER_DAY):
        alt_offset = offset_minutes(zone, probe)
        if alt_offset == found_offset:
            continue
        alt_ms = local_ms + alt_offset * MS_PER_MINUTE
        if offset_minutes(zone, alt_ms) == alt_offset:
            return alt_ms
    return None


def to_utc(
    zone: ZoneReference,
    local: Union[LocalFields, int],
    hint_offset_minutes: Optional[int] = None,
    *,
    disambiguation: str = "later",
) -> int:
    """Resolve wall-clock fields in a zone to a UTC instant.

    Args:
        zone: Zone reference
        local: LocalFields, or local milliseconds from local_timestamp()
        hint_offset_minutes: Offset to start from. Pass the offset in force
            before an edit to keep the result continuous across a transition.
        disambiguation: "later", "earlier" or "raise" for repeated or skipped
            local times

    Returns:
        UTC instant in epoch milliseconds

    Raises:
        AmbiguousLocalTime: If disambiguation="raise" and the time is ambiguous
        ConfigurationError: If disambiguation is not a known policy

    Examples:
        >>> # 1:30 AM occurs twice in Los Angeles on 2016-11-06
        >>> to_utc("America/Los_Angeles", LocalFields(2016, 11, 6, 1, 30))
        1478424600000
        >>> to_utc("America/Los_Angeles", LocalFields(2016, 11, 6, 1, 30), disambiguation="earlier")
        1478421000000
    """
    if disambiguation not in DISAMBIGUATION_POLICIES:
        raise ConfigurationError(
            f"Unknown disambiguation policy: {disambiguation!r}. Use one of {DISAMBIGUATION_POLICIES}"
        )

    local_ms = local if isinstance(local, int) else local_timestamp(local)

    start_offset = hint_offset_minutes
    if start_offset is None:
        start_offset = offset_minutes(zone, local_ms)

    utc_ms = local_ms + start_offset * MS_PER_MINUTE
    previous = None

    for _ in range(MAX_ITERATIONS):
        candidate = local_ms + offset_minutes(zone, utc_ms) * MS_PER_MINUTE

        if abs(candidate - utc_ms) < 1:
            if hint_offset_minutes is None:
                alternate = _alternate_fixed_point(zone, local_ms, candidate)
                if alternate is not None:
                    return _disambiguate(local_ms, candidate, alternate, disambiguation, zone)
            return candidate

        if previous is not None and abs(candidate - previous) < 1:
            return _disambiguate(local_ms, candidate, utc_ms, disambiguation, zone)

        previous = utc_ms
        utc_ms = candidate

    logger.warning(
        f"Local timestamp {local_ms} in {zone_label(zone)} did not converge after "
        f"{MAX_ITERATIONS} iterations, using {utc_ms}"
    )
    return utc_ms


__all__ = [
    "LocalFields",
    "local_timestamp",
    "fields_from_local_timestamp",
    "to_local",
    "to_utc",
    "DISAMBIGUATION_POLICIES",
    "MAX_ITERATIONS",
]
