"""Relative-time formatting API.

Public API for turning a target time into a phrase such as "3 days ago",
"in 2 months" or "yesterday", measured against a reference "now".
"""

import logging
from functools import lru_cache
from typing import Optional, Tuple

from relativetime.difference.diffengine import DifferenceSet, difference
from relativetime.difference.diffselect import select_unit
from relativetime.difference.diffunits import BEST_FIT, validate_unit
from relativetime.errors import ConfigurationError, MissingZoneContext, UnsupportedInputKind, ZoneMismatch
from relativetime.format.formatphrases import resolve_unit_formatters
from relativetime.inputs.inputidentity import PLAIN_ZONE, TemporalInput, classify, to_zoned_timestamp
from relativetime.inputs.inputtypes import PlainDateTime, ZonedDateTime
from relativetime.timestamp.zonedtimestamp import Clock, ZonedTimestamp, current_epoch_ms
from relativetime.zones.zoneconvert import DISAMBIGUATION_POLICIES
from relativetime.zones.zoneoffset import ZoneReference, resolve_zone, same_zone, zone_label

logger = logging.getLogger(__name__)

ZONE_POLICIES = ("convert", "strict")


class RelativeTimeFormatter:
    """Formats targets relative to a reference "now".

    Args:
        formatter: Injected phrase capability: an object with
            formatter_for(unit), a mapping of unit -> callable(value), or a
            callable(value, unit). Default: built-in phrases for locale.
        locale: Locale for the built-in phrases (default: "en")
        time_zone: Fallback zone for zone-less targets and for an omitted now
        clock: Callable returning now in epoch milliseconds (default: wall clock)
        zone_policy: "convert" reads a zoned now in the target's zone,
            "strict" raises ZoneMismatch when the zones differ
        disambiguation: "later", "earlier" or "raise" for repeated or skipped
            local times
        correct_past_hour: Report -1 hour instead of 0 when the target is
            minutes in the past within the same clock hour

    Raises:
        ConfigurationError: On unknown options, locales or zones

    Examples:
        >>> from relativetime.inputs import ZonedDateTime
        >>> rtf = RelativeTimeFormatter()
        >>> now = ZonedDateTime.from_iso("2016-04-10T12:00:00Z[UTC]")
        >>> rtf.format(ZonedDateTime.from_iso("2016-04-09T18:00:00Z[UTC]"), now=now)
        'yesterday'
        >>> rtf.format(ZonedDateTime.from_iso("2016-01-01T00:00:00Z[UTC]"), now=now, unit="hour")
        '2,412 hours ago'
    """

    def __init__(
        self,
        formatter=None,
        *,
        locale: str = "en",
        time_zone: Optional[ZoneReference] = None,
        clock: Optional[Clock] = None,
        zone_policy: str = "convert",
        disambiguation: str = "later",
        correct_past_hour: bool = False,
    ):
        if zone_policy not in ZONE_POLICIES:
            raise ConfigurationError(f"Unknown zone_policy: {zone_policy!r}. Use one of {ZONE_POLICIES}")
        if disambiguation not in DISAMBIGUATION_POLICIES:
            raise ConfigurationError(
                f"Unknown disambiguation: {disambiguation!r}. Use one of {DISAMBIGUATION_POLICIES}"
            )
        if isinstance(time_zone, str):
            resolve_zone(time_zone)

        self.locale = locale
        self.time_zone = time_zone
        self.clock = clock or current_epoch_ms
        self.zone_policy = zone_policy
        self.disambiguation = disambiguation
        self.correct_past_hour = correct_past_hour
        self.formatters = resolve_unit_formatters(formatter, locale)

    def format(
        self,
        target,
        *,
        now=None,
        unit: str = BEST_FIT,
        time_zone: Optional[ZoneReference] = None,
    ) -> str:
        """Phrase for target relative to now.

        Args:
            target: Epoch milliseconds, datetime, ZonedTimestamp or a temporal
                input variant (EpochMillis, Instant, ZonedDateTime, PlainDateTime)
            now: Reference time of the same kinds (default: clock())
            unit: "best-fit" or one of "year", "month", "day", "hour",
                "minute", "second"
            time_zone: Zone for zone-less targets, overriding the facade's

        Returns:
            The phrase produced by the unit formatter

        Raises:
            ConfigurationError: If unit is unknown
            UnsupportedInputKind: If target or now is not a temporal input
            MissingZoneContext: If no comparison zone can be determined
            ZoneMismatch: Under zone_policy="strict" when zones differ
        """
        validate_unit(unit)
        diff = self.difference(target, now=now, time_zone=time_zone)
        if unit == BEST_FIT:
            unit = select_unit(diff.absolute())
        value = diff[unit]
        logger.debug(f"Formatting {value} {unit} (diff {diff.ms} ms)")
        return self.formatters[unit](value)

    def difference(self, target, *, now=None, time_zone: Optional[ZoneReference] = None) -> DifferenceSet:
        """Per-unit differences from now to target in the working zone."""
        now_ts, target_ts = self._coerce(target, now, time_zone)
        return difference(now_ts, target_ts, correct_past_hour=self.correct_past_hour)

    # ---- Zone resolution ----

    def _coerce(self, target, now, time_zone) -> Tuple[ZonedTimestamp, ZonedTimestamp]:
        target_v = classify(target)
        now_v = classify(now) if now is not None else None

        if isinstance(target_v, PlainDateTime):
            return self._coerce_plain(target_v, now_v, time_zone)
        if isinstance(now_v, PlainDateTime):
            raise UnsupportedInputKind(
                f"now is a PlainDateTime but target is {type(target_v).__name__}; "
                "both must be plain or both anchored to UTC"
            )

        zone = self._working_zone(target_v, now_v, time_zone)
        target_ts = to_zoned_timestamp(target_v, zone, disambiguation=self.disambiguation)
        if now_v is None:
            now_ts = ZonedTimestamp.now(zone, self.clock)
        else:
            now_ts = to_zoned_timestamp(now_v, zone, disambiguation=self.disambiguation)
        return now_ts, target_ts

    def _coerce_plain(
        self,
        target_v: PlainDateTime,
        now_v: Optional[TemporalInput],
        time_zone: Optional[ZoneReference],
    ) -> Tuple[ZonedTimestamp, ZonedTimestamp]:
        if isinstance(now_v, PlainDateTime):
            zone = PLAIN_ZONE
            now_ts = to_zoned_timestamp(now_v, zone)
        elif now_v is None:
            zone = time_zone if time_zone is not None else self.time_zone
            if zone is None:
                raise MissingZoneContext(
                    "A PlainDateTime target with no now needs a time_zone to read the clock in; "
                    "pass time_zone= or a PlainDateTime now"
                )
            now_ts = ZonedTimestamp.now(zone, self.clock)
        else:
            raise UnsupportedInputKind(
                f"target is a PlainDateTime but now is {type(now_v).__name__}; "
                "now must also be a PlainDateTime"
            )
        target_ts = to_zoned_timestamp(target_v, zone, disambiguation=self.disambiguation)
        return now_ts, target_ts

    def _working_zone(
        self,
        target_v: TemporalInput,
        now_v: Optional[TemporalInput],
        time_zone: Optional[ZoneReference],
    ) -> ZoneReference:
        now_zone = now_v.zone if isinstance(now_v, ZonedDateTime) else None

        if isinstance(target_v, ZonedDateTime):
            zone = target_v.zone
        elif time_zone is not None:
            zone = time_zone
        elif now_zone is not None:
            zone = now_zone
        elif self.time_zone is not None:
            zone = self.time_zone
        else:
            raise MissingZoneContext(
                f"Cannot determine a comparison zone for {type(target_v).__name__} target; "
                "pass time_zone=, a zoned now, or set time_zone on the formatter"
            )

        if now_zone is not None and not same_zone(now_zone, zone):
            if self.zone_policy == "strict":
                raise ZoneMismatch(
                    f"now is in {zone_label(now_zone)} but target is compared in {zone_label(zone)}"
                )
            logger.debug(f"Converting now from {zone_label(now_zone)} to {zone_label(zone)}")
        return zone

    def __repr__(self) -> str:
        return (
            f"RelativeTimeFormatter(locale={self.locale!r}, time_zone={self.time_zone!r}, "
            f"zone_policy={self.zone_policy!r})"
        )


@lru_cache(maxsize=1)
def default_formatter() -> RelativeTimeFormatter:
    """Shared English formatter used by relative_time()."""
    return RelativeTimeFormatter()


def relative_time(
    target,
    *,
    now=None,
    unit: str = BEST_FIT,
    time_zone: Optional[ZoneReference] = None,
) -> str:
    """Format target relative to now with the shared default formatter.

    Examples:
        >>> relative_time(1460289541000, now=1460289600000, time_zone="UTC")
        '59 seconds ago'
    """
    return default_formatter().format(target, now=now, unit=unit, time_zone=time_zone)


__all__ = [
    "ZONE_POLICIES",
    "RelativeTimeFormatter",
    "default_formatter",
    "relative_time",
]
