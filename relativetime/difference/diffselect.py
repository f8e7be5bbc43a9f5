"""Best-fit unit selection.

Picks the coarsest unit whose finer remainder has nearly completed a full
coarser unit. Each rule needs both a nonzero count in the coarser unit and a
finer count above its threshold, so 23h59m is still reported in hours when the
two times share a calendar day, and 59m59s is still reported in minutes.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Union

from relativetime.difference.diffengine import AbsoluteDifference, DifferenceSet

logger = logging.getLogger(__name__)

THRESHOLD = MappingProxyType({
    "month": 2,    # at least 2 months before using year
    "day": 6,      # at least 6 days before using month
    "hour": 6,     # at least 6 hours before using day
    "minute": 59,  # at least 59 minutes before using hour
    "second": 59,  # at least 59 seconds before using minute
})

# (unit reported, coarser unit that must be nonzero, finer unit checked against threshold)
_RULES = (
    ("year", "year", "month"),
    ("month", "month", "day"),
    ("day", "day", "hour"),
    ("hour", "hour", "minute"),
    ("minute", "minute", "second"),
)


def select_unit(
    abs_diff: Union[AbsoluteDifference, DifferenceSet, Mapping[str, int]],
    threshold: Mapping[str, int] = THRESHOLD,
) -> str:
    """Choose the unit to report for a set of differences.

    Args:
        abs_diff: Per-unit differences keyed by unit name. Signs are ignored.
            Finer units are only read when a coarser rule needs them.
        threshold: Per-unit promotion thresholds (default THRESHOLD)

    Returns:
        One of "year", "month", "day", "hour", "minute", "second"

    Examples:
        >>> select_unit({"year": 0, "month": 0, "day": 0, "hour": 0, "minute": 59, "second": 3599})
        'minute'
        >>> select_unit({"year": 0, "month": 0, "day": 0, "hour": 1, "minute": 60, "second": 3600})
        'hour'
    """
    for unit, coarse, fine in _RULES:
        if abs(abs_diff[coarse]) > 0 and abs(abs_diff[fine]) > threshold[fine]:
            logger.debug(f"Best-fit unit: {unit} (|{coarse}|>0, |{fine}|>{threshold[fine]})")
            return unit
    return "second"


__all__ = ["THRESHOLD", "select_unit"]
