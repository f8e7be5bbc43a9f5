"""Reportable units and their fixed lengths."""

from types import MappingProxyType

from relativetime.errors import ConfigurationError

# Coarse to fine.
UNITS = ("year", "month", "day", "hour", "minute", "second")

BEST_FIT = "best-fit"

# Units counted by boundary-aligned truncation; year and month are counted
# by calendar-field subtraction instead.
UNIT_MS = MappingProxyType({
    "day": 86_400_000,
    "hour": 3_600_000,
    "minute": 60_000,
    "second": 1_000,
})


def validate_unit(unit: str, allow_best_fit: bool = True) -> str:
    """Return unit if it names a reportable unit, else raise ConfigurationError."""
    if unit in UNITS or (allow_best_fit and unit == BEST_FIT):
        return unit
    allowed = UNITS + ((BEST_FIT,) if allow_best_fit else ())
    raise ConfigurationError(f"Unknown unit: {unit!r}. Use one of {allowed}")


__all__ = ["UNITS", "BEST_FIT", "UNIT_MS", "validate_unit"]
