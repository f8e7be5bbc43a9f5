"""Unit phrase formatters.

The facade never builds sentences itself. For each reportable unit it holds a
callable that turns a signed integer into a phrase, resolved once from one of:

  - an object exposing formatter_for(unit) -> callable(value)
  - a mapping of unit -> callable(value)
  - a callable(value, unit)
  - nothing, in which case the built-in English phrases are used

English phrases follow the CLDR English relative-time patterns:

  >>> phrases = EnglishPhrases()
  >>> phrases.format(-1, "day")
  'yesterday'
  >>> phrases.format(-2412, "hour")
  '2,412 hours ago'
  >>> phrases.format(1, "minute")
  'in 1 minute'
"""

from collections.abc import Mapping
from typing import Callable, Dict, Optional

from relativetime.difference.diffunits import UNITS
from relativetime.errors import ConfigurationError

UnitFormatter = Callable[[int], str]

# Named phrases for small offsets; everything else is "in N units" / "N units ago".
_NAMED = {
    "second": {0: "now"},
    "minute": {0: "this minute"},
    "hour": {0: "this hour"},
    "day": {-1: "yesterday", 0: "today", 1: "tomorrow"},
    "month": {-1: "last month", 0: "this month", 1: "next month"},
    "year": {-1: "last year", 0: "this year", 1: "next year"},
}


def is_english_locale(locale: Optional[str]) -> bool:
    """True for "en" and its regional variants ("en-US", "en_GB")."""
    if not locale:
        return False
    return str(locale).replace("_", "-").split("-")[0].lower() == "en"


class EnglishPhrases:
    """Default English unit formatters."""

    def format(self, value: int, unit: str) -> str:
        value = int(value)
        named = _NAMED[unit].get(value)
        if named is not None:
            return named
        count = abs(value)
        noun = unit if count == 1 else f"{unit}s"
        if value > 0:
            return f"in {count:,} {noun}"
        return f"{count:,} {noun} ago"

    def formatter_for(self, unit: str) -> UnitFormatter:
        if unit not in _NAMED:
            raise ConfigurationError(f"Unknown unit: {unit!r}. Use one of {UNITS}")

        def format_unit(value: int) -> str:
            return self.format(value, unit)

        return format_unit


def _bind_unit(formatter: Callable[[int, str], str], unit: str) -> UnitFormatter:
    def format_unit(value: int) -> str:
        return formatter(value, unit)

    return format_unit


def resolve_unit_formatters(formatter=None, locale: Optional[str] = "en") -> Dict[str, UnitFormatter]:
    """Resolve one phrase callable per reportable unit.

    Args:
        formatter: Injected formatting capability (see module docstring), or
            None for the built-in phrases of locale
        locale: Locale used when no formatter is injected. Only English
            locales are built in.

    Returns:
        Dict mapping each unit in UNITS to a callable(value) -> str

    Raises:
        ConfigurationError: If the formatter is missing units or has an
            unsupported shape, or the locale has no built-in phrases
    """
    if formatter is None:
        if not is_english_locale(locale):
            raise ConfigurationError(
                f"No built-in phrases for locale {locale!r}. "
                "Pass formatter= with a formatter_for(unit) object, a unit mapping or a callable"
            )
        formatter = EnglishPhrases()

    if hasattr(formatter, "formatter_for"):
        resolved = {unit: formatter.formatter_for(unit) for unit in UNITS}
    elif isinstance(formatter, Mapping):
        missing = [unit for unit in UNITS if unit not in formatter]
        if missing:
            raise ConfigurationError(f"Formatter mapping is missing units: {missing}")
        resolved = {unit: formatter[unit] for unit in UNITS}
    elif callable(formatter):
        resolved = {unit: _bind_unit(formatter, unit) for unit in UNITS}
    else:
        raise ConfigurationError(f"Unsupported formatter: {formatter!r}")

    for unit, fn in resolved.items():
        if not callable(fn):
            raise ConfigurationError(f"Formatter for {unit!r} is not callable: {fn!r}")
    return resolved


__all__ = [
    "UnitFormatter",
    "EnglishPhrases",
    "is_english_locale",
    "resolve_unit_formatters",
]
