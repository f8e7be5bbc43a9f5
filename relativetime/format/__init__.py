"""Format module: the relative-time formatter facade and phrase formatters.

Public API:
    RelativeTimeFormatter(formatter=None, *, locale="en", time_zone=None, ...)
        Configured facade; .format(target, now=..., unit=...) -> str

    relative_time(target, *, now=None, unit="best-fit", time_zone=None) -> str
        Convenience wrapper over a shared default formatter

    EnglishPhrases
        Built-in English unit formatters ("yesterday", "in 3 days", ...)

    resolve_unit_formatters(formatter, locale) -> dict
        Turn an injected formatter into one callable per unit
"""

from relativetime.format.formatphrases import (
    UnitFormatter,
    EnglishPhrases,
    is_english_locale,
    resolve_unit_formatters,
)
from relativetime.format.formatapi import (
    ZONE_POLICIES,
    RelativeTimeFormatter,
    default_formatter,
    relative_time,
)

__all__ = [
    "UnitFormatter",
    "EnglishPhrases",
    "is_english_locale",
    "resolve_unit_formatters",
    "ZONE_POLICIES",
    "RelativeTimeFormatter",
    "default_formatter",
    "relative_time",
]
