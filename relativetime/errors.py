"""Error taxonomy for relative-time formatting.

Every error raised by this package derives from RelativeTimeError and from the
builtin exception that best describes it, so callers can catch either:

  >>> from relativetime import relative_time
  >>> try:
  ...     relative_time("yesterday")
  ... except TypeError:
  ...     pass
"""

from typing import Optional


class RelativeTimeError(Exception):
    """Base class for all relativetime errors."""


class UnsupportedInputKind(RelativeTimeError, TypeError):
    """A target or now value is not one of the recognized temporal inputs."""


class ZoneMismatch(RelativeTimeError, ValueError):
    """Two timestamps carry different zones where one shared zone is required."""


class MissingZoneContext(RelativeTimeError, ValueError):
    """A zone-less input was given with no way to determine a comparison zone."""


class ConfigurationError(RelativeTimeError, ValueError):
    """Caller-supplied configuration or zone data is inconsistent."""


class UnknownTimeZone(ConfigurationError):
    """A zone identifier could not be resolved.

    Attributes:
        zone: The identifier as given
        suggestion: Closest known zone name, if any scored high enough
    """

    def __init__(self, zone: str, suggestion: Optional[str] = None):
        self.zone = zone
        self.suggestion = suggestion
        message = f"Unknown time zone: {zone!r}"
        if suggestion:
            message += f" (did you mean {suggestion!r}?)"
        super().__init__(message)


class AmbiguousLocalTime(RelativeTimeError, ValueError):
    """A wall-clock time occurs twice in a zone and the policy forbids guessing."""

    def __init__(self, local_ms: int, earlier_ms: int, later_ms: int):
        self.local_ms = local_ms
        self.earlier_ms = earlier_ms
        self.later_ms = later_ms
        super().__init__(
            f"Local timestamp {local_ms} is ambiguous: "
            f"maps to {earlier_ms} and {later_ms}"
        )


__all__ = [
    "RelativeTimeError",
    "UnsupportedInputKind",
    "ZoneMismatch",
    "MissingZoneContext",
    "ConfigurationError",
    "UnknownTimeZone",
    "AmbiguousLocalTime",
]
