"""Shared test fixtures and utilities for relativetime tests."""

import pytest

from relativetime.format.formatapi import RelativeTimeFormatter
from relativetime.inputs.inputtypes import ZonedDateTime
from relativetime.zones import OffsetTable, clear_cache


# 2016-04-10T12:00:00Z
BASE_NOW_MS = 1460289600000

# America/Los_Angeles transitions, 2016-2017
LA_TRANSITIONS = [
    (1457863200000, 480),  # PST until 2016-03-13T10:00Z
    (1478422800000, 420),  # PDT until 2016-11-06T09:00Z
    (1489312800000, 480),  # PST until 2017-03-12T10:00Z
    (1509872400000, 420),  # PDT until 2017-11-05T09:00Z
    (None, 480),
]


def to_iso_utc(date_time: str) -> str:
    """Expand "2016-04-10 12:00" into "2016-04-10T12:00:00+00:00[UTC]"."""
    date, _, time = date_time.partition(" ")
    segments = [segment.strip() for segment in (time or "00:00:00").split(":")]
    while len(segments) < 3:
        segments.append("00")
    hh, mm, ss = (int(segment) for segment in segments)
    return f"{date}T{hh:02d}:{mm:02d}:{ss:02d}+00:00[UTC]"


def make_zoned(date_time: str) -> ZonedDateTime:
    """ZonedDateTime from "YYYY-MM-DD[ HH:MM[:SS]]" in UTC, or a full bracketed ISO string."""
    if "[" in date_time:
        return ZonedDateTime.from_iso(date_time)
    return ZonedDateTime.from_iso(to_iso_utc(date_time))


@pytest.fixture
def zoned():
    """Fixture exposing the make_zoned helper.

    Example:
        def test_yesterday(rtf, zoned):
            assert rtf.format(zoned("2016-04-09 18:00"), now=zoned("2016-04-10 12:00")) == "yesterday"
    """
    return make_zoned


@pytest.fixture
def base_now():
    """Reference now used across scenarios: 2016-04-10T12:00:00Z in UTC."""
    return make_zoned("2016-04-10 12:00:00")


@pytest.fixture
def rtf():
    """Default English formatter with no ambient zone."""
    return RelativeTimeFormatter()


@pytest.fixture
def la_table():
    """Offset table for Los Angeles covering 2016-2017."""
    return OffsetTable.from_entries(LA_TRANSITIONS, name="America/Los_Angeles")


@pytest.fixture
def fixed_clock():
    """Clock frozen at BASE_NOW_MS."""
    return lambda: BASE_NOW_MS


@pytest.fixture
def fresh_caches():
    """Clear zone caches before and after a test that touches them."""
    clear_cache()
    yield
    clear_cache()
