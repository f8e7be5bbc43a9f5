"""Tests for the zoned timestamp value type.

Run with: pytest tests/test_timestamp.py -v
"""

from datetime import datetime, timezone

import pytest

from relativetime.errors import ConfigurationError, MissingZoneContext
from relativetime.timestamp import ZonedTimestamp, datetime_to_epoch_ms


LA = "America/Los_Angeles"


class TestConstruction:
    """Test building timestamps"""

    def test_from_fields(self):
        """Test wall-clock fields in Berlin"""
        ts = ZonedTimestamp.from_fields("Europe/Berlin", 2016, 4, 10, 14)
        assert ts.epoch_ms == 1460289600000

    def test_from_datetime(self):
        """Test aware datetimes keep their instant and tzinfo"""
        dt = datetime(2016, 4, 10, 12, tzinfo=timezone.utc)
        ts = ZonedTimestamp.from_datetime(dt)
        assert ts.epoch_ms == 1460289600000
        assert ts.zone is timezone.utc

    def test_from_datetime_with_zone(self):
        """Test an explicit zone overrides the datetime's tzinfo"""
        dt = datetime(2016, 4, 10, 12, tzinfo=timezone.utc)
        assert ZonedTimestamp.from_datetime(dt, LA).hour == 5

    def test_naive_datetime_rejected(self):
        """Test naive datetimes have no instant"""
        with pytest.raises(MissingZoneContext):
            datetime_to_epoch_ms(datetime(2016, 4, 10))

    def test_now_uses_clock(self, fixed_clock):
        """Test now() reads the injected clock"""
        assert ZonedTimestamp.now("UTC", fixed_clock).epoch_ms == 1460289600000


class TestReads:
    """Test wall-clock accessors"""

    def test_fields_in_zone(self):
        """Test fields are derived through the zone"""
        ts = ZonedTimestamp(1460289600000, LA)
        assert (ts.year, ts.month, ts.day, ts.hour, ts.minute, ts.second) == (2016, 4, 10, 5, 0, 0)
        assert ts.offset_minutes == 420

    def test_millisecond(self):
        """Test the millisecond field"""
        assert ZonedTimestamp(1460289600123, "UTC").millisecond == 123

    def test_isoformat(self):
        """Test ISO rendering with offset and zone"""
        assert ZonedTimestamp(1460289600000, LA).isoformat() == "2016-04-10T05:00:00.000-07:00[America/Los_Angeles]"
        assert str(ZonedTimestamp(1460289600000, "UTC")) == "2016-04-10T12:00:00.000+00:00[UTC]"

    def test_to_datetime(self):
        """Test conversion to an aware UTC datetime"""
        assert ZonedTimestamp(1460289600000, LA).to_datetime() == datetime(2016, 4, 10, 12, tzinfo=timezone.utc)


class TestIdentity:
    """Test equality and ordering"""

    def test_equality_ignores_zone(self):
        """Test the same instant in two zones compares equal"""
        assert ZonedTimestamp(1460289600000, "UTC") == ZonedTimestamp(1460289600000, "Europe/Berlin")

    def test_ordering_by_instant(self):
        """Test ordering follows the instant"""
        assert ZonedTimestamp(1, "Europe/Berlin") < ZonedTimestamp(2, "UTC")

    def test_immutable(self):
        """Test timestamps are frozen"""
        ts = ZonedTimestamp(0, "UTC")
        with pytest.raises(AttributeError):
            ts.epoch_ms = 1


class TestEdits:
    """Test field edits and truncation"""

    def test_with_hour(self):
        """Test setting the hour keeps the date"""
        ts = ZonedTimestamp.from_fields("Europe/Berlin", 2016, 4, 10, 14)
        assert ts.with_hour(2).isoformat() == "2016-04-10T02:00:00.000+02:00[Europe/Berlin]"

    def test_edits_return_new_values(self):
        """Test the original is unchanged"""
        ts = ZonedTimestamp(1460289600000, "UTC")
        ts.with_minute(30)
        assert ts.minute == 0

    def test_month_overflow(self):
        """Test month 13 rolls into the next year"""
        ts = ZonedTimestamp.from_fields("UTC", 2016, 4, 10)
        assert ts.with_month(13).isoformat().startswith("2017-01-10")

    def test_day_zero(self):
        """Test day 0 is the last day of the previous month"""
        ts = ZonedTimestamp.from_fields("UTC", 2016, 3, 10)
        assert ts.with_day(0).day == 29

    def test_start_of_units(self):
        """Test truncation to each unit"""
        ts = ZonedTimestamp.from_fields("UTC", 2016, 4, 10, 12, 34, 56, 789)
        assert ts.start_of("second").millisecond == 0
        assert ts.start_of("minute").second == 0
        assert ts.start_of("hour").minute == 0
        assert ts.start_of("day").hour == 0
        assert ts.start_of("month").day == 1
        assert ts.start_of("year").month == 1

    def test_start_of_day_across_fall_back(self):
        """Test midnight before a fall-back transition keeps PDT"""
        ts = ZonedTimestamp.from_fields(LA, 2016, 11, 6, 12)
        assert ts.offset_minutes == 480
        midnight = ts.start_of("day")
        assert (midnight.day, midnight.hour, midnight.offset_minutes) == (6, 0, 420)

    def test_start_of_day_across_spring_forward(self):
        """Test midnight before a spring-forward transition keeps PST"""
        ts = ZonedTimestamp.from_fields(LA, 2016, 3, 13, 12)
        midnight = ts.start_of("day")
        assert (midnight.day, midnight.hour, midnight.offset_minutes) == (13, 0, 480)

    def test_start_of_invalid_unit(self):
        """Test unknown truncation units"""
        with pytest.raises(ConfigurationError):
            ZonedTimestamp(0, "UTC").start_of("week")

    def test_replace_unknown_field(self):
        """Test unknown fields raise ConfigurationError"""
        with pytest.raises(ConfigurationError):
            ZonedTimestamp(0, "UTC").replace(fortnight=2)

    def test_with_time_zone(self):
        """Test changing zone keeps the instant"""
        ts = ZonedTimestamp(1460289600000, "UTC").with_time_zone(LA)
        assert ts.epoch_ms == 1460289600000
        assert ts.hour == 5

    def test_clone(self):
        """Test clones are equal and share the zone"""
        ts = ZonedTimestamp(1460289600000, LA)
        copy = ts.clone()
        assert copy == ts and copy.zone == ts.zone
