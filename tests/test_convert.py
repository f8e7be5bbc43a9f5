"""Tests for local/UTC conversion and DST disambiguation.

Run with: pytest tests/test_convert.py -v
"""

import logging

import pytest

from relativetime.errors import AmbiguousLocalTime, ConfigurationError
from relativetime.zones import LocalFields, OffsetTable, local_timestamp, fields_from_local_timestamp, to_local, to_utc
from relativetime.zones.zoneconvert import MAX_ITERATIONS


LA = "America/Los_Angeles"


# ============================================================================
# Local Fields
# ============================================================================

class TestLocalFields:
    """Test wall-clock field arithmetic"""

    def test_epoch(self):
        """Test the local epoch is zero"""
        assert local_timestamp(LocalFields(1970)) == 0

    def test_month_overflow(self):
        """Test month 13 rolls into January of the next year"""
        assert LocalFields(2015, 13, 1).normalized() == LocalFields(2016, 1, 1)

    def test_day_zero(self):
        """Test day 0 is the last day of the previous month"""
        assert LocalFields(2016, 3, 0).normalized() == LocalFields(2016, 2, 29)

    def test_hour_overflow(self):
        """Test hour 25 rolls into the next day"""
        assert LocalFields(2016, 4, 10, 25).normalized() == LocalFields(2016, 4, 11, 1)

    def test_negative_month(self):
        """Test month 0 is December of the previous year"""
        assert LocalFields(2016, 0, 15).normalized() == LocalFields(2015, 12, 15)

    def test_before_epoch(self):
        """Test negative local timestamps decompose correctly"""
        assert fields_from_local_timestamp(-1) == LocalFields(1969, 12, 31, 23, 59, 59, 999)

    def test_millisecond_precision(self):
        """Test milliseconds survive the round trip"""
        fields = LocalFields(2016, 4, 10, 12, 0, 0, 123)
        assert fields_from_local_timestamp(local_timestamp(fields)) == fields


# ============================================================================
# UTC -> Local
# ============================================================================

class TestToLocal:
    """Test instant to wall-clock conversion"""

    def test_los_angeles_pdt(self):
        """Test 2016-04-10T12:00Z reads as 05:00 PDT"""
        fields, offset = to_local(LA, 1460289600000)
        assert (fields.day, fields.hour, offset) == (10, 5, 420)

    def test_berlin(self):
        """Test 2016-04-10T12:00Z reads as 14:00 CEST"""
        fields, offset = to_local("Europe/Berlin", 1460289600000)
        assert (fields.hour, offset) == (14, -120)

    def test_offset_table(self, la_table):
        """Test conversion through an offset table"""
        fields, offset = to_local(la_table, 1460289600000)
        assert (fields.hour, offset) == (5, 420)


# ============================================================================
# Local -> UTC
# ============================================================================

class TestToUtc:
    """Test fixed-point local to instant resolution"""

    def test_utc_identity(self):
        """Test UTC fields resolve to the same instant"""
        assert to_utc("UTC", LocalFields(2016, 4, 10, 12)) == 1460289600000

    def test_unambiguous_time(self):
        """Test an ordinary summer time in Los Angeles"""
        assert to_utc(LA, LocalFields(2016, 4, 10, 5)) == 1460289600000

    def test_accepts_local_milliseconds(self):
        """Test local milliseconds are accepted in place of fields"""
        local_ms = local_timestamp(LocalFields(2016, 4, 10, 5))
        assert to_utc(LA, local_ms) == 1460289600000

    def test_round_trip_named_zone(self):
        """Test to_utc inverts to_local away from transitions"""
        for epoch_ms in (1451606400000, 1460289600000, 1483228800000):
            fields, _ = to_local(LA, epoch_ms)
            assert to_utc(LA, fields) == epoch_ms

    def test_fall_back_later_default(self):
        """Test the repeated 01:30 on 2016-11-06 resolves to PST by default"""
        assert to_utc(LA, LocalFields(2016, 11, 6, 1, 30)) == 1478424600000

    def test_fall_back_earlier(self):
        """Test the earlier policy picks PDT"""
        assert to_utc(LA, LocalFields(2016, 11, 6, 1, 30), disambiguation="earlier") == 1478421000000

    def test_fall_back_raise(self):
        """Test the raise policy reports both candidates"""
        with pytest.raises(AmbiguousLocalTime) as exc_info:
            to_utc(LA, LocalFields(2016, 11, 6, 1, 30), disambiguation="raise")
        assert exc_info.value.earlier_ms == 1478421000000
        assert exc_info.value.later_ms == 1478424600000

    def test_fall_back_with_table(self, la_table):
        """Test offset tables disambiguate the same way"""
        assert to_utc(la_table, LocalFields(2016, 11, 6, 1, 30)) == 1478424600000

    def test_spring_forward_gap_later(self):
        """Test the skipped 02:30 on 2016-03-13 moves forward by default"""
        assert to_utc(LA, LocalFields(2016, 3, 13, 2, 30)) == 1457865000000

    def test_spring_forward_gap_earlier(self):
        """Test the earlier policy lands before the gap"""
        assert to_utc(LA, LocalFields(2016, 3, 13, 2, 30), disambiguation="earlier") == 1457861400000

    def test_hint_keeps_offset(self):
        """Test a hint inside the repeated hour keeps the hinted offset"""
        local = LocalFields(2016, 11, 6, 1, 30)
        assert to_utc(LA, local, 420) == 1478421000000
        assert to_utc(LA, local, 480) == 1478424600000

    def test_unknown_policy(self):
        """Test unknown policies raise ConfigurationError"""
        with pytest.raises(ConfigurationError):
            to_utc(LA, LocalFields(2016, 4, 10), disambiguation="nearest")

    def test_gap_logs_disambiguation(self, caplog):
        """Test disambiguation is logged at debug level"""
        with caplog.at_level(logging.DEBUG, logger="relativetime.zones.zoneconvert"):
            to_utc(LA, LocalFields(2016, 3, 13, 2, 30))
        assert any("resolved to later" in record.getMessage() for record in caplog.records)

    def test_iteration_bound(self, caplog):
        """Test a three-way offset cycle stops after the bound and warns"""
        # offset_at(10 min) = 20, offset_at(20 min) = 30, offset_at(30 min) = 10
        cycling = OffsetTable.from_entries([(900000, 20), (1500000, 30), (None, 10)], name="Etc/Cycle")
        with caplog.at_level(logging.WARNING, logger="relativetime.zones.zoneconvert"):
            result = to_utc(cycling, LocalFields(1970), 10)
        assert MAX_ITERATIONS == 8
        assert result == 30 * 60000
        assert any(
            f"did not converge after {MAX_ITERATIONS} iterations" in record.getMessage()
            and "Etc/Cycle" in record.getMessage()
            for record in caplog.records
        )
