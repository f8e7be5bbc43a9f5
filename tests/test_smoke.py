"""Smoke tests - fast, lightweight tests for basic functionality.

These tests verify that the package imports successfully and core functions
are available. They run quickly (<1 second) and are suitable for CI/CD.

Run with: pytest tests/test_smoke.py
"""

import pytest


class TestPackageBasics:
    """Test basic package functionality"""

    def test_version_exists(self):
        """Test that package version is defined"""
        from relativetime import __version__

        assert __version__ is not None
        assert isinstance(__version__, str)
        assert len(__version__) > 0

    def test_package_imports(self):
        """Test that package imports successfully"""
        import relativetime
        assert relativetime is not None

    def test_all_exports_resolve(self):
        """Test every name in __all__ is importable"""
        import relativetime
        for name in relativetime.__all__:
            assert hasattr(relativetime, name), name


class TestAPIImports:
    """Test that all primary API functions can be imported"""

    def test_format_api_imports(self):
        """Test formatting API imports"""
        from relativetime import RelativeTimeFormatter, relative_time, EnglishPhrases

        assert callable(relative_time)
        assert callable(RelativeTimeFormatter)
        assert callable(EnglishPhrases)

    def test_input_imports(self):
        """Test temporal input imports"""
        from relativetime import EpochMillis, Instant, ZonedDateTime, PlainDateTime, classify

        assert callable(classify)
        assert all(callable(cls) for cls in (EpochMillis, Instant, ZonedDateTime, PlainDateTime))

    def test_zone_imports(self):
        """Test zone API imports"""
        from relativetime import offset_minutes, to_local, to_utc, OffsetTable, load_zone_table

        assert callable(offset_minutes)
        assert callable(to_local)
        assert callable(to_utc)
        assert callable(load_zone_table)
        assert OffsetTable is not None

    def test_error_hierarchy(self):
        """Test errors share a base class"""
        from relativetime import (
            RelativeTimeError,
            UnsupportedInputKind,
            ZoneMismatch,
            MissingZoneContext,
            ConfigurationError,
            UnknownTimeZone,
            AmbiguousLocalTime,
        )

        for error in (UnsupportedInputKind, ZoneMismatch, MissingZoneContext, ConfigurationError,
                      UnknownTimeZone, AmbiguousLocalTime):
            assert issubclass(error, RelativeTimeError)


class TestBasicFunctionality:
    """Test basic functionality works"""

    def test_relative_time_basic(self):
        """Test relative_time end to end"""
        from relativetime import relative_time

        assert relative_time(1460289541000, now=1460289600000, time_zone="UTC") == "59 seconds ago"

    def test_clear_cache(self):
        """Test caches can be cleared"""
        from relativetime import clear_cache, offset_minutes

        clear_cache()
        assert offset_minutes("Europe/Berlin", 1460289600000) == -120
