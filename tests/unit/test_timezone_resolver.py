"""
Unit tests for the SOLARWATCH timezone resolver.
"""

from datetime import date
from unittest.mock import patch

import pytest
import pytz

from services.solar.timezone_resolver import TimezoneResolver, get_resolver
from solarwatch.exceptions import TimezoneResolutionError


@pytest.fixture
def resolver():
    return TimezoneResolver()


class TestUtcOffset:
    """Offsets follow each zone's daylight saving rules."""

    def test_chicago_winter(self, resolver):
        assert resolver.utc_offset_hours("America/Chicago", date(2016, 12, 25)) == -6.0

    def test_chicago_summer(self, resolver):
        assert resolver.utc_offset_hours("America/Chicago", date(2016, 7, 4)) == -5.0

    def test_southern_hemisphere_summer(self, resolver):
        assert resolver.utc_offset_hours("Australia/Sydney", date(2021, 1, 15)) == 11.0

    def test_fractional_offset(self, resolver):
        assert resolver.utc_offset_hours("Asia/Kolkata", date(2021, 1, 15)) == 5.5

    def test_utc(self, resolver):
        assert resolver.utc_offset_hours("UTC", date(2021, 1, 15)) == 0.0

    def test_transition_day_uses_daytime_offset(self, resolver):
        """On the spring-forward date the offset after 02:00 is reported."""
        assert resolver.utc_offset_hours("America/Chicago", date(2021, 3, 14)) == -5.0

    def test_unknown_zone(self, resolver):
        with pytest.raises(TimezoneResolutionError) as exc_info:
            resolver.utc_offset_hours("Nowhere/Special", date(2021, 1, 1))
        assert isinstance(exc_info.value.__cause__, pytz.UnknownTimeZoneError)
        assert exc_info.value.timezone_id == "Nowhere/Special"


class TestLocalTimezone:
    """System zone discovery through tzlocal."""

    def test_returns_name(self, resolver):
        with patch("services.solar.timezone_resolver.tzlocal.get_localzone_name", return_value="Europe/Oslo"):
            assert resolver.local_timezone_name() == "Europe/Oslo"

    def test_failure_wrapped(self, resolver):
        with patch(
            "services.solar.timezone_resolver.tzlocal.get_localzone_name",
            side_effect=LookupError("no zone"),
        ):
            with pytest.raises(TimezoneResolutionError):
                resolver.local_timezone_name()

    def test_empty_name(self, resolver):
        with patch("services.solar.timezone_resolver.tzlocal.get_localzone_name", return_value=None):
            with pytest.raises(TimezoneResolutionError):
                resolver.local_timezone_name()


def test_get_resolver_singleton():
    assert get_resolver() is get_resolver()
