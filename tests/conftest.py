"""
Pytest Fixtures for SOLARWATCH Testing.

Provides shared fixtures for the unit tests. Fixtures are picked up
automatically by every test module under tests/.
"""

from datetime import date

import pytest

from services.solar import SolarEventCalculator


class FixedOffsetResolver:
    """Timezone resolver stub returning one offset for every zone and date."""

    def __init__(self, offset_hours: float = 0.0, local_name: str = "Etc/UTC"):
        self.offset_hours = offset_hours
        self.local_name = local_name
        self.calls: list[tuple[str, date]] = []

    def utc_offset_hours(self, timezone_id: str, on_date: date) -> float:
        self.calls.append((timezone_id, on_date))
        return self.offset_hours

    def local_timezone_name(self) -> str:
        return self.local_name


@pytest.fixture
def utc_resolver() -> FixedOffsetResolver:
    """Resolver pinned to UTC."""
    return FixedOffsetResolver(0.0)


@pytest.fixture
def central_resolver() -> FixedOffsetResolver:
    """Resolver pinned to US Central standard time (UTC-6)."""
    return FixedOffsetResolver(-6.0, local_name="America/Chicago")


@pytest.fixture
def calculator() -> SolarEventCalculator:
    """Calculator backed by the real pytz resolver."""
    return SolarEventCalculator()


@pytest.fixture
def lake_sara() -> tuple[float, float]:
    """Lake Sara, IL."""
    return (39.1371, -88.65)
