"""
SOLARWATCH Services Package

This package contains the SOLARWATCH service modules organized by function.

Solar Events (services.solar)
-----------------------------
- SolarEventCalculator: Sunrise/sunset/twilight local times
- TimezoneResolver: IANA timezone to UTC offset on a given date (pytz)
- Zenith table: official, civil, nautical and astronomical zeniths

Usage:

    from services.solar import EventOptions, solar_event

    rise = solar_event("rise", (39.1371, -88.65),
                       EventOptions(timezone="America/Chicago"))
"""

__version__ = "0.1.0"
