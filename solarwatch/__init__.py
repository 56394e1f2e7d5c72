"""
SOLARWATCH - Sunrise, Sunset and Twilight Times

Computes local sunrise/sunset and twilight times for a location, a date
and a timezone with the almanac solar-position approximation.

Architecture:
    - solarwatch: configuration, logging, exceptions, shared types, CLI
    - services.solar: the event calculator, zenith table and timezone resolver
"""

__version__ = "0.1.0"

# Version tuple for programmatic comparison
VERSION_INFO = (0, 1, 0)

# Core exceptions (import base class for convenience)
from solarwatch.exceptions import SolarWatchError

# Core types (import commonly used types for convenience)
from solarwatch.types import EventType, Location
