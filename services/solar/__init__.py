"""
SOLARWATCH Solar Event Service

Sunrise, sunset and twilight times from the almanac approximation.
"""

from .events import (
    ComputationContext,
    EventOptions,
    EventResult,
    EventStatus,
    SolarEventCalculator,
    SunTimes,
    compute_event,
    daylight,
    get_calculator,
    hours_to_time,
    solar_event,
    sun_times,
    time_to_hours,
)
from .timezone_resolver import OffsetResolver, TimezoneResolver, get_resolver
from .zeniths import ASTRONOMICAL, CIVIL, NAUTICAL, OFFICIAL, Zenith, zenith_degrees

__all__ = [
    "ComputationContext",
    "EventOptions",
    "EventResult",
    "EventStatus",
    "SolarEventCalculator",
    "SunTimes",
    "compute_event",
    "daylight",
    "get_calculator",
    "hours_to_time",
    "solar_event",
    "sun_times",
    "time_to_hours",
    "OffsetResolver",
    "TimezoneResolver",
    "get_resolver",
    "ASTRONOMICAL",
    "CIVIL",
    "NAUTICAL",
    "OFFICIAL",
    "Zenith",
    "zenith_degrees",
]
