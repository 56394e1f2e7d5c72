"""
SOLARWATCH Shared Type Definitions

Provides type aliases and small data structures shared between the core
package, the solar event service and the command line front end.

Usage:
    from solarwatch.types import EventType, Location
"""

from enum import Enum
from typing import Any, NamedTuple, TypeAlias


# =============================================================================
# Basic Type Aliases
# =============================================================================

Degrees: TypeAlias = float
Hours: TypeAlias = float


# =============================================================================
# Event Types
# =============================================================================

class EventType(Enum):
    """Solar event of interest."""
    RISE = "rise"
    SET = "set"

    @property
    def approximate_hour(self) -> Hours:
        """Approximate local hour of the event used to seed the algorithm."""
        return 6.0 if self is EventType.RISE else 18.0

    @classmethod
    def coerce(cls, value: Any) -> "EventType":
        """Accept an EventType or its case-insensitive string value.

        Raises:
            ValueError: If value names no event type
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.strip().lower())
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


# =============================================================================
# Location Types
# =============================================================================

class Location(NamedTuple):
    """Geographic location.

    Attributes:
        latitude: Latitude in decimal degrees (north positive)
        longitude: Longitude in decimal degrees (east positive, west negative)
    """
    latitude: Degrees
    longitude: Degrees
