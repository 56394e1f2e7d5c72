"""
SOLARWATCH Custom Exceptions

Provides the domain-specific exception hierarchy for the SOLARWATCH solar
event calculator. Callers can branch on the concrete type to tell a bad
request apart from "no such event on that date".

Exception Hierarchy:
    SolarWatchError (base)
    ├── ConfigurationError
    ├── SolarEventError
    │   ├── InvalidEventTypeError
    │   ├── InvalidZenithError
    │   ├── InvalidDateError
    │   └── SunNeverCrossesZenithError
    ├── TimezoneResolutionError
    └── DaylightOrderError
"""

from typing import Any, Optional


class SolarWatchError(Exception):
    """Base exception for all SOLARWATCH errors.

    All SOLARWATCH-specific exceptions inherit from this class, allowing
    callers to catch all SOLARWATCH errors with a single except clause.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(SolarWatchError):
    """Error in configuration file or settings.

    Raised when configuration validation fails, the requested file is
    missing, or the YAML cannot be parsed.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ) -> None:
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


# =============================================================================
# Solar Event Errors
# =============================================================================

class SolarEventError(SolarWatchError):
    """Base class for errors raised while computing a solar event."""
    pass


class InvalidEventTypeError(SolarEventError):
    """Event type is neither rise nor set.

    Raised when the caller supplied a malformed request.
    """

    def __init__(self, message: str, event_type: Any = None) -> None:
        details: dict[str, Any] = {}
        if event_type is not None:
            details["event_type"] = repr(event_type)
        super().__init__(message, details)
        self.event_type = event_type


class InvalidZenithError(SolarEventError):
    """Zenith is not a known name or not a usable angle."""

    def __init__(self, message: str, zenith: Any = None) -> None:
        details: dict[str, Any] = {}
        if zenith is not None:
            details["zenith"] = repr(zenith)
        super().__init__(message, details)
        self.zenith = zenith


class InvalidDateError(SolarEventError):
    """Date option is neither a date nor "today"."""

    def __init__(self, message: str, value: Any = None) -> None:
        details: dict[str, Any] = {}
        if value is not None:
            details["date"] = repr(value)
        super().__init__(message, details)
        self.value = value


class SunNeverCrossesZenithError(SolarEventError):
    """The sun does not cross the requested zenith on that date.

    Raised when the cosine of the local hour angle falls outside [-1, 1],
    which happens during polar day or polar night (or deep twilight
    zeniths at high latitudes).

    Attributes:
        cos_local_hour: The out-of-range cosine value
        always_day: True when the sun stays above the zenith all day,
            False when it stays below
    """

    def __init__(
        self,
        message: str,
        cos_local_hour: Optional[float] = None,
        latitude: Optional[float] = None,
        on_date: Any = None,
    ) -> None:
        details: dict[str, Any] = {}
        if cos_local_hour is not None:
            details["cos_local_hour"] = round(cos_local_hour, 6)
        if latitude is not None:
            details["latitude"] = latitude
        if on_date is not None:
            details["date"] = str(on_date)
        super().__init__(message, details)
        self.cos_local_hour = cos_local_hour
        self.latitude = latitude
        self.on_date = on_date

    @property
    def always_day(self) -> Optional[bool]:
        if self.cos_local_hour is None:
            return None
        return self.cos_local_hour < -1.0


# =============================================================================
# Timezone Errors
# =============================================================================

class TimezoneResolutionError(SolarWatchError):
    """Timezone identifier could not be resolved to a UTC offset."""

    def __init__(
        self,
        message: str,
        timezone_id: Optional[str] = None,
        on_date: Any = None,
    ) -> None:
        details: dict[str, Any] = {}
        if timezone_id:
            details["timezone"] = timezone_id
        if on_date is not None:
            details["date"] = str(on_date)
        super().__init__(message, details)
        self.timezone_id = timezone_id
        self.on_date = on_date


# =============================================================================
# Daylight Errors
# =============================================================================

class DaylightOrderError(SolarWatchError):
    """Set time is earlier in the day than rise time.

    daylight() does not guess a wraparound policy; callers pass a same-day
    pair with set >= rise, or say explicitly that set falls on the next day.
    """

    def __init__(self, message: str, rise: Any = None, set_time: Any = None) -> None:
        details: dict[str, Any] = {}
        if rise is not None:
            details["rise"] = str(rise)
        if set_time is not None:
            details["set"] = str(set_time)
        super().__init__(message, details)
        self.rise = rise
        self.set_time = set_time


# =============================================================================
# Convenience aliases
# =============================================================================

Error = SolarWatchError
