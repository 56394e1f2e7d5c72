"""
SOLARWATCH Timezone Resolver

Resolves an IANA timezone identifier and a calendar date to the UTC offset
in force on that date, including daylight saving time, using the pytz
database. The system's own zone name is discovered with tzlocal.
"""

import logging
from datetime import date, datetime, time
from typing import Optional, Protocol

import pytz
import tzlocal

from solarwatch.exceptions import TimezoneResolutionError

logger = logging.getLogger("SOLARWATCH.Timezone")

# Offsets are sampled at local noon so DST switch days report the daytime offset
SAMPLE_TIME = time(12, 0)


class OffsetResolver(Protocol):
    """Protocol for UTC offset providers."""

    def utc_offset_hours(self, timezone_id: str, on_date: date) -> float:
        """Get the UTC offset in hours for timezone_id on on_date."""
        ...

    def local_timezone_name(self) -> str:
        """Get the identifier of the system timezone."""
        ...


class TimezoneResolver:
    """pytz backed timezone resolver."""

    def get_timezone(self, timezone_id: str) -> pytz.BaseTzInfo:
        """Look up a pytz timezone.

        Raises:
            TimezoneResolutionError: Unknown identifier
        """
        try:
            return pytz.timezone(timezone_id)
        except pytz.UnknownTimeZoneError as e:
            raise TimezoneResolutionError(
                f"Unknown timezone '{timezone_id}'", timezone_id=timezone_id
            ) from e

    def utc_offset_hours(self, timezone_id: str, on_date: date) -> float:
        """UTC offset in hours valid for timezone_id on on_date.

        Args:
            timezone_id: IANA identifier such as "America/Chicago"
            on_date: Local calendar date

        Returns:
            Offset in hours, west of Greenwich negative

        Raises:
            TimezoneResolutionError: Unknown identifier
        """
        tz = self.get_timezone(timezone_id)
        localized = tz.localize(datetime.combine(on_date, SAMPLE_TIME), is_dst=False)
        offset = localized.utcoffset()
        if offset is None:
            raise TimezoneResolutionError(
                "Timezone returned no UTC offset", timezone_id=timezone_id, on_date=on_date
            )
        hours = offset.total_seconds() / 3600.0
        logger.debug(f"UTC offset for {timezone_id} on {on_date}: {hours:+.2f}h")
        return hours

    def local_timezone_name(self) -> str:
        """Identifier of the system timezone (e.g. "Europe/Berlin").

        Raises:
            TimezoneResolutionError: The system zone cannot be determined
        """
        try:
            name = tzlocal.get_localzone_name()
        except Exception as e:
            raise TimezoneResolutionError(f"Cannot determine system timezone: {e}") from e
        if not name:
            raise TimezoneResolutionError("Cannot determine system timezone")
        return name


# Global instance
_resolver: Optional[TimezoneResolver] = None


def get_resolver() -> TimezoneResolver:
    """Get or create the shared timezone resolver."""
    global _resolver
    if _resolver is None:
        _resolver = TimezoneResolver()
    return _resolver
