"""
SOLARWATCH Solar Event Calculator

Computes sunrise and sunset local clock times (and twilight start/end for
the deeper zeniths) with the Almanac for Computers approximation:

    1. base longitude hour     lngHour = longitude / 15
    2. longitude hour          t = N + ((6 or 18) - lngHour) / 24
    3. mean anomaly            M = 0.9856 t - 3.289
    4. sun true longitude      L = M + 1.916 sin M + 0.020 sin 2M + 282.634
    5. cos local hour angle    cosH = (cos z - sinDec sin lat) / (cosDec cos lat)
    6. sun local hour          H = acos(cosH) / 15, rise uses 360 - acos(cosH)
    7. right ascension         RA = atan(0.91764 tan L), same quadrant as L
    8. local mean time         T = H + RA - 0.06571 t - 6.622
    9. local time              UT = T - lngHour, plus the zone's UTC offset

Each step reads fields of an immutable ComputationContext and returns a
new context with exactly one more field set. The first failing step stops
the pipeline.

Accuracy is about one minute for non-polar latitudes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Callable, Optional, Union

from solarwatch.exceptions import (
    DaylightOrderError,
    InvalidDateError,
    InvalidEventTypeError,
    InvalidZenithError,
    SolarEventError,
    SunNeverCrossesZenithError,
    TimezoneResolutionError,
)
from solarwatch.types import EventType, Hours, Location

from .timezone_resolver import OffsetResolver, get_resolver
from .zeniths import Zenith, zenith_degrees

logger = logging.getLogger("SOLARWATCH.Solar")

# Option sentinels
TODAY = "today"
LOCAL = "local"

# Almanac constants
DEGREES_PER_HOUR = 15.0
SIN_OBLIQUITY = 0.39782
COS_OBLIQUITY = 0.91764


# =============================================================================
# Degree / Radian Helpers
# =============================================================================


def deg_to_rad(degrees: float) -> float:
    return degrees / 180.0 * math.pi


def rad_to_deg(radians: float) -> float:
    return radians * 180.0 / math.pi


def _normalize_degrees(degrees: float) -> float:
    """Bring an angle into [0, 360) with a single correction."""
    if degrees < 0.0:
        return degrees + 360.0
    if degrees >= 360.0:
        return degrees - 360.0
    return degrees


def _wrap_hours(hours: Hours) -> Hours:
    """Bring a clock value into [0, 24)."""
    hours = hours % 24.0
    if hours >= 24.0:
        hours -= 24.0
    return hours


# =============================================================================
# Options
# =============================================================================


@dataclass(frozen=True)
class ResolvedOptions:
    """Options with every default substituted. Input to the pure pipeline."""
    date: date
    zenith: float
    timezone: str


@dataclass(frozen=True)
class EventOptions:
    """Caller options for a solar event calculation.

    Attributes:
        date: Local calendar date, None or "today" for the current date
        zenith: Degrees, a Zenith member or its name; None for official
        timezone: IANA identifier, None or "local" for the system zone
    """
    date: Union[date, str, None] = None
    zenith: Union[float, str, Zenith, None] = None
    timezone: Optional[str] = None

    def resolve(self, resolver: OffsetResolver) -> ResolvedOptions:
        """Resolve defaults against the system clock and timezone.

        Raises:
            InvalidZenithError: Zenith not usable
            TimezoneResolutionError: System timezone cannot be determined
            InvalidDateError: Date is neither a date nor "today"
        """
        if self.date is None or self.date == TODAY:
            on_date = date.today()
        elif isinstance(self.date, datetime):
            on_date = self.date.date()
        elif isinstance(self.date, date):
            on_date = self.date
        else:
            raise InvalidDateError(f"Date must be a date or '{TODAY}'", value=self.date)

        if self.timezone is None or self.timezone == LOCAL:
            timezone_id = resolver.local_timezone_name()
        else:
            timezone_id = self.timezone

        return ResolvedOptions(
            date=on_date,
            zenith=zenith_degrees(self.zenith),
            timezone=timezone_id,
        )


# =============================================================================
# Computation Context
# =============================================================================


DERIVED_FIELDS = (
    "base_longitude_hour",
    "longitude_hour",
    "mean_anomaly",
    "sun_true_longitude",
    "cos_sun_local_hour",
    "sun_local_hour",
    "right_ascension",
    "local_mean_time",
    "local_time",
)


@dataclass(frozen=True)
class ComputationContext:
    """Single-assignment record threaded through the pipeline.

    Inputs are set at construction. Each derived field starts as None and
    is written once by its step through with_field().
    """
    event_type: EventType
    zenith: float
    latitude: float
    longitude: float
    date: date
    timezone: str

    base_longitude_hour: Optional[Hours] = None
    longitude_hour: Optional[float] = None
    mean_anomaly: Optional[float] = None
    sun_true_longitude: Optional[float] = None     # degrees [0, 360)
    cos_sun_local_hour: Optional[float] = None
    sun_local_hour: Optional[Hours] = None
    right_ascension: Optional[float] = None        # degrees [0, 360)
    local_mean_time: Optional[Hours] = None
    local_time: Optional[time] = None

    def with_field(self, name: str, value: Any) -> "ComputationContext":
        """Return a copy with derived field name set.

        Raises:
            ValueError: Unknown field or field already written
        """
        if name not in DERIVED_FIELDS:
            raise ValueError(f"{name} is not a derived field")
        if getattr(self, name) is not None:
            raise ValueError(f"{name} has already been computed")
        return replace(self, **{name: value})

    def require(self, name: str) -> Any:
        """Value of an already computed field."""
        value = getattr(self, name)
        if value is None:
            raise ValueError(f"{name} has not been computed yet")
        return value

    @property
    def right_ascension_hours(self) -> Hours:
        return self.require("right_ascension") / DEGREES_PER_HOUR

    @property
    def day_of_year(self) -> int:
        return self.date.timetuple().tm_yday

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["event_type"] = self.event_type.value
        data["date"] = self.date.isoformat()
        if self.local_time is not None:
            data["local_time"] = self.local_time.isoformat()
        return data


# =============================================================================
# Pipeline Steps
# =============================================================================


def base_longitude_hour(ctx: ComputationContext) -> ComputationContext:
    """lngHour: longitude converted from degrees to hours."""
    return ctx.with_field("base_longitude_hour", ctx.longitude / DEGREES_PER_HOUR)


def longitude_hour(ctx: ComputationContext) -> ComputationContext:
    """t: approximate event time as a fractional day of the year."""
    offset = ctx.event_type.approximate_hour
    value = ctx.day_of_year + ((offset - ctx.longitude / DEGREES_PER_HOUR) / 24.0)
    return ctx.with_field("longitude_hour", value)


def mean_anomaly(ctx: ComputationContext) -> ComputationContext:
    """M: the sun's mean anomaly in degrees."""
    value = ctx.require("longitude_hour") * 0.9856 - 3.289
    return ctx.with_field("mean_anomaly", value)


def sun_true_longitude(ctx: ComputationContext) -> ComputationContext:
    """L: the sun's true longitude in degrees, reduced into [0, 360)."""
    m = ctx.require("mean_anomaly")
    value = (
        m
        + 1.916 * math.sin(deg_to_rad(m))
        + 0.020 * math.sin(deg_to_rad(2.0 * m))
        + 282.634
    )
    if value >= 360.0:
        value -= 360.0
    return ctx.with_field("sun_true_longitude", value)


def cos_sun_local_hour(ctx: ComputationContext) -> ComputationContext:
    """cosH: cosine of the sun's local hour angle at the zenith crossing.

    Raises:
        SunNeverCrossesZenithError: cosH outside [-1, 1]
    """
    sin_dec = math.sin(deg_to_rad(ctx.require("sun_true_longitude"))) * SIN_OBLIQUITY
    cos_dec = math.cos(math.asin(sin_dec))
    cos_zenith = math.cos(deg_to_rad(ctx.zenith))
    sin_lat = math.sin(deg_to_rad(ctx.latitude))
    cos_lat = math.cos(deg_to_rad(ctx.latitude))

    value = (cos_zenith - sin_dec * sin_lat) / (cos_dec * cos_lat)

    if value > 1.0:
        raise SunNeverCrossesZenithError(
            f"No sun{ctx.event_type.value} on this date, the sun stays below "
            f"zenith {ctx.zenith:.4f} all day",
            cos_local_hour=value,
            latitude=ctx.latitude,
            on_date=ctx.date,
        )
    if value < -1.0:
        raise SunNeverCrossesZenithError(
            f"No sun{ctx.event_type.value} on this date, the sun stays above "
            f"zenith {ctx.zenith:.4f} all day",
            cos_local_hour=value,
            latitude=ctx.latitude,
            on_date=ctx.date,
        )
    return ctx.with_field("cos_sun_local_hour", value)


def sun_local_hour(ctx: ComputationContext) -> ComputationContext:
    """H: local hour angle in hours; rising takes the morning branch."""
    degrees = rad_to_deg(math.acos(ctx.require("cos_sun_local_hour")))
    if ctx.event_type is EventType.RISE:
        degrees = 360.0 - degrees
    return ctx.with_field("sun_local_hour", degrees / DEGREES_PER_HOUR)


def right_ascension(ctx: ComputationContext) -> ComputationContext:
    """RA in degrees [0, 360), placed in the same quadrant as L.

    atan only resolves the angle modulo 180 degrees, so the result is
    shifted by whole quadrants to sit alongside the true longitude.
    """
    true_longitude = ctx.require("sun_true_longitude")
    value = rad_to_deg(math.atan(COS_OBLIQUITY * math.tan(deg_to_rad(true_longitude))))
    value = _normalize_degrees(value)

    longitude_quadrant = math.floor(true_longitude / 90.0) * 90.0
    ascension_quadrant = math.floor(value / 90.0) * 90.0
    value += longitude_quadrant - ascension_quadrant
    return ctx.with_field("right_ascension", value)


def local_mean_time(ctx: ComputationContext) -> ComputationContext:
    """T: local mean time of the event in hours [0, 24)."""
    value = (
        ctx.require("sun_local_hour")
        + ctx.right_ascension_hours
        - 0.06571 * ctx.require("longitude_hour")
        - 6.622
    )
    if value < 0.0:
        value += 24.0
    elif value >= 24.0:
        value -= 24.0
    return ctx.with_field("local_mean_time", value)


def local_time(ctx: ComputationContext, resolver: OffsetResolver) -> ComputationContext:
    """Local civil clock time: UT shifted by the zone's offset on ctx.date.

    Raises:
        TimezoneResolutionError: The zone cannot be resolved
    """
    utc_hours = ctx.require("local_mean_time") - ctx.require("base_longitude_hour")
    offset = resolver.utc_offset_hours(ctx.timezone, ctx.date)
    return ctx.with_field("local_time", hours_to_time(_wrap_hours(utc_hours + offset)))


# Steps that need nothing beyond the context, in dependency order
PURE_STEPS: tuple[Callable[[ComputationContext], ComputationContext], ...] = (
    base_longitude_hour,
    longitude_hour,
    mean_anomaly,
    sun_true_longitude,
    cos_sun_local_hour,
    sun_local_hour,
    right_ascension,
    local_mean_time,
)


# =============================================================================
# Time Conversion Helpers
# =============================================================================


def _split_hours(hours: Hours) -> tuple[int, int, int]:
    """Split fractional hours into (h, m, s), truncating at each stage."""
    h = int(hours)
    minutes = (hours - h) * 60.0
    m = int(minutes)
    s = int((minutes - m) * 60.0)
    return h, m, s


def hours_to_time(hours: Hours) -> time:
    """Fractional hours since midnight to a time of day (truncated, never rounded)."""
    h, m, s = _split_hours(hours)
    return time(h, m, s)


def time_to_hours(value: time) -> Hours:
    """Time of day to fractional hours since midnight."""
    return value.hour + value.minute / 60.0 + value.second / 3600.0


def daylight(rise: time, set_time: time, next_day: bool = False) -> timedelta:
    """Hours of daylight between a rise and a set time.

    With next_day the set time is read as falling on the following calendar
    day, which happens where local clock time runs well ahead of solar time.

    Raises:
        DaylightOrderError: set_time is earlier than rise on the same day
    """
    hours = time_to_hours(set_time) - time_to_hours(rise)
    if next_day:
        hours += 24.0
    elif set_time < rise:
        raise DaylightOrderError(
            "Set time is earlier than rise time", rise=rise, set_time=set_time
        )
    h, m, s = _split_hours(hours)
    return timedelta(hours=h, minutes=m, seconds=s)


# =============================================================================
# Results
# =============================================================================


class EventStatus(Enum):
    """Outcome of a solar event calculation."""
    SUCCESS = "success"
    INVALID_EVENT_TYPE = "invalid_event_type"
    INVALID_ZENITH = "invalid_zenith"
    INVALID_DATE = "invalid_date"
    SUN_NEVER_CROSSES_ZENITH = "sun_never_crosses_zenith"
    TIMEZONE_ERROR = "timezone_error"


_ERROR_STATUS = (
    (InvalidEventTypeError, EventStatus.INVALID_EVENT_TYPE),
    (InvalidZenithError, EventStatus.INVALID_ZENITH),
    (InvalidDateError, EventStatus.INVALID_DATE),
    (SunNeverCrossesZenithError, EventStatus.SUN_NEVER_CROSSES_ZENITH),
    (TimezoneResolutionError, EventStatus.TIMEZONE_ERROR),
)


def _status_for(error: Exception) -> EventStatus:
    for error_type, status in _ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    raise TypeError(f"No event status for {type(error).__name__}")


@dataclass
class EventResult:
    """Result of a solar event calculation."""
    event_type: Any
    status: EventStatus
    time: Optional[time] = None
    error: Optional[Exception] = None
    message: str = ""

    @property
    def success(self) -> bool:
        """Check if the event was computed."""
        return self.status == EventStatus.SUCCESS

    def unwrap(self) -> time:
        """The computed time, or raise the stored error."""
        if self.error is not None:
            raise self.error
        if self.time is None:
            raise ValueError(f"No time recorded for status {self.status.value}")
        return self.time

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        event = self.event_type.value if isinstance(self.event_type, EventType) else str(self.event_type)
        return {
            "event": event,
            "status": self.status.value,
            "time": self.time.isoformat() if self.time else None,
            "message": self.message,
        }


@dataclass
class SunTimes:
    """Rise, set and daylight length for one date.

    Clock times are wrapped into one day, so a set after local midnight
    reads earlier than the rise; set_next_day records that case.
    """
    location: Location
    date: date
    timezone: str
    rise: time
    set: time
    set_next_day: bool = field(init=False)
    daylight: timedelta = field(init=False)

    def __post_init__(self) -> None:
        self.set_next_day = self.set < self.rise
        self.daylight = daylight(self.rise, self.set, next_day=self.set_next_day)

    def to_dict(self) -> dict[str, Any]:
        return {
            "latitude": self.location.latitude,
            "longitude": self.location.longitude,
            "date": self.date.isoformat(),
            "timezone": self.timezone,
            "rise": self.rise.isoformat(),
            "set": self.set.isoformat(),
            "set_next_day": self.set_next_day,
            "daylight": str(self.daylight),
        }


# =============================================================================
# Calculator
# =============================================================================


def verify_event_type(event_type: Any) -> EventType:
    """Validate the requested event.

    Raises:
        InvalidEventTypeError: Neither rise nor set
    """
    try:
        return EventType.coerce(event_type)
    except ValueError:
        raise InvalidEventTypeError(
            "Event type must be either 'rise' or 'set'", event_type=event_type
        ) from None


class SolarEventCalculator:
    """
    Sunrise/sunset calculator.

    Stateless apart from the timezone resolver, safe to share between
    callers.
    """

    def __init__(self, resolver: Optional[OffsetResolver] = None):
        self.resolver = resolver or get_resolver()

    def build_context(
        self,
        event_type: Any,
        location: tuple[float, float],
        options: Optional[EventOptions] = None,
    ) -> ComputationContext:
        """Validate inputs and resolve defaults into a fresh context."""
        validated = verify_event_type(event_type)
        resolved = (options or EventOptions()).resolve(self.resolver)
        latitude, longitude = location
        return ComputationContext(
            event_type=validated,
            zenith=resolved.zenith,
            latitude=float(latitude),
            longitude=float(longitude),
            date=resolved.date,
            timezone=resolved.timezone,
        )

    def run_pipeline(self, ctx: ComputationContext) -> ComputationContext:
        """Apply every derivation step; the first failure propagates."""
        for step in PURE_STEPS:
            ctx = step(ctx)
        return local_time(ctx, self.resolver)

    def calculate(
        self,
        event_type: Any,
        location: tuple[float, float],
        options: Optional[EventOptions] = None,
    ) -> time:
        """
        Compute the local time of a solar event.

        Args:
            event_type: EventType.RISE/SET or "rise"/"set"
            location: (latitude, longitude) in decimal degrees, west negative
            options: Date, zenith and timezone; defaults resolved from system

        Returns:
            Local time of day, seconds truncated

        Raises:
            InvalidEventTypeError: Event is neither rise nor set
            InvalidZenithError: Zenith name or angle not usable
            SunNeverCrossesZenithError: No such event on that date
            TimezoneResolutionError: Timezone cannot be resolved
        """
        ctx = self.build_context(event_type, location, options)
        logger.debug(
            f"Computing {ctx.event_type.value} at ({ctx.latitude}, {ctx.longitude}) "
            f"on {ctx.date} zenith={ctx.zenith:.4f} tz={ctx.timezone}"
        )
        ctx = self.run_pipeline(ctx)
        logger.debug(f"{ctx.event_type.value} at {ctx.local_time}")
        return ctx.require("local_time")

    def compute(
        self,
        event_type: Any,
        location: tuple[float, float],
        options: Optional[EventOptions] = None,
    ) -> EventResult:
        """Like calculate(), but failures are returned in the result."""
        try:
            value = self.calculate(event_type, location, options)
        except (SolarEventError, TimezoneResolutionError) as e:
            status = _status_for(e)
            logger.info(f"Solar event not computed: {e}")
            return EventResult(event_type=event_type, status=status, error=e, message=str(e))
        return EventResult(
            event_type=EventType.coerce(event_type),
            status=EventStatus.SUCCESS,
            time=value,
            message=f"{value.isoformat()}",
        )

    def sun_times(
        self,
        location: tuple[float, float],
        options: Optional[EventOptions] = None,
    ) -> SunTimes:
        """Rise, set and daylight for one date.

        Defaults are resolved once so both events share the same date and zone.
        """
        resolved = (options or EventOptions()).resolve(self.resolver)
        pinned = EventOptions(date=resolved.date, zenith=resolved.zenith, timezone=resolved.timezone)
        rise = self.calculate(EventType.RISE, location, pinned)
        set_time = self.calculate(EventType.SET, location, pinned)
        return SunTimes(
            location=Location(*location),
            date=resolved.date,
            timezone=resolved.timezone,
            rise=rise,
            set=set_time,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

_calculator: Optional[SolarEventCalculator] = None


def get_calculator() -> SolarEventCalculator:
    """Get or create the global calculator."""
    global _calculator
    if _calculator is None:
        _calculator = SolarEventCalculator()
    return _calculator


def _calculator_for(resolver: Optional[OffsetResolver]) -> SolarEventCalculator:
    if resolver is None:
        return get_calculator()
    return SolarEventCalculator(resolver)


def solar_event(
    event_type: Any,
    location: tuple[float, float],
    options: Optional[EventOptions] = None,
    resolver: Optional[OffsetResolver] = None,
) -> time:
    """Local time of a rise or set event. Raises on failure."""
    return _calculator_for(resolver).calculate(event_type, location, options)


def compute_event(
    event_type: Any,
    location: tuple[float, float],
    options: Optional[EventOptions] = None,
    resolver: Optional[OffsetResolver] = None,
) -> EventResult:
    """Local time of a rise or set event as an EventResult."""
    return _calculator_for(resolver).compute(event_type, location, options)


def sun_times(
    location: tuple[float, float],
    options: Optional[EventOptions] = None,
    resolver: Optional[OffsetResolver] = None,
) -> SunTimes:
    """Rise, set and daylight for one date."""
    return _calculator_for(resolver).sun_times(location, options)
