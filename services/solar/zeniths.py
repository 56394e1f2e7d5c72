"""
SOLARWATCH Zenith Table

Standard zenith angles (degrees from straight up) defining sunrise and
sunset, usually called the twilight definitions:

- Astronomical: sun 18 degrees below the horizon
- Nautical: sun 12 degrees below the horizon
- Civil: sun 6 degrees below the horizon
- Official: sun 50 arcminutes below the horizon (refraction + solar radius)
"""

from enum import Enum
from typing import Union

from solarwatch.exceptions import InvalidZenithError

ASTRONOMICAL = 90.0 + 18.0
NAUTICAL = 90.0 + 12.0
CIVIL = 90.0 + 6.0
OFFICIAL = 90.0 + 50.0 / 60.0


class Zenith(Enum):
    """Named zenith definitions."""
    OFFICIAL = OFFICIAL
    CIVIL = CIVIL
    NAUTICAL = NAUTICAL
    ASTRONOMICAL = ASTRONOMICAL

    @property
    def degrees(self) -> float:
        return self.value


def zenith_degrees(zenith: Union[Zenith, str, float, int, None]) -> float:
    """Resolve a zenith given by name, enum member or angle to degrees.

    None resolves to the official zenith.

    Raises:
        InvalidZenithError: Unknown name or angle outside (0, 180)
    """
    if zenith is None:
        return OFFICIAL
    if isinstance(zenith, Zenith):
        return zenith.degrees
    if isinstance(zenith, str):
        try:
            return Zenith[zenith.strip().upper()].degrees
        except KeyError:
            raise InvalidZenithError(
                f"Unknown zenith '{zenith}', expected one of "
                f"{', '.join(z.name.lower() for z in Zenith)} or an angle",
                zenith=zenith,
            ) from None
    if isinstance(zenith, bool) or not isinstance(zenith, (int, float)):
        raise InvalidZenithError("Zenith must be a name or a number of degrees", zenith=zenith)
    degrees = float(zenith)
    if not 0.0 < degrees < 180.0:
        raise InvalidZenithError("Zenith angle must be between 0 and 180 degrees", zenith=zenith)
    return degrees
