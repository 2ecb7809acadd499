# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Where the Sun is, for the phase-angle term of apparent magnitude.

Low-precision series from the Astronomical Almanac (Meeus ch. 25 gives
the same terms), good to about one arcminute over 1950-2050.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone

AU_METERS: float = 1.495978707e11

_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
_SECONDS_PER_CENTURY = 36525.0 * 86400.0


@dataclass(frozen=True)
class SunPosition:
    """Geocentric Sun position at an epoch."""
    position_eci_m: tuple[float, float, float]
    right_ascension_rad: float
    declination_rad: float
    distance_m: float


def julian_centuries_j2000(epoch: datetime) -> float:
    """Julian centuries since J2000.0; naive datetimes are UTC."""
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    return (epoch - _J2000).total_seconds() / _SECONDS_PER_CENTURY


def _series(t: float) -> tuple[float, float, float]:
    """(ecliptic longitude, obliquity, distance in AU) at T centuries."""
    anomaly = math.radians((357.5291 + 35999.0503 * t) % 360.0)
    longitude = math.radians(
        (280.4665 + 36000.7698 * t
         + 1.9146 * math.sin(anomaly) + 0.0200 * math.sin(2.0 * anomaly)) % 360.0
    )
    obliquity = math.radians(23.4393 - 0.0130 * t)
    distance_au = 1.00014 - 0.01671 * math.cos(anomaly) - 0.00014 * math.cos(2.0 * anomaly)
    return longitude, obliquity, distance_au


def sun_position_eci(epoch: datetime) -> SunPosition:
    """Sun position in ECI (metres) with its right ascension and declination."""
    longitude, obliquity, distance_au = _series(julian_centuries_j2000(epoch))
    distance_m = distance_au * AU_METERS

    # Ecliptic → equatorial: rotate the unit vector about X by the obliquity.
    ux = math.cos(longitude)
    uy = math.cos(obliquity) * math.sin(longitude)
    uz = math.sin(obliquity) * math.sin(longitude)

    return SunPosition(
        position_eci_m=(distance_m * ux, distance_m * uy, distance_m * uz),
        right_ascension_rad=math.atan2(uy, ux),
        declination_rad=math.asin(uz),
        distance_m=distance_m,
    )
