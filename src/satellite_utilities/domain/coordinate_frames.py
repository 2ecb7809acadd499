# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Frame conversions used by the magnitude and ground-track helpers.

    ECI       inertial; SGP4's TEME output is used as ECI directly
    ECEF      Earth-fixed, rotated from ECI by GMST about Z
    geodetic  (lat_deg, lon_deg, alt_m) on the WGS84 ellipsoid

Precession, nutation and polar motion are ignored.
"""
import math
from datetime import datetime, timezone

from satellite_utilities.domain.orbital_mechanics import OrbitalConstants, SECONDS_PER_DAY

Vector3 = tuple[float, float, float]

_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
_DAYS_PER_CENTURY = 36525.0
_LATITUDE_TOLERANCE_RAD = 1e-12
_MAX_ITERATIONS = 20


def _days_since_j2000(epoch: datetime) -> float:
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    return (epoch - _J2000).total_seconds() / SECONDS_PER_DAY


def gmst_rad(epoch: datetime) -> float:
    """
    Greenwich Mean Sidereal Time in radians, in [0, 2π).

    IAU 1982 expression in days (d) and Julian centuries (T) from J2000:
        GMST° = 280.46061837 + 360.98564736629·d + 0.000387933·T² − T³/38710000

    Naive datetimes are taken as UTC.
    """
    d = _days_since_j2000(epoch)
    t = d / _DAYS_PER_CENTURY
    degrees = 280.46061837 + 360.98564736629 * d + t * t * (0.000387933 - t / 38710000.0)
    return math.radians(degrees % 360.0)


def _spin(vec: Vector3, angle_rad: float) -> Vector3:
    # Passive rotation about Z: components of vec in a frame turned by angle.
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    x, y, z = vec
    return (c * x + s * y, c * y - s * x, z)


def eci_to_ecef(pos_eci: Vector3, gmst_angle_rad: float) -> Vector3:
    """ECI position expressed in the Earth-fixed frame at the given GMST."""
    return _spin(pos_eci, gmst_angle_rad)


def ecef_to_eci(pos_ecef: Vector3, gmst_angle_rad: float) -> Vector3:
    return _spin(pos_ecef, -gmst_angle_rad)


def _prime_vertical_radius(sin_lat: float) -> float:
    return OrbitalConstants.R_EARTH_EQUATORIAL / math.sqrt(
        1.0 - OrbitalConstants.E_SQUARED * sin_lat * sin_lat
    )


def ecef_to_geodetic(pos_ecef: Vector3) -> tuple[float, float, float]:
    """
    WGS84 geodetic coordinates of an ECEF position.

    Latitude is refined by fixed-point iteration until it moves less than
    1e-12 rad. Altitude uses the form that stays finite at the poles.

    Returns:
        (lat_deg, lon_deg, alt_m); lon_deg in (-180, 180].
    """
    e2 = OrbitalConstants.E_SQUARED
    x, y, z = pos_ecef
    p = math.hypot(x, y)

    lat = math.atan2(z, p * (1.0 - e2))
    for _ in range(_MAX_ITERATIONS):
        sin_lat = math.sin(lat)
        refined = math.atan2(z + e2 * _prime_vertical_radius(sin_lat) * sin_lat, p)
        if abs(refined - lat) < _LATITUDE_TOLERANCE_RAD:
            lat = refined
            break
        lat = refined

    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    alt = (p * cos_lat + z * sin_lat
           - OrbitalConstants.R_EARTH_EQUATORIAL * math.sqrt(1.0 - e2 * sin_lat * sin_lat))
    return math.degrees(lat), math.degrees(math.atan2(y, x)), alt


def geodetic_to_ecef(lat_deg: float, lon_deg: float, alt_m: float) -> Vector3:
    """ECEF position (m) of a WGS84 geodetic point."""
    lat, lon = math.radians(lat_deg), math.radians(lon_deg)
    sin_lat = math.sin(lat)
    n = _prime_vertical_radius(sin_lat)
    horizontal = (n + alt_m) * math.cos(lat)
    return (
        horizontal * math.cos(lon),
        horizontal * math.sin(lon),
        (n * (1.0 - OrbitalConstants.E_SQUARED) + alt_m) * sin_lat,
    )


def geodetic_to_eci(lat_deg: float, lon_deg: float, alt_m: float, epoch: datetime) -> Vector3:
    """Observer position in ECI at an epoch."""
    return ecef_to_eci(geodetic_to_ecef(lat_deg, lon_deg, alt_m), gmst_rad(epoch))


def eci_to_geodetic(pos_eci: Vector3, epoch: datetime) -> tuple[float, float, float]:
    """Sub-satellite point (lat_deg, lon_deg, alt_m) of an ECI position."""
    return ecef_to_geodetic(eci_to_ecef(pos_eci, gmst_rad(epoch)))
