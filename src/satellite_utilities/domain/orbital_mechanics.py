# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital constants and mean-motion conversions.

No external dependencies — only stdlib math.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class _OrbitalConstants:
    """Standard orbital constants (IAU/WGS84 values)."""
    MU_EARTH: float = 3.986004418e14   # m³/s² — gravitational parameter
    R_EARTH: float = 6_371_000          # m — mean radius
    EARTH_ROTATION_RATE: float = 7.2921159e-5  # rad/s — sidereal rotation rate
    # WGS84 ellipsoid
    R_EARTH_EQUATORIAL: float = 6_378_137.0       # m — semi-major axis
    R_EARTH_POLAR: float = 6_356_752.3142         # m — semi-minor axis
    FLATTENING: float = 1.0 / 298.257223563       # WGS84 flattening
    E_SQUARED: float = 0.00669437999014           # first eccentricity squared


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()

SECONDS_PER_DAY: float = 86400.0
MINUTES_PER_DAY: float = 1440.0


def mean_motion_rad_s(rev_per_day: float) -> float:
    """Convert mean motion from revolutions/day to rad/s."""
    return rev_per_day * 2.0 * math.pi / SECONDS_PER_DAY


def semi_major_axis_from_mean_motion(rev_per_day: float) -> float:
    """
    Semi-major axis from mean motion via Kepler's third law.

        n (rad/s) = rev_per_day × 2π / 86400
        a = (μ / n²)^(1/3)

    Args:
        rev_per_day: Mean motion in revolutions per day (> 0).

    Returns:
        Semi-major axis in meters.

    Raises:
        ValueError: If mean motion is non-positive.
    """
    if rev_per_day <= 0:
        raise ValueError(f"Mean motion must be positive, got {rev_per_day}")
    n = mean_motion_rad_s(rev_per_day)
    return (OrbitalConstants.MU_EARTH / n ** 2) ** (1.0 / 3.0)
