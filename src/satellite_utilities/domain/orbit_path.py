# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbit-path sampling for map display.

Samples the sub-satellite point once per step over a window that
defaults to one LEO revolution (90 minutes). Longer windows suit higher
orbits.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from satellite_utilities.domain.coordinate_frames import eci_to_geodetic
from satellite_utilities.domain.elements import ElementRecord
from satellite_utilities.domain.errors import OrbitPathError, PropagationError
from satellite_utilities.ports.propagation import Propagator


@dataclass(frozen=True)
class GroundPoint:
    """Sub-satellite point."""
    when: datetime
    lat_deg: float
    lon_deg: float
    alt_m: float


def normalize_longitude(lon_deg: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return lon_deg - math.floor((lon_deg + 180.0) / 360.0) * 360.0


def orbit_path(
    record: ElementRecord,
    propagator: Propagator,
    start: datetime | None = None,
    minutes: int = 90,
    step_minutes: int = 1,
) -> list[GroundPoint]:
    """
    Ground track from `start` to `start + minutes`, inclusive.

    Args:
        record: Element record to propagate.
        propagator: Propagator port implementation.
        start: First sample time (default: now, UTC).
        minutes: Window length in minutes.
        step_minutes: Sample spacing in minutes.

    Returns:
        minutes // step_minutes + 1 ground points.

    Raises:
        OrbitPathError: If any sample cannot be propagated.
    """
    if minutes < 0 or step_minutes <= 0:
        raise ValueError("minutes must be >= 0 and step_minutes > 0")
    start = start or datetime.now(timezone.utc)

    points: list[GroundPoint] = []
    for minute in range(0, minutes + 1, step_minutes):
        when = start + timedelta(minutes=minute)
        try:
            pos_eci = propagator.position_at(record, when)
        except PropagationError as e:
            raise OrbitPathError(
                f"Couldn't calculate orbit path for NORAD {record.norad_index}: {e}"
            ) from e
        lat_deg, lon_deg, alt_m = eci_to_geodetic(pos_eci, when)
        points.append(GroundPoint(
            when=when,
            lat_deg=lat_deg,
            lon_deg=normalize_longitude(lon_deg),
            alt_m=alt_m,
        ))
    return points
