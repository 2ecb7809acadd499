# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Apparent visual magnitude of sunlit satellites.

Two models:

Simplified (intrinsic magnitude):
    m = m_int + 5·log10(d / 1000 km) − 2.5·log10((1 + cos φ) / 2)

    m_int is the standard magnitude at 1000 km range and 50 % illumination.

Precise (diffuse sphere):
    F(φ) = 2 / (3π²) · ((π − φ)·cos φ + sin φ)
    m = −26.7 − 2.5·log10(A·ρ·F(φ)) + 5·log10(d)

    A is the cross-section and ρ the albedo. With d in km the tabulated
    areas are in km².

φ is the solar phase angle at the satellite (angle between the
satellite→observer and satellite→Sun directions), d the observer range.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

import numpy as np

from satellite_utilities.domain.coordinate_frames import geodetic_to_eci
from satellite_utilities.domain.elements import ElementRecord
from satellite_utilities.domain.errors import SatelliteInfoNotFoundError
from satellite_utilities.domain.solar import sun_position_eci
from satellite_utilities.ports.propagation import Propagator

SUN_APPARENT_MAGNITUDE = -26.7

# Phase-function values below this are rounding residue of F(π) = 0.
_PHASE_FN_FLOOR = 1e-12


@dataclass(frozen=True)
class SatelliteOptics:
    """Optical properties of a known satellite."""
    name: str
    intrinsic_mag: float
    area_km2: float
    albedo: float


KNOWN_SATELLITES: dict[int, SatelliteOptics] = {
    25544: SatelliteOptics("ISS", -1.8, 0.0025, 0.4),
    20580: SatelliteOptics("Hubble", 2.2, 0.00003, 0.35),
    48274: SatelliteOptics("Tiangong", 0.0, 0.0007, 0.45),
    53807: SatelliteOptics("BlueWalker 3", 3.5, 0.000012, 0.65),
    59588: SatelliteOptics("ACS3 solar sail", 2.0, 0.000015, 0.85),
    27386: SatelliteOptics("Envisat", 3.7, 0.0001, 0.35),
}


@dataclass(frozen=True)
class Observer:
    """Ground observer (WGS84 geodetic)."""
    lat_deg: float
    lon_deg: float
    alt_m: float = 0.0


@dataclass(frozen=True)
class ApparentMagnitude:
    """Magnitude sample of a pass."""
    when: datetime
    magnitude: float


def optics_for(norad_index: int) -> SatelliteOptics:
    """
    Look up optical properties.

    Raises:
        SatelliteInfoNotFoundError: For satellites not in KNOWN_SATELLITES.
    """
    try:
        return KNOWN_SATELLITES[norad_index]
    except KeyError:
        raise SatelliteInfoNotFoundError(
            f"No optical properties known for NORAD {norad_index}"
        ) from None


def _geometry(
    record: ElementRecord,
    when: datetime,
    observer: Observer,
    propagator: Propagator,
) -> tuple[float, float]:
    """(phase angle in radians, observer range in km)."""
    sat = np.array(propagator.position_at(record, when))
    obs = np.array(geodetic_to_eci(observer.lat_deg, observer.lon_deg, observer.alt_m, when))
    sun = np.array(sun_position_eci(when).position_eci_m)
    return phase_angle_rad(sat, obs, sun), float(np.linalg.norm(sat - obs)) / 1000.0


def phase_angle_rad(sat_eci, observer_eci, sun_eci) -> float:
    """Angle at the satellite between the observer and the Sun."""
    to_observer = np.asarray(sat_eci, dtype=float) - np.asarray(observer_eci, dtype=float)
    to_sun = np.asarray(sat_eci, dtype=float) - np.asarray(sun_eci, dtype=float)
    cos_phi = np.dot(to_observer, to_sun) / (np.linalg.norm(to_observer) * np.linalg.norm(to_sun))
    return float(np.arccos(np.clip(cos_phi, -1.0, 1.0)))


def intrinsic_magnitude(intrinsic_mag: float, range_km: float, phase_rad: float) -> float:
    """Simplified model from intrinsic magnitude, range and phase angle."""
    illuminated = (1.0 + math.cos(phase_rad)) / 2.0
    # Fully back-lit: nothing reflected towards the observer.
    if illuminated <= 0.0:
        return math.inf
    return intrinsic_mag + 5.0 * math.log10(range_km / 1000.0) - 2.5 * math.log10(illuminated)


def diffuse_sphere_magnitude(area_km2: float, albedo: float,
                             range_km: float, phase_rad: float) -> float:
    """Precise model: Lambertian sphere of given cross-section and albedo."""
    phase_fn = 2.0 / (3.0 * math.pi ** 2) * (
        (math.pi - phase_rad) * math.cos(phase_rad) + math.sin(phase_rad)
    )
    if phase_fn <= _PHASE_FN_FLOOR:
        return math.inf
    reflected = area_km2 * albedo * phase_fn
    if reflected <= 0.0:
        return math.inf
    return SUN_APPARENT_MAGNITUDE - 2.5 * math.log10(reflected) + 5.0 * math.log10(range_km)


def magnitude_at(
    record: ElementRecord,
    when: datetime,
    observer: Observer,
    propagator: Propagator,
) -> float:
    """
    Simplified apparent magnitude at one instant.

    Raises:
        SatelliteInfoNotFoundError: If no intrinsic magnitude is known.
        PropagationError: If the satellite cannot be propagated to `when`.
    """
    optics = optics_for(record.norad_index)
    phase, range_km = _geometry(record, when, observer, propagator)
    return intrinsic_magnitude(optics.intrinsic_mag, range_km, phase)


def magnitude_range(
    record: ElementRecord,
    rise: datetime,
    set_: datetime,
    observer: Observer,
    propagator: Propagator,
    step_s: float = 60.0,
) -> list[ApparentMagnitude]:
    """
    Simplified magnitude sampled every `step_s` seconds from rise to set
    (both inclusive when set falls on a step).
    """
    if step_s <= 0:
        raise ValueError(f"step_s must be positive, got {step_s}")
    optics = optics_for(record.norad_index)

    samples: list[ApparentMagnitude] = []
    current = rise
    while current <= set_:
        phase, range_km = _geometry(record, current, observer, propagator)
        samples.append(ApparentMagnitude(
            when=current,
            magnitude=intrinsic_magnitude(optics.intrinsic_mag, range_km, phase),
        ))
        current = current + timedelta(seconds=step_s)
    return samples


def precise_magnitude(
    record: ElementRecord,
    when: datetime,
    observer: Observer,
    propagator: Propagator,
) -> float:
    """
    Diffuse-sphere apparent magnitude at one instant.

    Raises:
        SatelliteInfoNotFoundError: If no area/albedo is known.
        PropagationError: If the satellite cannot be propagated to `when`.
    """
    optics = optics_for(record.norad_index)
    phase, range_km = _geometry(record, when, observer, propagator)
    return diffuse_sphere_magnitude(optics.area_km2, optics.albedo, range_km, phase)
