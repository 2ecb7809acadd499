# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for ground-track sampling."""
import math
from datetime import datetime, timedelta, timezone

import pytest

from satellite_utilities.domain.errors import OrbitPathError, PropagationError
from satellite_utilities.domain.orbit_path import GroundPoint, normalize_longitude, orbit_path
from satellite_utilities.domain.orbital_mechanics import OrbitalConstants
from satellite_utilities.domain.tle import parse_tle

from conftest import ISS_LINE1, ISS_LINE2


START = datetime(2025, 3, 27, 4, 0, tzinfo=timezone.utc)


class EquatorialPropagator:
    """Circular equatorial orbit of the given radius and period."""

    def __init__(self, radius_m: float = 6_778_137.0, period_min: float = 92.0):
        self.radius_m = radius_m
        self.period_min = period_min

    def position_at(self, record, when):
        angle = 2 * math.pi * (when - START).total_seconds() / (self.period_min * 60.0)
        return (self.radius_m * math.cos(angle), self.radius_m * math.sin(angle), 0.0)


class DecayingPropagator:
    """Fails after a number of successful calls."""

    def __init__(self, good_calls: int):
        self.remaining = good_calls

    def position_at(self, record, when):
        if self.remaining == 0:
            raise PropagationError("satellite decayed")
        self.remaining -= 1
        return (7_000_000.0, 0.0, 0.0)


@pytest.fixture
def iss():
    return parse_tle("ISS (ZARYA)", ISS_LINE1, ISS_LINE2)


class TestNormalizeLongitude:

    @pytest.mark.parametrize("lon,expected", [
        (0.0, 0.0),
        (179.5, 179.5),
        (180.0, -180.0),
        (-180.0, -180.0),
        (190.0, -170.0),
        (-190.0, 170.0),
        (540.0, -180.0),
        (725.0, 5.0),
    ])
    def test_wraps(self, lon, expected):
        assert normalize_longitude(lon) == pytest.approx(expected)


class TestOrbitPath:

    def test_default_window(self, iss):
        """90 minutes at 1-minute steps gives 91 points."""
        points = orbit_path(iss, EquatorialPropagator(), start=START)
        assert len(points) == 91
        assert all(isinstance(p, GroundPoint) for p in points)
        assert points[0].when == START
        assert points[-1].when == START + timedelta(minutes=90)

    def test_equatorial_track(self, iss):
        """An equatorial orbit stays on the equator at constant altitude."""
        points = orbit_path(iss, EquatorialPropagator(), start=START)
        expected_alt = 6_778_137.0 - OrbitalConstants.R_EARTH_EQUATORIAL
        for p in points:
            assert abs(p.lat_deg) < 1e-6
            assert p.alt_m == pytest.approx(expected_alt, abs=1.0)
            assert -180.0 <= p.lon_deg < 180.0

    def test_longer_window_and_step(self, iss):
        points = orbit_path(iss, EquatorialPropagator(), start=START, minutes=720, step_minutes=10)
        assert len(points) == 73
        assert points[1].when - points[0].when == timedelta(minutes=10)

    def test_zero_minutes(self, iss):
        assert len(orbit_path(iss, EquatorialPropagator(), start=START, minutes=0)) == 1

    def test_start_defaults_to_now(self, iss):
        before = datetime.now(timezone.utc)
        points = orbit_path(iss, EquatorialPropagator(), minutes=1)
        assert points[0].when >= before

    def test_propagation_failure(self, iss):
        """A failing sample aborts the whole path."""
        with pytest.raises(OrbitPathError) as exc_info:
            orbit_path(iss, DecayingPropagator(good_calls=10), start=START)
        assert isinstance(exc_info.value.__cause__, PropagationError)

    @pytest.mark.parametrize("kwargs", [{"minutes": -1}, {"step_minutes": 0}])
    def test_bad_arguments(self, iss, kwargs):
        with pytest.raises(ValueError):
            orbit_path(iss, EquatorialPropagator(), start=START, **kwargs)
