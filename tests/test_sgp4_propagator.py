# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the SGP4 propagator adapter."""
import math
from datetime import datetime, timedelta, timezone

import pytest

sgp4 = pytest.importorskip("sgp4", reason="sgp4 not installed (pip install satellite-utilities[live])")

from satellite_utilities.adapters.sgp4_propagator import SGP4Propagator, _epoch_days_since_1949
from satellite_utilities.domain.errors import PropagationError
from satellite_utilities.domain.orbit_path import orbit_path
from satellite_utilities.domain.tle import parse_tle, parse_tle_text
from satellite_utilities.ports.propagation import Propagator

from conftest import FOUR_SATELLITE_TLE, ISS_LINE1, ISS_LINE2


@pytest.fixture
def iss():
    return parse_tle("ISS (ZARYA)", ISS_LINE1, ISS_LINE2)


class TestEpochOffset:

    def test_reference_day(self):
        assert _epoch_days_since_1949(datetime(1949, 12, 31, tzinfo=timezone.utc)) == 0.0

    def test_fractional_day(self):
        when = datetime(1950, 1, 1, 6, tzinfo=timezone.utc)
        assert _epoch_days_since_1949(when) == pytest.approx(1.25)


class TestSGP4Propagator:

    def test_implements_port(self):
        assert isinstance(SGP4Propagator(), Propagator)

    def test_iss_radius_at_epoch(self, iss):
        """ISS sits ~6780 km from Earth's centre."""
        x, y, z = SGP4Propagator().position_at(iss, iss.epoch)
        assert 6_650_000 < math.sqrt(x * x + y * y + z * z) < 6_900_000

    def test_matches_sgp4_twoline2rv(self, iss):
        """Initializing from elements agrees with the library's own TLE reader."""
        from sgp4.api import Satrec, jday

        reference = Satrec.twoline2rv(ISS_LINE1, ISS_LINE2)
        when = iss.epoch + timedelta(hours=3)
        jd, fr = jday(when.year, when.month, when.day, when.hour, when.minute,
                      when.second + when.microsecond / 1e6)
        _, expected_km, _ = reference.sgp4(jd, fr)

        got = SGP4Propagator().position_at(iss, when)
        for g, e in zip(got, expected_km):
            assert g == pytest.approx(e * 1000.0, abs=1000.0)

    def test_satrec_cached_per_record(self, iss):
        prop = SGP4Propagator()
        prop.position_at(iss, iss.epoch)
        prop.position_at(iss, iss.epoch + timedelta(minutes=1))
        assert len(prop._satrecs) == 1

    def test_decayed_orbit_raises(self, iss):
        """Propagating a high-drag LEO decades ahead fails cleanly."""
        prop = SGP4Propagator()
        with pytest.raises(PropagationError):
            prop.position_at(iss, iss.epoch + timedelta(days=365 * 30))


class TestOrbitPathWithSGP4:

    def test_iss_ground_track(self, iss):
        """One revolution of ground track at ISS altitude, within ±51.7° latitude."""
        points = orbit_path(iss, SGP4Propagator(), start=iss.epoch)
        assert len(points) == 91
        for p in points:
            assert abs(p.lat_deg) <= 52.0
            assert 350_000 < p.alt_m < 450_000

    def test_all_sample_satellites_propagate(self):
        prop = SGP4Propagator()
        for rec in parse_tle_text(FOUR_SATELLITE_TLE):
            x, y, z = prop.position_at(rec, rec.epoch)
            assert math.sqrt(x * x + y * y + z * z) > 6_500_000
