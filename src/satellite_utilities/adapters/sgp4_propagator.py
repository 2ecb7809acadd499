# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 propagator adapter.

External dependency (sgp4) is confined to this layer and imported lazily.

TLE mean elements are SGP4-specific, NOT pure Keplerian: positions for
real satellites must come from SGP4, not from a two-body conversion.
Output frame is TEME, used as ECI by the astronomy helpers.
"""
import math
from datetime import datetime, timezone

from satellite_utilities.domain.elements import ElementRecord
from satellite_utilities.domain.errors import PropagationError
from satellite_utilities.ports.propagation import Propagator

_SGP4_EPOCH_REF = datetime(1949, 12, 31, tzinfo=timezone.utc)
_TWO_PI = 2.0 * math.pi


def _require_sgp4():
    """Import sgp4 lazily; raise clear error if not installed."""
    try:
        from sgp4.api import Satrec, WGS72, jday
    except ImportError:
        raise ImportError(
            "sgp4 is required for orbit propagation. "
            "Install with: pip install satellite-utilities[live]"
        ) from None
    return Satrec, WGS72, jday


def _as_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (treat naive as UTC)."""
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _epoch_days_since_1949(epoch: datetime) -> float:
    """SGP4 epoch offset: fractional days since 1949-12-31 00:00 UTC."""
    delta = _as_utc(epoch) - _SGP4_EPOCH_REF
    return delta.days + delta.seconds / 86400.0 + delta.microseconds / 86400e6


class SGP4Propagator(Propagator):
    """Propagates element records with the sgp4 library (WGS72, improved mode)."""

    def __init__(self):
        self._Satrec, self._wgs72, self._jday = _require_sgp4()
        self._satrecs: dict[ElementRecord, object] = {}

    def _satrec(self, record: ElementRecord):
        sat = self._satrecs.get(record)
        if sat is None:
            sat = self._Satrec()
            sat.sgp4init(
                self._wgs72,
                'i',
                record.norad_index,
                _epoch_days_since_1949(record.epoch),
                record.drag_coeff,
                record.mean_motion_dot * _TWO_PI / (1440.0 ** 2),
                record.mean_motion_ddot * _TWO_PI / (1440.0 ** 3),
                record.eccentricity,
                math.radians(record.arg_perigee_deg),
                math.radians(record.inclination_deg),
                math.radians(record.mean_anomaly_deg),
                record.mean_motion * _TWO_PI / 1440.0,
                math.radians(record.raan_deg),
            )
            self._satrecs[record] = sat
        return sat

    def position_at(self, record: ElementRecord, when: datetime) -> tuple[float, float, float]:
        """
        TEME position in meters at `when`.

        Raises:
            PropagationError: If SGP4 reports an error (decayed orbit,
                eccentricity out of range, ...).
        """
        sat = self._satrec(record)
        dt = _as_utc(when).astimezone(timezone.utc)
        jd, fr = self._jday(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                            dt.second + dt.microsecond / 1e6)
        error_code, position_km, _ = sat.sgp4(jd, fr)
        if error_code != 0:
            raise PropagationError(
                f"SGP4 propagation error {error_code} for NORAD {record.norad_index} "
                f"({record.common_name}) at {dt.isoformat()}"
            )
        return (position_km[0] * 1000.0, position_km[1] * 1000.0, position_km[2] * 1000.0)
