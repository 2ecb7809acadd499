# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital element records.

ElementRecord is the normalized, immutable value every input format
(TLE, OMM JSON, OMM XML, OMM CSV) converges on. Field decoding helpers
turn raw text or JSON scalars into validated values and raise
FieldDecodeError naming the offending field.
No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from satellite_utilities.domain.errors import FieldDecodeError
from satellite_utilities.domain.orbital_mechanics import (
    MINUTES_PER_DAY,
    semi_major_axis_from_mean_motion,
)


_EPOCH_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
)


def _as_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (treat naive as UTC)."""
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def decode_float(field: str, raw: Any) -> float:
    """Decode a finite float from a string or JSON number."""
    if isinstance(raw, bool):
        raise FieldDecodeError(field, raw, "expected a number")
    try:
        value = float(raw.strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        raise FieldDecodeError(field, raw, "not a number") from None
    if not math.isfinite(value):
        raise FieldDecodeError(field, raw, "not finite")
    return value


def decode_int(field: str, raw: Any) -> int:
    """Decode an integer from a string or integral JSON number."""
    if isinstance(raw, bool):
        raise FieldDecodeError(field, raw, "expected an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if raw.is_integer():
            return int(raw)
        raise FieldDecodeError(field, raw, "not an integer")
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise FieldDecodeError(field, raw, "not an integer") from None


def decode_unsigned(field: str, raw: Any) -> int:
    """Decode a non-negative integer (catalog numbers, counters)."""
    value = decode_int(field, raw)
    if value < 0:
        raise FieldDecodeError(field, raw, "must be non-negative")
    return value


def decode_text(field: str, raw: Any) -> str:
    """Decode a free-text field; None is not accepted."""
    if raw is None:
        raise FieldDecodeError(field, raw, "missing value")
    return str(raw).strip()


def decode_epoch(field: str, raw: Any) -> datetime:
    """Decode an ISO-8601 epoch (microsecond precision) as UTC."""
    if not isinstance(raw, str):
        raise FieldDecodeError(field, raw, "expected an ISO-8601 string")
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1]
    for fmt in _EPOCH_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise FieldDecodeError(field, raw, "not an ISO-8601 timestamp")


@dataclass(frozen=True)
class ElementRecord:
    """Mean orbital elements of one satellite at an epoch.

    Angles are in degrees, mean motion in revolutions per day. The record
    validates itself on construction: numeric fields must be finite,
    eccentricity in [0, 1), mean motion positive, catalog number >= 0.
    """
    norad_index: int
    common_name: str
    launch_name: str
    epoch: datetime
    eccentricity: float
    inclination_deg: float
    arg_perigee_deg: float
    raan_deg: float
    mean_anomaly_deg: float
    mean_motion: float
    ephem_type: int = 0
    tle_class: str = "U"
    tle_number: int = 0
    rev_number: int = 0
    drag_coeff: float = 0.0
    mean_motion_dot: float = 0.0
    mean_motion_ddot: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.norad_index, bool) or not isinstance(self.norad_index, int):
            raise FieldDecodeError("norad_index", self.norad_index, "not an integer")
        if self.norad_index < 0:
            raise FieldDecodeError("norad_index", self.norad_index, "must be non-negative")
        for name in ("eccentricity", "inclination_deg", "arg_perigee_deg",
                     "raan_deg", "mean_anomaly_deg", "mean_motion",
                     "drag_coeff", "mean_motion_dot", "mean_motion_ddot"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise FieldDecodeError(name, value, "not finite")
        if not 0.0 <= self.eccentricity < 1.0:
            raise FieldDecodeError("eccentricity", self.eccentricity, "outside [0, 1)")
        if self.mean_motion <= 0.0:
            raise FieldDecodeError("mean_motion", self.mean_motion, "must be positive")
        object.__setattr__(self, "epoch", _as_utc(self.epoch))

    @property
    def semi_major_axis_m(self) -> float:
        """Semi-major axis in meters, derived from mean motion."""
        return semi_major_axis_from_mean_motion(self.mean_motion)

    @property
    def period_minutes(self) -> float:
        return MINUTES_PER_DAY / self.mean_motion

    def to_dict(self) -> dict[str, Any]:
        """Structured encoding used by the element store."""
        return {
            "norad_index": self.norad_index,
            "common_name": self.common_name,
            "launch_name": self.launch_name,
            "epoch": self.epoch.isoformat(),
            "eccentricity": self.eccentricity,
            "inclination_deg": self.inclination_deg,
            "arg_perigee_deg": self.arg_perigee_deg,
            "raan_deg": self.raan_deg,
            "mean_anomaly_deg": self.mean_anomaly_deg,
            "mean_motion": self.mean_motion,
            "ephem_type": self.ephem_type,
            "tle_class": self.tle_class,
            "tle_number": self.tle_number,
            "rev_number": self.rev_number,
            "drag_coeff": self.drag_coeff,
            "mean_motion_dot": self.mean_motion_dot,
            "mean_motion_ddot": self.mean_motion_ddot,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ElementRecord":
        """Inverse of to_dict.

        Raises:
            FieldDecodeError: If a field is missing or invalid.
        """
        def get(key: str) -> Any:
            if key not in data:
                raise FieldDecodeError(key, None, "missing field")
            return data[key]

        try:
            epoch = _as_utc(datetime.fromisoformat(get("epoch")))
        except (TypeError, ValueError):
            raise FieldDecodeError("epoch", data.get("epoch"), "not an ISO-8601 timestamp") from None

        return cls(
            norad_index=decode_unsigned("norad_index", get("norad_index")),
            common_name=decode_text("common_name", get("common_name")),
            launch_name=decode_text("launch_name", get("launch_name")),
            epoch=epoch,
            eccentricity=decode_float("eccentricity", get("eccentricity")),
            inclination_deg=decode_float("inclination_deg", get("inclination_deg")),
            arg_perigee_deg=decode_float("arg_perigee_deg", get("arg_perigee_deg")),
            raan_deg=decode_float("raan_deg", get("raan_deg")),
            mean_anomaly_deg=decode_float("mean_anomaly_deg", get("mean_anomaly_deg")),
            mean_motion=decode_float("mean_motion", get("mean_motion")),
            ephem_type=decode_int("ephem_type", data.get("ephem_type", 0)),
            tle_class=decode_text("tle_class", data.get("tle_class", "U")),
            tle_number=decode_int("tle_number", data.get("tle_number", 0)),
            rev_number=decode_int("rev_number", data.get("rev_number", 0)),
            drag_coeff=decode_float("drag_coeff", data.get("drag_coeff", 0.0)),
            mean_motion_dot=decode_float("mean_motion_dot", data.get("mean_motion_dot", 0.0)),
            mean_motion_ddot=decode_float("mean_motion_ddot", data.get("mean_motion_ddot", 0.0)),
        )

    def describe(self) -> str:
        """One-line human readable summary."""
        return (
            f"{self.norad_index:>6} {self.common_name or '-':<24} "
            f"epoch {self.epoch:%Y-%m-%d %H:%M:%S} "
            f"i={self.inclination_deg:.4f} e={self.eccentricity:.7f} "
            f"n={self.mean_motion:.8f} rev/day"
        )
