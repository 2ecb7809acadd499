# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for orbit propagation.

Adapters wrap a concrete propagator (e.g. SGP4).
"""
from datetime import datetime
from typing import Protocol, runtime_checkable

from satellite_utilities.domain.elements import ElementRecord


@runtime_checkable
class Propagator(Protocol):
    """Port for turning an element record into a position at a time."""

    def position_at(self, record: ElementRecord, when: datetime) -> tuple[float, float, float]:
        """ECI position in meters; raise PropagationError on failure."""
        ...
