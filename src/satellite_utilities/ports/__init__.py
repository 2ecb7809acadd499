# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the external collaborators: payload fetching and
orbit propagation.
"""
from satellite_utilities.ports.orbital_data import ElementsFetcher, FetchResult
from satellite_utilities.ports.propagation import Propagator

__all__ = ["ElementsFetcher", "FetchResult", "Propagator"]
