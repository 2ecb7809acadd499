# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for HTTP fetching, the on-disk element store and SGP4.

External dependencies (urllib, file I/O, sgp4) are confined to this layer.
"""
from satellite_utilities.adapters.http_fetch import UrllibFetcher, parse_http_date
from satellite_utilities.adapters.file_store import ElementsStore, default_cache_root
from satellite_utilities.adapters.celestrak import CelesTrakLoader, load_file
from satellite_utilities.adapters.sgp4_propagator import SGP4Propagator

__all__ = [
    "UrllibFetcher",
    "parse_http_date",
    "ElementsStore",
    "default_cache_root",
    "CelesTrakLoader",
    "load_file",
    "SGP4Propagator",
]
