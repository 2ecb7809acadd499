# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite Utilities

Download, parse and cache satellite orbital element sets (TLE and the
CelesTrak OMM JSON, XML and CSV encodings) as catalogs keyed by NORAD
catalog number, with apparent-magnitude and ground-track helpers on top
of an SGP4 propagator.
"""

from satellite_utilities.domain.errors import (
    ElementsError,
    MalformedInputError,
    FieldDecodeError,
    StoreIOError,
    CacheDirectoryError,
    NetworkError,
    FetchTimeoutError,
    PropagationError,
    SatelliteInfoNotFoundError,
    OrbitPathError,
)
from satellite_utilities.domain.elements import ElementRecord
from satellite_utilities.domain.formats import ElementFormat, parse_elements
from satellite_utilities.domain.tle import (
    tle_checksum,
    split_tle_triplets,
    parse_tle,
    parse_tle_text,
    format_tle,
)
from satellite_utilities.domain.omm import (
    OMM_FIELDS,
    parse_omm_json,
    parse_omm_xml,
    parse_omm_csv,
)
from satellite_utilities.domain.catalog import (
    Catalog,
    DISTANT_PAST,
    EMPTY_CATALOG,
)
from satellite_utilities.domain.magnitude import (
    Observer,
    ApparentMagnitude,
    SatelliteOptics,
    KNOWN_SATELLITES,
    magnitude_at,
    magnitude_range,
    precise_magnitude,
)
from satellite_utilities.domain.orbit_path import GroundPoint, orbit_path
from satellite_utilities.adapters.file_store import ElementsStore
from satellite_utilities.adapters.celestrak import CelesTrakLoader, load_file

__version__ = "1.0.0"

__all__ = [
    "ElementsError",
    "MalformedInputError",
    "FieldDecodeError",
    "StoreIOError",
    "CacheDirectoryError",
    "NetworkError",
    "FetchTimeoutError",
    "PropagationError",
    "SatelliteInfoNotFoundError",
    "OrbitPathError",
    "ElementRecord",
    "ElementFormat",
    "parse_elements",
    "tle_checksum",
    "split_tle_triplets",
    "parse_tle",
    "parse_tle_text",
    "format_tle",
    "OMM_FIELDS",
    "parse_omm_json",
    "parse_omm_xml",
    "parse_omm_csv",
    "Catalog",
    "DISTANT_PAST",
    "EMPTY_CATALOG",
    "Observer",
    "ApparentMagnitude",
    "SatelliteOptics",
    "KNOWN_SATELLITES",
    "magnitude_at",
    "magnitude_range",
    "precise_magnitude",
    "GroundPoint",
    "orbit_path",
    "ElementsStore",
    "CelesTrakLoader",
    "load_file",
]
