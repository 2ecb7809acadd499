# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Shared sample element sets (CelesTrak, October 2022)."""
import pytest


FOUR_SATELLITE_TLE = """\
AEOLUS
1 43600U 18066A   22284.46945825  .00152878  00000+0  58141-3 0  9997
2 43600  96.7345 288.3479 0007589 105.2673 254.9439 15.87150682239523
SAOCOM 1A
1 43641U 18076A   22284.79847383  .00000741  00000+0  99640-4 0  9990
2 43641  97.8890 109.8412 0001345  85.0542 275.0827 14.82165765216963
SAOCOM 1B
1 46265U 20059A   22284.82961417  .00000752  00000+0  10095-3 0  9996
2 46265  97.8884 108.9320 0001360  82.4383 277.6991 14.82166892114363
CSS (TIANHE)
1 48274U 21035A   22284.85984020  .00036888  00000+0  41780-3 0  9995
2 48274  41.4737 228.0269 0000989  91.3347   0.1704 15.61668898 83017
"""

ISS_LINE1 = "1 25544U 98067A   25086.17192136  .00035516  00000+0  62421-3 0  9998"
ISS_LINE2 = "2 25544  51.6371 353.2392 0003699  54.8873 305.2462 15.50144996502445"

AEOLUS_OMM = {
    "OBJECT_NAME": "AEOLUS",
    "OBJECT_ID": "2018-066A",
    "EPOCH": "2022-10-11T11:16:01.192800",
    "MEAN_MOTION": 15.87150682,
    "ECCENTRICITY": 0.0007589,
    "INCLINATION": 96.7345,
    "RA_OF_ASC_NODE": 288.3479,
    "ARG_OF_PERICENTER": 105.2673,
    "MEAN_ANOMALY": 254.9439,
    "EPHEMERIS_TYPE": 0,
    "CLASSIFICATION_TYPE": "U",
    "NORAD_CAT_ID": 43600,
    "ELEMENT_SET_NO": 999,
    "REV_AT_EPOCH": 23952,
    "BSTAR": 0.00058141,
    "MEAN_MOTION_DOT": 0.00152878,
    "MEAN_MOTION_DDOT": 0,
}

SAOCOM_1A_OMM = {
    "OBJECT_NAME": "SAOCOM 1A",
    "OBJECT_ID": "2018-076A",
    "EPOCH": "2022-10-11T19:09:48.138912",
    "MEAN_MOTION": 14.82165765,
    "ECCENTRICITY": 0.0001345,
    "INCLINATION": 97.889,
    "RA_OF_ASC_NODE": 109.8412,
    "ARG_OF_PERICENTER": 85.0542,
    "MEAN_ANOMALY": 275.0827,
    "EPHEMERIS_TYPE": 0,
    "CLASSIFICATION_TYPE": "U",
    "NORAD_CAT_ID": 43641,
    "ELEMENT_SET_NO": 999,
    "REV_AT_EPOCH": 21696,
    "BSTAR": 9.964e-05,
    "MEAN_MOTION_DOT": 7.41e-06,
    "MEAN_MOTION_DDOT": 0,
}

OMM_CSV = """\
OBJECT_NAME,OBJECT_ID,EPOCH,MEAN_MOTION,ECCENTRICITY,INCLINATION,RA_OF_ASC_NODE,ARG_OF_PERICENTER,MEAN_ANOMALY,EPHEMERIS_TYPE,CLASSIFICATION_TYPE,NORAD_CAT_ID,ELEMENT_SET_NO,REV_AT_EPOCH,BSTAR,MEAN_MOTION_DOT,MEAN_MOTION_DDOT
AEOLUS,2018-066A,2022-10-11T11:16:01.192800,15.87150682,.0007589,96.7345,288.3479,105.2673,254.9439,0,U,43600,999,23952,.58141E-3,.152878E-2,0
SAOCOM 1A,2018-076A,2022-10-11T19:09:48.138912,14.82165765,.0001345,97.889,109.8412,85.0542,275.0827,0,U,43641,999,21696,.9964E-4,.741E-5,0
"""


def omm_xml_segment(fields: dict) -> str:
    """Render one OMM record as a CelesTrak <segment> block."""
    meta = "".join(
        f"<{k}>{fields[k]}</{k}>" for k in ("OBJECT_NAME", "OBJECT_ID")
    )
    mean = "".join(
        f"<{k}>{fields[k]}</{k}>"
        for k in ("EPOCH", "MEAN_MOTION", "ECCENTRICITY", "INCLINATION",
                  "RA_OF_ASC_NODE", "ARG_OF_PERICENTER", "MEAN_ANOMALY")
    )
    tle = "".join(
        f"<{k}>{fields[k]}</{k}>"
        for k in ("EPHEMERIS_TYPE", "CLASSIFICATION_TYPE", "NORAD_CAT_ID",
                  "ELEMENT_SET_NO", "REV_AT_EPOCH", "BSTAR",
                  "MEAN_MOTION_DOT", "MEAN_MOTION_DDOT")
    )
    return (
        "<segment>\n"
        f"  <metadata>{meta}<CENTER_NAME>EARTH</CENTER_NAME>"
        "<REF_FRAME>TEME</REF_FRAME><TIME_SYSTEM>UTC</TIME_SYSTEM>"
        "<MEAN_ELEMENT_THEORY>SGP4</MEAN_ELEMENT_THEORY></metadata>\n"
        f"  <data><meanElements>{mean}</meanElements>\n"
        f"  <tleParameters>{tle}</tleParameters></data>\n"
        "</segment>"
    )


def omm_xml_document(*records: dict) -> str:
    """Wrap segments in the CelesTrak <ndm> envelope."""
    body = "\n".join(omm_xml_segment(r) for r in records)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<ndm xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">\n'
        '<omm id="CCSDS_OMM_VERS" version="2.0">\n'
        "<header><CREATION_DATE/><ORIGINATOR/></header>\n"
        f"<body>\n{body}\n</body>\n"
        "</omm>\n</ndm>\n"
    )


@pytest.fixture
def tle_text():
    return FOUR_SATELLITE_TLE


@pytest.fixture
def omm_records():
    return [dict(AEOLUS_OMM), dict(SAOCOM_1A_OMM)]


@pytest.fixture
def omm_csv():
    return OMM_CSV
