# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
OMM (Orbit Mean-Elements Message) preprocessing and record parsing.

CelesTrak serves the same 17 OMM fields as a JSON array, as XML
<segment> blocks, and as CSV rows. Each format is split into per-record
field mappings here, and every mapping is normalized by
parse_omm_fields into an ElementRecord.

Values may arrive as JSON numbers or as text (".19664E-3", "733"); the
field decoders accept both. A single failing record fails the whole
payload.
"""
import csv
import json
import re
import xml.etree.ElementTree as ET
from typing import Any, Mapping

from satellite_utilities.domain.elements import (
    ElementRecord,
    decode_epoch,
    decode_float,
    decode_int,
    decode_text,
    decode_unsigned,
)
from satellite_utilities.domain.errors import FieldDecodeError, MalformedInputError


# CelesTrak CSV column order; also the full JSON/XML field set.
OMM_FIELDS = (
    "OBJECT_NAME",
    "OBJECT_ID",
    "EPOCH",
    "MEAN_MOTION",
    "ECCENTRICITY",
    "INCLINATION",
    "RA_OF_ASC_NODE",
    "ARG_OF_PERICENTER",
    "MEAN_ANOMALY",
    "EPHEMERIS_TYPE",
    "CLASSIFICATION_TYPE",
    "NORAD_CAT_ID",
    "ELEMENT_SET_NO",
    "REV_AT_EPOCH",
    "BSTAR",
    "MEAN_MOTION_DOT",
    "MEAN_MOTION_DDOT",
)

_SEGMENT_RE = re.compile(r"<segment\b.*?</segment>", re.DOTALL)

_XML_PATHS = {
    "OBJECT_NAME": "metadata/OBJECT_NAME",
    "OBJECT_ID": "metadata/OBJECT_ID",
    "EPOCH": "data/meanElements/EPOCH",
    "MEAN_MOTION": "data/meanElements/MEAN_MOTION",
    "ECCENTRICITY": "data/meanElements/ECCENTRICITY",
    "INCLINATION": "data/meanElements/INCLINATION",
    "RA_OF_ASC_NODE": "data/meanElements/RA_OF_ASC_NODE",
    "ARG_OF_PERICENTER": "data/meanElements/ARG_OF_PERICENTER",
    "MEAN_ANOMALY": "data/meanElements/MEAN_ANOMALY",
    "EPHEMERIS_TYPE": "data/tleParameters/EPHEMERIS_TYPE",
    "CLASSIFICATION_TYPE": "data/tleParameters/CLASSIFICATION_TYPE",
    "NORAD_CAT_ID": "data/tleParameters/NORAD_CAT_ID",
    "ELEMENT_SET_NO": "data/tleParameters/ELEMENT_SET_NO",
    "REV_AT_EPOCH": "data/tleParameters/REV_AT_EPOCH",
    "BSTAR": "data/tleParameters/BSTAR",
    "MEAN_MOTION_DOT": "data/tleParameters/MEAN_MOTION_DOT",
    "MEAN_MOTION_DDOT": "data/tleParameters/MEAN_MOTION_DDOT",
}


def parse_omm_fields(fields: Mapping[str, Any]) -> ElementRecord:
    """
    Normalize one OMM field mapping into an ElementRecord.

    Args:
        fields: Mapping with all 17 OMM keys (see OMM_FIELDS).

    Returns:
        ElementRecord.

    Raises:
        FieldDecodeError: If a field is missing or fails to decode.
    """
    missing = [name for name in OMM_FIELDS if name not in fields]
    if missing:
        raise FieldDecodeError(missing[0], None, "missing field")

    return ElementRecord(
        norad_index=decode_unsigned("NORAD_CAT_ID", fields["NORAD_CAT_ID"]),
        common_name=decode_text("OBJECT_NAME", fields["OBJECT_NAME"]),
        launch_name=decode_text("OBJECT_ID", fields["OBJECT_ID"]),
        epoch=decode_epoch("EPOCH", fields["EPOCH"]),
        eccentricity=decode_float("ECCENTRICITY", fields["ECCENTRICITY"]),
        inclination_deg=decode_float("INCLINATION", fields["INCLINATION"]),
        arg_perigee_deg=decode_float("ARG_OF_PERICENTER", fields["ARG_OF_PERICENTER"]),
        raan_deg=decode_float("RA_OF_ASC_NODE", fields["RA_OF_ASC_NODE"]),
        mean_anomaly_deg=decode_float("MEAN_ANOMALY", fields["MEAN_ANOMALY"]),
        mean_motion=decode_float("MEAN_MOTION", fields["MEAN_MOTION"]),
        ephem_type=decode_int("EPHEMERIS_TYPE", fields["EPHEMERIS_TYPE"]),
        tle_class=decode_text("CLASSIFICATION_TYPE", fields["CLASSIFICATION_TYPE"]),
        tle_number=decode_int("ELEMENT_SET_NO", fields["ELEMENT_SET_NO"]),
        rev_number=decode_int("REV_AT_EPOCH", fields["REV_AT_EPOCH"]),
        drag_coeff=decode_float("BSTAR", fields["BSTAR"]),
        mean_motion_dot=decode_float("MEAN_MOTION_DOT", fields["MEAN_MOTION_DOT"]),
        mean_motion_ddot=decode_float("MEAN_MOTION_DDOT", fields["MEAN_MOTION_DDOT"]),
    )


def record_to_omm(record: ElementRecord) -> dict[str, Any]:
    """Encode a record as a CelesTrak-style OMM JSON object."""
    return {
        "OBJECT_NAME": record.common_name,
        "OBJECT_ID": record.launch_name,
        "EPOCH": record.epoch.strftime("%Y-%m-%dT%H:%M:%S.%f"),
        "MEAN_MOTION": record.mean_motion,
        "ECCENTRICITY": record.eccentricity,
        "INCLINATION": record.inclination_deg,
        "RA_OF_ASC_NODE": record.raan_deg,
        "ARG_OF_PERICENTER": record.arg_perigee_deg,
        "MEAN_ANOMALY": record.mean_anomaly_deg,
        "EPHEMERIS_TYPE": record.ephem_type,
        "CLASSIFICATION_TYPE": record.tle_class,
        "NORAD_CAT_ID": record.norad_index,
        "ELEMENT_SET_NO": record.tle_number,
        "REV_AT_EPOCH": record.rev_number,
        "BSTAR": record.drag_coeff,
        "MEAN_MOTION_DOT": record.mean_motion_dot,
        "MEAN_MOTION_DDOT": record.mean_motion_ddot,
    }


# ── JSON ───────────────────────────────────────────────────────────

def load_omm_json(text: str) -> list[dict[str, Any]]:
    """
    Split an OMM JSON payload into per-record objects.

    Raises:
        MalformedInputError: If the text is not a JSON array of objects.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError("json", e.msg, e.lineno) from e
    if not isinstance(payload, list):
        raise MalformedInputError("json", f"expected an array, got {type(payload).__name__}")
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise MalformedInputError(
                "json", f"element {index} is {type(item).__name__}, expected an object",
            )
    return payload


def parse_omm_json(text: str) -> list[ElementRecord]:
    return [parse_omm_fields(item) for item in load_omm_json(text)]


# ── XML ────────────────────────────────────────────────────────────

def split_xml_segments(text: str) -> list[str]:
    """
    Isolate each <segment>...</segment> block of an OMM XML payload.

    Raises:
        MalformedInputError: If no segment is present.
    """
    segments = _SEGMENT_RE.findall(text)
    if not segments:
        raise MalformedInputError("xml", "no <segment> elements found")
    return segments


def xml_segment_fields(segment: str) -> dict[str, str]:
    """
    Extract the OMM fields of one <segment> by tag.

    Raises:
        MalformedInputError: If the segment is not well-formed XML.
        FieldDecodeError: If a required tag is absent.
    """
    try:
        root = ET.fromstring(segment)
    except ET.ParseError as e:
        raise MalformedInputError("xml", str(e)) from e

    fields: dict[str, str] = {}
    for name, path in _XML_PATHS.items():
        node = root.find(path)
        if node is None:
            raise FieldDecodeError(name, None, f"missing <{path}>")
        fields[name] = (node.text or "").strip()
    return fields


def parse_omm_xml(text: str) -> list[ElementRecord]:
    return [parse_omm_fields(xml_segment_fields(s)) for s in split_xml_segments(text)]


# ── CSV ────────────────────────────────────────────────────────────

def split_csv_rows(text: str) -> list[dict[str, str]]:
    """
    Split OMM CSV text into per-row field mappings.

    The first non-blank line must list OMM_FIELDS in exact order. Rows
    are read with the csv module, so quoted fields may contain commas.

    Raises:
        MalformedInputError: On a header mismatch or a row whose column
            count differs from the header.
    """
    lines = [line for line in text.replace("\r", "").split("\n") if line.strip()]
    if not lines:
        raise MalformedInputError("csv", "empty payload")

    reader = csv.reader(lines)
    header = next(reader)
    if header != list(OMM_FIELDS):
        raise MalformedInputError(
            "csv", f"header does not match expected columns: {','.join(header)}", 1,
        )

    rows: list[dict[str, str]] = []
    for line_no, row in enumerate(reader, start=2):
        if len(row) != len(OMM_FIELDS):
            raise MalformedInputError(
                "csv", f"{len(row)} columns, expected {len(OMM_FIELDS)}", line_no,
            )
        rows.append(dict(zip(OMM_FIELDS, row)))
    return rows


def parse_omm_csv(text: str) -> list[ElementRecord]:
    return [parse_omm_fields(row) for row in split_csv_rows(text)]
