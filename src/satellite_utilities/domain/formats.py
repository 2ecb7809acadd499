# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Element-set payload formats and format dispatch.

The format is always supplied by the caller (or derived from an HTTP
Content-Type); payloads are never sniffed.
"""
from enum import Enum

from satellite_utilities.domain.elements import ElementRecord
from satellite_utilities.domain.errors import MalformedInputError
from satellite_utilities.domain.omm import parse_omm_csv, parse_omm_json, parse_omm_xml
from satellite_utilities.domain.tle import parse_tle_text


class ElementFormat(str, Enum):
    """Payload encodings, valued as CelesTrak's FORMAT query parameter."""
    TLE = "tle"
    JSON = "json"
    XML = "xml"
    CSV = "csv"

    @classmethod
    def from_content_type(cls, content_type: str | None,
                          default: "ElementFormat | None" = None) -> "ElementFormat":
        """
        Map an HTTP Content-Type to a format.

        "application/json; charset=utf-8" → JSON, "text/xml" → XML,
        "text/csv" → CSV. Anything else (including "text/plain") is TLE
        unless a default is given.
        """
        if not content_type or "/" not in content_type:
            return default or cls.TLE
        subtype = content_type.split("/", 1)[1].split(";", 1)[0].strip().lower()
        for fmt in (cls.JSON, cls.XML, cls.CSV):
            if subtype.startswith(fmt.value):
                return fmt
        return default or cls.TLE

    @classmethod
    def parse(cls, value: "str | ElementFormat") -> "ElementFormat":
        """Case-insensitive lookup by name; ValueError on unknown formats."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown element format {value!r} (expected one of: {choices})") from None


_PARSERS = {
    ElementFormat.TLE: parse_tle_text,
    ElementFormat.JSON: parse_omm_json,
    ElementFormat.XML: parse_omm_xml,
    ElementFormat.CSV: parse_omm_csv,
}


def parse_elements(text: str, fmt: "ElementFormat | str") -> list[ElementRecord]:
    """
    Parse a payload of the given format into element records.

    Raises:
        MalformedInputError: On structural errors.
        FieldDecodeError: On a field that fails to decode.
    """
    return _PARSERS[ElementFormat.parse(fmt)](text)


def decode_payload(payload: bytes, fmt: "ElementFormat | str") -> str:
    """Decode raw bytes as UTF-8 (a leading BOM is dropped)."""
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedInputError(
            ElementFormat.parse(fmt).value, f"payload is not UTF-8 ({e.reason} at byte {e.start})",
        ) from e
