# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-Line Element (TLE) preprocessing and record parsing.

Input text is a sequence of three-line groups:

    AEOLUS
    1 43600U 18066A   22284.46945825  .00152878  00000+0  58141-3 0  9997
    2 43600  96.7345 288.3479 0007589 105.2673 254.9439 15.87150682239523

Column layout follows the NORAD/CelesTrak convention
(https://celestrak.org/columns/v04n03/). Each data line carries a
modulo-10 checksum in column 69: digits count at face value, '-' counts
as 1, everything else counts as 0.

No external dependencies — only stdlib datetime.
"""
from datetime import datetime, timedelta, timezone

from satellite_utilities.domain.elements import (
    ElementRecord,
    decode_float,
    decode_int,
    decode_unsigned,
)
from satellite_utilities.domain.errors import FieldDecodeError, MalformedInputError


TLE_LINE_LENGTH = 69


def tle_checksum(line: str) -> int:
    """Modulo-10 checksum over the first 68 columns of a TLE data line."""
    total = 0
    for ch in line[:68]:
        if ch.isdigit():
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


def _check_data_line(line: str, marker: str, line_no: int) -> None:
    """Validate line marker, length and checksum; raise MalformedInputError."""
    if not line.startswith(marker):
        raise MalformedInputError(
            "tle", f"expected a line starting {marker!r}, got {line[:10]!r}", line_no,
        )
    if len(line) < TLE_LINE_LENGTH:
        raise MalformedInputError(
            "tle", f"data line has {len(line)} columns, expected {TLE_LINE_LENGTH}", line_no,
        )
    check = line[68]
    if not check.isdigit() or int(check) != tle_checksum(line):
        raise MalformedInputError(
            "tle", f"checksum mismatch (found {check!r}, computed {tle_checksum(line)})", line_no,
        )


def split_tle_triplets(text: str) -> list[tuple[str, str, str]]:
    """
    Split TLE text into (name, line1, line2) triples.

    Blank lines are ignored; a leading "0 " on a name line (3LE variant)
    is dropped. The whole payload fails on the first group that is not a
    valid name/line-1/line-2 triplet.

    Args:
        text: Raw TLE text.

    Returns:
        Ordered list of (name, line1, line2).

    Raises:
        MalformedInputError: On any structural or checksum failure.
    """
    numbered = [
        (number, raw.strip())
        for number, raw in enumerate(text.splitlines(), start=1)
        if raw.strip()
    ]
    if len(numbered) % 3 != 0:
        last_no = numbered[-1][0] if numbered else None
        raise MalformedInputError(
            "tle", f"{len(numbered)} non-blank lines is not a multiple of 3", last_no,
        )

    triplets: list[tuple[str, str, str]] = []
    for i in range(0, len(numbered), 3):
        (name_no, name), (l1_no, line1), (l2_no, line2) = numbered[i:i + 3]
        if name.startswith(("1 ", "2 ")):
            raise MalformedInputError("tle", "expected a name line", name_no)
        if name.startswith("0 "):
            name = name[2:].strip()
        _check_data_line(line1, "1 ", l1_no)
        _check_data_line(line2, "2 ", l2_no)
        triplets.append((name, line1, line2))
    return triplets


def _implied_decimal(field: str, raw: str) -> float:
    """
    Decode TLE implied-decimal notation.

    " 58141-3" → 0.58141e-3, "-11606-4" → -0.11606e-4, " 00000+0" → 0.0
    """
    text = raw.strip()
    if not text:
        return 0.0
    sign = ""
    if text[0] in "+-":
        sign = "-" if text[0] == "-" else ""
        text = text[1:]
    if len(text) < 2 or text[-2] not in "+-":
        raise FieldDecodeError(field, raw, "missing exponent")
    mantissa, exponent = text[:-2].strip(), text[-2:]
    return decode_float(field, f"{sign}0.{mantissa}e{exponent}")


def _tle_epoch(raw: str) -> datetime:
    """YYDDD.DDDDDDDD → UTC datetime; two-digit years pivot at 57."""
    text = raw.strip()
    if len(text) < 5:
        raise FieldDecodeError("epoch", raw, "too short")
    year_2d = decode_int("epoch", text[:2])
    day_of_year = decode_float("epoch", text[2:])
    if not 1.0 <= day_of_year < 367.0:
        raise FieldDecodeError("epoch", raw, "day of year out of range")
    year = 1900 + year_2d if year_2d >= 57 else 2000 + year_2d
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start + timedelta(days=day_of_year - 1.0)


def _optional_int(field: str, raw: str) -> int:
    return decode_int(field, raw) if raw.strip() else 0


def parse_tle(name: str, line1: str, line2: str) -> ElementRecord:
    """
    Decode one TLE triplet into an ElementRecord.

    Lines are expected to have passed split_tle_triplets (marker, length
    and checksum already validated).

    Raises:
        FieldDecodeError: If a column fails to decode, or the catalog
            numbers on line 1 and line 2 disagree.
    """
    norad = decode_unsigned("norad_index", line1[2:7])
    norad_2 = decode_unsigned("norad_index", line2[2:7])
    if norad != norad_2:
        raise FieldDecodeError(
            "norad_index", line2[2:7], f"line 2 catalog number differs from line 1 ({norad})",
        )

    return ElementRecord(
        norad_index=norad,
        common_name=name.strip(),
        launch_name=line1[9:17].strip(),
        epoch=_tle_epoch(line1[18:32]),
        eccentricity=decode_float("eccentricity", "0." + line2[26:33].strip()),
        inclination_deg=decode_float("inclination_deg", line2[8:16]),
        arg_perigee_deg=decode_float("arg_perigee_deg", line2[34:42]),
        raan_deg=decode_float("raan_deg", line2[17:25]),
        mean_anomaly_deg=decode_float("mean_anomaly_deg", line2[43:51]),
        mean_motion=decode_float("mean_motion", line2[52:63]),
        ephem_type=_optional_int("ephem_type", line1[62]),
        tle_class=line1[7].strip() or "U",
        tle_number=_optional_int("tle_number", line1[64:68]),
        rev_number=_optional_int("rev_number", line2[63:68]),
        drag_coeff=_implied_decimal("drag_coeff", line1[53:61]),
        mean_motion_dot=decode_float("mean_motion_dot", line1[33:43]),
        mean_motion_ddot=_implied_decimal("mean_motion_ddot", line1[44:52]),
    )


def parse_tle_text(text: str) -> list[ElementRecord]:
    """Preprocess and parse a TLE payload; fails whole on any bad triplet."""
    return [parse_tle(*triplet) for triplet in split_tle_triplets(text)]


def _format_implied(value: float) -> str:
    """Inverse of _implied_decimal for an 8-column field."""
    if value == 0.0:
        return " 00000+0"
    sign = "-" if value < 0 else " "
    mantissa, exponent = f"{abs(value):.4e}".split("e")
    digits = mantissa.replace(".", "")
    exp = int(exponent) + 1
    return f"{sign}{digits}{'+' if exp >= 0 else '-'}{abs(exp)}"


def _format_ndot(value: float) -> str:
    """Signed 10-column mean-motion derivative, " .00152878" style."""
    sign = "-" if value < 0 else " "
    body = f"{abs(value):.8f}"
    if body.startswith("0."):
        return sign + body[1:]
    for decimals in range(7, -1, -1):
        body = f"{abs(value):.{decimals}f}"
        if len(body) <= 9:
            return sign + body
    raise ValueError(f"mean_motion_dot {value!r} does not fit the TLE column")


def format_tle(record: ElementRecord) -> tuple[str, str, str]:
    """
    Encode a record as a (name, line1, line2) TLE triplet with checksums.

    TLE columns are fixed precision, so decoding the result gives values
    rounded to the TLE resolution rather than the original floats.
    """
    epoch = record.epoch.astimezone(timezone.utc)
    start = datetime(epoch.year, 1, 1, tzinfo=timezone.utc)
    day = (epoch - start).total_seconds() / 86400.0 + 1.0
    line1 = (
        f"1 {record.norad_index:05d}{record.tle_class[:1] or 'U'} "
        f"{record.launch_name[:8]:<8} "
        f"{epoch.year % 100:02d}{day:012.8f} "
        f"{_format_ndot(record.mean_motion_dot)} "
        f"{_format_implied(record.mean_motion_ddot)} "
        f"{_format_implied(record.drag_coeff)} "
        f"{record.ephem_type % 10:d} "
        f"{record.tle_number % 10000:>4d}"
    )
    ecc = f"{record.eccentricity:.7f}"[2:]
    line2 = (
        f"2 {record.norad_index:05d} "
        f"{record.inclination_deg:8.4f} "
        f"{record.raan_deg % 360.0:8.4f} "
        f"{ecc} "
        f"{record.arg_perigee_deg % 360.0:8.4f} "
        f"{record.mean_anomaly_deg % 360.0:8.4f} "
        f"{record.mean_motion:11.8f}"
        f"{record.rev_number % 100000:5d}"
    )
    return (
        record.common_name,
        line1 + str(tle_checksum(line1)),
        line2 + str(tle_checksum(line2)),
    )
