# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Catalog: a named, dated collection of element records keyed by NORAD
catalog number.

    +------------------------------------------+
    | name: "visual"                           |
    | as_of: when the data was produced        |
    +---------+--------------------------------+
    | 25544 → | ElementRecord(ISS (ZARYA) ...) |
    | 43641 → | ElementRecord(SAOCOM 1A ...)   |
    +---------+--------------------------------+

Catalogs are values: built once through Catalog.build (or
Catalog.from_text / Catalog.from_dict) and never modified. Reloading
produces a new Catalog. EMPTY_CATALOG is the single empty sentinel.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from satellite_utilities.domain.elements import ElementRecord
from satellite_utilities.domain.errors import FieldDecodeError
from satellite_utilities.domain.formats import ElementFormat, parse_elements


DISTANT_PAST = datetime.min.replace(tzinfo=timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class Catalog:
    """Immutable mapping of NORAD catalog number → ElementRecord."""
    name: str
    as_of: datetime
    records: Mapping[int, ElementRecord] = field(hash=False)

    @classmethod
    def build(
        cls,
        records: Iterable[ElementRecord],
        name: str,
        as_of: datetime | None = None,
    ) -> "Catalog":
        """
        Build a catalog from element records.

        Later records replace earlier ones with the same catalog number,
        so the result never holds more entries than the input.

        Args:
            records: Element records, in any order.
            name: Catalog label.
            as_of: When the data was produced (default: now, UTC).
        """
        table: dict[int, ElementRecord] = {}
        for record in records:
            table[record.norad_index] = record
        when = _as_utc(as_of) if as_of is not None else datetime.now(timezone.utc)
        return cls(name=name, as_of=when, records=MappingProxyType(table))

    @classmethod
    def from_text(
        cls,
        text: str,
        fmt: ElementFormat | str,
        name: str,
        as_of: datetime | None = None,
    ) -> "Catalog":
        """
        Parse a TLE/JSON/XML/CSV payload into a catalog.

        Raises:
            MalformedInputError: On structural errors.
            FieldDecodeError: On a field that fails to decode.
        """
        return cls.build(parse_elements(text, fmt), name=name, as_of=as_of)

    def lookup(self, norad_index: int) -> ElementRecord | None:
        """Record for a catalog number, or None when absent."""
        return self.records.get(norad_index)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, norad_index: object) -> bool:
        return norad_index in self.records

    def __iter__(self) -> Iterator[ElementRecord]:
        """Records in ascending catalog-number order."""
        for key in sorted(self.records):
            yield self.records[key]

    def describe(self) -> str:
        """Human-readable summary; diagnostic only."""
        dated = "never" if self.as_of == DISTANT_PAST else self.as_of.isoformat()
        return (
            f"Catalog {self.name!r}\n"
            f"  as of: {dated}\n"
            f"  count: {len(self.records)} element records"
        )

    def to_dict(self) -> dict[str, Any]:
        """Structured encoding used by the element store."""
        return {
            "name": self.name,
            "as_of": self.as_of.isoformat(),
            "records": {
                str(key): self.records[key].to_dict() for key in sorted(self.records)
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Catalog":
        """
        Inverse of to_dict.

        Raises:
            FieldDecodeError: If the structure or any record is invalid.
        """
        if not isinstance(data, Mapping):
            raise FieldDecodeError("catalog", data, "expected an object")
        for key in ("name", "as_of", "records"):
            if key not in data:
                raise FieldDecodeError(key, None, "missing field")
        try:
            as_of = _as_utc(datetime.fromisoformat(data["as_of"]))
        except (TypeError, ValueError):
            raise FieldDecodeError("as_of", data["as_of"], "not an ISO-8601 timestamp") from None
        raw_records = data["records"]
        if not isinstance(raw_records, Mapping):
            raise FieldDecodeError("records", raw_records, "expected an object")

        table: dict[int, ElementRecord] = {}
        for key, value in raw_records.items():
            if not isinstance(value, Mapping):
                raise FieldDecodeError("records", key, "expected an object")
            record = ElementRecord.from_dict(dict(value))
            if str(record.norad_index) != str(key):
                raise FieldDecodeError("records", key, "key does not match norad_index")
            table[record.norad_index] = record
        return cls(name=str(data["name"]), as_of=as_of, records=MappingProxyType(table))


EMPTY_CATALOG = Catalog(name="", as_of=DISTANT_PAST, records=MappingProxyType({}))
