# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CelesTrak loader: downloads element sets and turns them into catalogs.

Data sources:
    CelesTrak GP API — https://celestrak.org/NORAD/elements/gp.php
    Groups: VISUAL, STATIONS, GPS-OPS, STARLINK, ONEWEB, ACTIVE, WEATHER, etc.
    Formats: TLE, JSON, XML, CSV (the FORMAT query parameter).

Every download produces a new Catalog; nothing is updated in place.
The catalog's as-of date is the server's Date header when present, so a
cached entry ages from when CelesTrak produced it rather than when it
was written locally.

Rate limiting: CelesTrak updates at most every 2 hours.
"""
import logging
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import quote

from satellite_utilities.adapters.file_store import ElementsStore
from satellite_utilities.adapters.http_fetch import DEFAULT_TIMEOUT_S, UrllibFetcher
from satellite_utilities.domain.catalog import Catalog
from satellite_utilities.domain.errors import StoreIOError
from satellite_utilities.domain.formats import ElementFormat, decode_payload
from satellite_utilities.ports.orbital_data import ElementsFetcher


_log = logging.getLogger(__name__)

BASE_URL = "https://celestrak.org/NORAD/elements/gp.php"
DEFAULT_GROUP = "visual"

_NO_DATA = "No GP data found"


def group_url(group: str, fmt: ElementFormat | str, base_url: str = BASE_URL) -> str:
    """GP API query URL for a group in a format."""
    return f"{base_url}?GROUP={quote(group)}&FORMAT={ElementFormat.parse(fmt).value}"


def catalog_name(group: str, fmt: ElementFormat | str) -> str:
    """Store name of a group download: group followed by format ("visualjson")."""
    return f"{group}{ElementFormat.parse(fmt).value}".lower()


class CelesTrakLoader:
    """
    Fetches element sets through an ElementsFetcher and parses them.

    Any record that fails to parse fails the whole download; a partially
    parsed catalog is never returned or stored.
    """

    def __init__(self, fetcher: ElementsFetcher | None = None,
                 base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT_S):
        self._fetcher = fetcher or UrllibFetcher(timeout=timeout)
        self._base_url = base_url
        self._timeout = timeout

    def _store(self, store: ElementsStore | None, catalog: Catalog, name: str) -> None:
        if store is None:
            return
        try:
            store.insert(catalog, name=name, as_of=catalog.as_of)
        except StoreIOError as e:
            _log.error("Could not cache '%s': %s", name, e)

    def download(
        self,
        url: str,
        fmt: ElementFormat | str,
        name: str,
        store: ElementsStore | None = None,
        timeout: float | None = None,
    ) -> Catalog:
        """
        Fetch `url` and parse it as `fmt`.

        Args:
            url: Source URL.
            fmt: Payload format.
            name: Catalog (and store entry) name.
            store: If given, the catalog is cached there, stamped with its
                as-of date. A failed cache write is logged, not raised.
            timeout: Seconds before giving up (default: loader timeout).

        Raises:
            NetworkError: If the fetch fails (FetchTimeoutError on timeout).
            MalformedInputError: On a structurally invalid payload.
            FieldDecodeError: On a field that fails to decode.
        """
        result = self._fetcher.fetch(url, timeout=self._timeout if timeout is None else timeout)
        return self._catalog_from(result.payload, ElementFormat.parse(fmt),
                                  name, result.server_date, store)

    def _catalog_from(self, payload: bytes, fmt: ElementFormat, name: str,
                      server_date: datetime | None, store: ElementsStore | None) -> Catalog:
        text = decode_payload(payload, fmt)
        as_of = server_date or datetime.now(timezone.utc)
        if text.strip() == _NO_DATA:
            # Never cached: an existing entry under this name stays as it was.
            _log.warning("No GP data found for '%s'; cache left unchanged", name)
            return Catalog.build([], name=name, as_of=as_of)
        catalog = Catalog.from_text(text, fmt, name=name, as_of=as_of)
        _log.info("Downloaded '%s': %d records as of %s", name, len(catalog), as_of.isoformat())
        self._store(store, catalog, name)
        return catalog

    def fetch_group(
        self,
        group: str = DEFAULT_GROUP,
        fmt: ElementFormat | str = ElementFormat.JSON,
        store: ElementsStore | None = None,
    ) -> Catalog:
        """
        Download a CelesTrak group.

        The catalog is named group + format ("visualjson"). The response
        Content-Type selects the parser; the requested format is the
        fallback when the server does not say.
        """
        requested = ElementFormat.parse(fmt)
        name = catalog_name(group, requested)
        result = self._fetcher.fetch(group_url(group, requested, self._base_url),
                                     timeout=self._timeout)
        served = ElementFormat.from_content_type(result.content_type, default=requested)
        if served is not requested:
            _log.info("Server sent %s for '%s'; parsing as %s",
                      result.content_type, name, served.value)
        return self._catalog_from(result.payload, served, name, result.server_date, store)

    def load(
        self,
        group: str = DEFAULT_GROUP,
        fmt: ElementFormat | str = ElementFormat.JSON,
        store: ElementsStore | None = None,
        max_age_days: float = 1.0,
    ) -> Catalog:
        """
        Cached group catalog when younger than `max_age_days`, otherwise a
        fresh download (cached on success).
        """
        if store is not None:
            name = catalog_name(group, fmt)
            age = store.age(name)
            if age is not None and age < max_age_days:
                cached = store.extract(name)
                if cached is not None:
                    _log.info("Using cached '%s' (%.2f days old)", name, age)
                    return cached
        return self.fetch_group(group, fmt, store=store)


def load_file(path: str | Path, fmt: ElementFormat | str, name: str | None = None) -> Catalog:
    """
    Parse a local element-set file; its modification time is the as-of date.

    Raises:
        OSError: If the file cannot be read.
        MalformedInputError: On a structurally invalid payload.
        FieldDecodeError: On a field that fails to decode.
    """
    path = Path(path)
    payload = path.read_bytes()
    as_of = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    label = name or path.stem
    catalog = Catalog.from_text(decode_payload(payload, fmt), fmt, name=label, as_of=as_of)
    _log.info("Loaded '%s' from %s: %d records", label, path, len(catalog))
    return catalog
