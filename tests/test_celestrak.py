# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the CelesTrak loader (fetcher faked, store on tmp_path)."""
import json
import os
from datetime import datetime, timedelta, timezone

import pytest

from satellite_utilities.adapters.celestrak import (
    BASE_URL,
    CelesTrakLoader,
    catalog_name,
    group_url,
    load_file,
)
from satellite_utilities.adapters.file_store import ElementsStore
from satellite_utilities.domain.errors import (
    FetchTimeoutError,
    MalformedInputError,
    StoreIOError,
)
from satellite_utilities.domain.formats import ElementFormat
from satellite_utilities.ports.orbital_data import FetchResult

from conftest import FOUR_SATELLITE_TLE, OMM_CSV, omm_xml_document


SERVER_DATE = datetime(2022, 10, 12, 3, 0, tzinfo=timezone.utc)


class FakeFetcher:
    """Returns canned results and records the URLs requested."""

    def __init__(self, payload: bytes, content_type: str | None = None,
                 server_date: datetime | None = SERVER_DATE, error: Exception | None = None):
        self.result = FetchResult(payload=payload, server_date=server_date,
                                  content_type=content_type)
        self.error = error
        self.calls: list[tuple[str, float | None]] = []

    def fetch(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def store(tmp_path):
    return ElementsStore("celestrak-test", base_directory=tmp_path)


class TestUrls:

    def test_group_url(self):
        assert group_url("visual", "json") == f"{BASE_URL}?GROUP=visual&FORMAT=json"

    def test_group_url_quotes(self):
        assert "GROUP=gps%20ops" in group_url("gps ops", ElementFormat.TLE)

    def test_catalog_name(self):
        assert catalog_name("Visual", ElementFormat.XML) == "visualxml"


class TestDownload:

    def test_tle_download(self):
        fetcher = FakeFetcher(FOUR_SATELLITE_TLE.encode())
        loader = CelesTrakLoader(fetcher=fetcher, timeout=7)
        catalog = loader.download("https://example.org/visual.txt", "tle", name="visual")

        assert len(catalog) == 4
        assert catalog.name == "visual"
        assert fetcher.calls == [("https://example.org/visual.txt", 7)]

    def test_as_of_is_server_date(self):
        loader = CelesTrakLoader(fetcher=FakeFetcher(FOUR_SATELLITE_TLE.encode()))
        catalog = loader.download("https://x", ElementFormat.TLE, name="v")
        assert catalog.as_of == SERVER_DATE

    def test_as_of_falls_back_to_now(self):
        fetcher = FakeFetcher(FOUR_SATELLITE_TLE.encode(), server_date=None)
        before = datetime.now(timezone.utc)
        catalog = CelesTrakLoader(fetcher=fetcher).download("https://x", "tle", name="v")
        assert catalog.as_of >= before

    def test_stored_with_server_date(self, store):
        """The cache entry is stamped with the data's as-of date."""
        loader = CelesTrakLoader(fetcher=FakeFetcher(FOUR_SATELLITE_TLE.encode()))
        loader.download("https://x", "tle", name="Visual", store=store)
        assert store.get_modification_date("visual") == SERVER_DATE
        assert len(store.extract("visual")) == 4

    def test_bad_payload_not_stored(self, store):
        """A payload that fails to parse never reaches the store."""
        loader = CelesTrakLoader(fetcher=FakeFetcher(b"AEOLUS\n"))
        with pytest.raises(MalformedInputError):
            loader.download("https://x", "tle", name="visual", store=store)
        assert store.entries() == []

    def test_store_failure_logged_not_raised(self, store, monkeypatch, caplog):
        def failing_insert(*args, **kwargs):
            raise StoreIOError("read-only")

        monkeypatch.setattr(store, "insert", failing_insert)
        loader = CelesTrakLoader(fetcher=FakeFetcher(FOUR_SATELLITE_TLE.encode()))
        catalog = loader.download("https://x", "tle", name="visual", store=store)
        assert len(catalog) == 4
        assert "read-only" in caplog.text

    def test_network_error_propagates(self):
        fetcher = FakeFetcher(b"", error=FetchTimeoutError("slow"))
        with pytest.raises(FetchTimeoutError):
            CelesTrakLoader(fetcher=fetcher).download("https://x", "tle", name="v")

    def test_no_gp_data(self):
        """CelesTrak's plain-text 'No GP data found' yields an empty catalog."""
        fetcher = FakeFetcher(b"No GP data found", content_type="text/plain")
        catalog = CelesTrakLoader(fetcher=fetcher).download("https://x", "json", name="v")
        assert len(catalog) == 0

    def test_no_gp_data_keeps_cached_entry(self, store):
        """An empty reply neither replaces nor re-dates an existing entry."""
        loader = CelesTrakLoader(fetcher=FakeFetcher(FOUR_SATELLITE_TLE.encode()))
        loader.fetch_group("visual", "tle", store=store)

        empty = CelesTrakLoader(fetcher=FakeFetcher(b"No GP data found", content_type="text/plain",
                                                    server_date=datetime.now(timezone.utc)))
        assert len(empty.fetch_group("visual", "tle", store=store)) == 0

        assert len(store.extract("visualtle")) == 4
        assert store.get_modification_date("visualtle") == SERVER_DATE

    def test_no_gp_data_not_stored(self, store):
        fetcher = FakeFetcher(b"No GP data found", content_type="text/plain")
        CelesTrakLoader(fetcher=fetcher).fetch_group("ghost", "json", store=store)
        assert store.entries() == []


class TestFetchGroup:

    def test_json_group(self, omm_records):
        fetcher = FakeFetcher(json.dumps(omm_records).encode(), content_type="application/json")
        catalog = CelesTrakLoader(fetcher=fetcher).fetch_group("visual", "json")
        assert catalog.name == "visualjson"
        assert sorted(catalog.records) == [43600, 43641]
        assert fetcher.calls[0][0] == group_url("visual", "json")

    def test_content_type_selects_parser(self, omm_records):
        """The server's Content-Type wins over the requested format."""
        fetcher = FakeFetcher(omm_xml_document(*omm_records).encode(), content_type="text/xml")
        catalog = CelesTrakLoader(fetcher=fetcher).fetch_group("visual", "json")
        assert len(catalog) == 2

    def test_requested_format_fallback(self):
        """Without a recognizable Content-Type the requested format is used."""
        fetcher = FakeFetcher(OMM_CSV.encode(), content_type="application/octet-stream")
        catalog = CelesTrakLoader(fetcher=fetcher).fetch_group("visual", ElementFormat.CSV)
        assert len(catalog) == 2

    def test_tle_group_served_as_plain_text(self):
        fetcher = FakeFetcher(FOUR_SATELLITE_TLE.encode(), content_type="text/plain; charset=utf-8")
        catalog = CelesTrakLoader(fetcher=fetcher).fetch_group("visual", "tle")
        assert catalog.name == "visualtle"
        assert len(catalog) == 4


class TestLoad:

    def test_fresh_cache_used(self, store, omm_records):
        """A cached entry younger than max_age_days avoids the network."""
        fetcher = FakeFetcher(json.dumps(omm_records).encode(), content_type="application/json",
                              server_date=datetime.now(timezone.utc))
        loader = CelesTrakLoader(fetcher=fetcher)
        first = loader.load("visual", "json", store=store)
        second = loader.load("visual", "json", store=store)
        assert len(fetcher.calls) == 1
        assert dict(second.records) == dict(first.records)

    def test_stale_cache_refreshed(self, store, omm_records):
        fetcher = FakeFetcher(json.dumps(omm_records).encode(), content_type="application/json",
                              server_date=datetime.now(timezone.utc) - timedelta(days=3))
        loader = CelesTrakLoader(fetcher=fetcher)
        loader.load("visual", "json", store=store)
        loader.load("visual", "json", store=store, max_age_days=1.0)
        assert len(fetcher.calls) == 2

    def test_without_store_always_downloads(self, omm_records):
        fetcher = FakeFetcher(json.dumps(omm_records).encode(), content_type="application/json")
        loader = CelesTrakLoader(fetcher=fetcher)
        loader.load("visual", "json")
        loader.load("visual", "json")
        assert len(fetcher.calls) == 2


class TestLoadFile:

    def test_tle_file(self, tmp_path):
        path = tmp_path / "visual.txt"
        path.write_text(FOUR_SATELLITE_TLE)
        stamp = SERVER_DATE.timestamp()
        os.utime(path, (stamp, stamp))

        catalog = load_file(path, "tle")
        assert catalog.name == "visual"
        assert catalog.as_of == SERVER_DATE
        assert len(catalog) == 4

    def test_explicit_name(self, tmp_path, omm_csv):
        path = tmp_path / "data.csv"
        path.write_text(omm_csv)
        assert load_file(path, ElementFormat.CSV, name="brightest").name == "brightest"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_file(tmp_path / "absent.txt", "tle")
