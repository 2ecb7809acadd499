# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
File-backed element store.

A store is a directory under the platform cache directory holding one
JSON file per catalog, named by the lower-cased catalog name. The file's
modification time records when the catalog's data was produced (its
as-of date), not when the file was written, so entries can be aged.

    ~/.cache/satellite-utilities/
        visual          {"name": "visual", "as_of": ..., "records": {...}}
        stations        ...

Writes go to a hidden temporary file that is stamped and then atomically
renamed over the entry, so readers never see a half-written entry or a
fresh body with a stale timestamp. Concurrent writers remain
last-writer-wins.

External dependencies (json, os, tempfile) are confined to this layer.
"""
import json
import logging
import os
import shutil
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from satellite_utilities.domain.catalog import DISTANT_PAST, Catalog
from satellite_utilities.domain.errors import (
    CacheDirectoryError,
    ElementsError,
    StoreIOError,
)


_log = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "satellite-utilities"
CACHE_DIR_ENV = "SATELLITE_UTILITIES_CACHE_DIR"
SECONDS_PER_DAY = 86400.0


def default_cache_root() -> Path:
    """
    Platform cache directory.

    $SATELLITE_UTILITIES_CACHE_DIR wins; otherwise ~/Library/Caches on
    macOS, %LOCALAPPDATA% on Windows, $XDG_CACHE_HOME or ~/.cache elsewhere.

    Raises:
        CacheDirectoryError: If no base directory can be determined.
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return Path(local)
    elif os.environ.get("XDG_CACHE_HOME") and sys.platform != "darwin":
        return Path(os.environ["XDG_CACHE_HOME"])

    try:
        home = Path.home()
    except RuntimeError as e:
        raise CacheDirectoryError(f"No usable cache directory: {e}") from e
    if sys.platform == "darwin":
        return home / "Library" / "Caches"
    if sys.platform == "win32":
        return home / "AppData" / "Local"
    return home / ".cache"


def _entry_key(name: str) -> str:
    key = name.strip().lower()
    if not key or key.startswith(".") or "/" in key or "\\" in key or key in ("..",):
        raise ValueError(f"Invalid store entry name {name!r}")
    return key


def _timestamp(when: datetime) -> float:
    return (when if when.tzinfo else when.replace(tzinfo=timezone.utc)).timestamp()


class ElementsStore:
    """
    Directory of persisted catalogs.

    Read operations (extract, get_modification_date, age) never raise;
    write operations raise StoreIOError and leave existing entries intact.
    """

    def __init__(self, store_name: str = DEFAULT_STORE_NAME,
                 base_directory: str | Path | None = None):
        """
        Open (creating if needed) the store directory.

        Raises:
            CacheDirectoryError: If the directory cannot be located or created.
        """
        base = Path(base_directory) if base_directory is not None else default_cache_root()
        self.store_name = store_name
        self.directory = base / store_name
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirectoryError(f"Cannot create store directory {self.directory}: {e}") from e
        _log.info("Store open: %s", self.directory)

    def entry_path(self, name: str) -> Path:
        return self.directory / _entry_key(name)

    def insert(self, catalog: Catalog, name: str | None = None,
               as_of: datetime | None = None) -> Path:
        """
        Persist a catalog under `name` (default: the catalog's own name).

        Args:
            catalog: Catalog to store.
            name: Entry name; lower-cased for the file name.
            as_of: Timestamp stamped on the entry (default: now).

        Returns:
            Path of the entry file.

        Raises:
            StoreIOError: If the entry cannot be written. Any previous
                entry under the same name is left untouched.
        """
        path = self.entry_path(name if name is not None else catalog.name)
        when = as_of or datetime.now(timezone.utc)
        body = json.dumps(catalog.to_dict(), indent=1, ensure_ascii=False)

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=self.directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(body)
            stamp = _timestamp(when)
            os.utime(tmp_name, (stamp, stamp))
            os.replace(tmp_name, path)
        except (OSError, OverflowError, ValueError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreIOError(f"Cannot write store entry {path.name!r}: {e}") from e

        _log.info("Store add: '%s' @ %s (%d records)", path.name, when.isoformat(), len(catalog))
        return path

    def extract(self, name: str) -> Catalog | None:
        """Stored catalog, or None if the entry is missing or unreadable."""
        try:
            path = self.entry_path(name)
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return Catalog.from_dict(data)
        except FileNotFoundError:
            _log.info("Store get: '%s' not present", name)
            return None
        except (OSError, ValueError, ElementsError) as e:
            _log.warning("Store get: '%s' unreadable: %s", name, e)
            return None

    def delete(self, name: str) -> bool:
        """
        Remove one entry.

        Returns:
            True if removed, False if there was no such entry.

        Raises:
            StoreIOError: If the entry exists but cannot be removed.
        """
        path = self.entry_path(name)
        if not path.exists():
            _log.warning("Store del: '%s' does not exist", name)
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StoreIOError(f"Failed to delete '{name}': {e}") from e
        _log.info("Store del: '%s' deleted", path.name)
        return True

    def delete_all(self) -> int:
        """Remove every entry; returns the number removed."""
        removed = 0
        try:
            for path in self.directory.iterdir():
                if path.is_dir():
                    shutil.rmtree(path)
                else:
                    path.unlink()
                removed += 1
        except OSError as e:
            raise StoreIOError(f"Error emptying store {self.directory}: {e}") from e
        _log.info("Store emptied (%d entries)", removed)
        return removed

    def delete_store(self) -> None:
        """Remove the store directory itself."""
        try:
            shutil.rmtree(self.directory)
        except FileNotFoundError:
            _log.warning("Store %s already deleted", self.directory)
            return
        except OSError as e:
            raise StoreIOError(f"Error deleting store {self.directory}: {e}") from e
        _log.info("Store deleted: %s", self.directory)

    def get_modification_date(self, name: str) -> datetime:
        """Entry's timestamp, or DISTANT_PAST if there is no such entry."""
        try:
            mtime = self.entry_path(name).stat().st_mtime
        except (OSError, ValueError):
            return DISTANT_PAST
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    def set_modification_date(self, name: str, when: datetime) -> None:
        """
        Stamp an entry with `when`.

        Raises:
            StoreIOError: If the entry is missing or cannot be stamped.
        """
        path = self.entry_path(name)
        try:
            stamp = _timestamp(when)
            os.utime(path, (stamp, stamp))
        except (OSError, OverflowError, ValueError) as e:
            raise StoreIOError(f"Cannot set date of '{name}': {e}") from e
        _log.info("Store mod: '%s' ← %s", path.name, when.isoformat())

    def age(self, name: str, now: datetime | None = None) -> float | None:
        """
        Days since the entry's timestamp, or None if there is no entry.

        A timestamp in the future indicates a corrupted entry or clock; it
        is logged and reported as age 0.0.
        """
        modified = self.get_modification_date(name)
        if modified == DISTANT_PAST:
            return None
        now = now or datetime.now(timezone.utc)
        days = (now - modified).total_seconds() / SECONDS_PER_DAY
        if days < 0.0:
            _log.warning("Store age: '%s' is dated %s, in the future", name, modified.isoformat())
            return 0.0
        if days < 7.0:
            _log.info("Store age: '%s' %.2f days", name, days)
        else:
            _log.info("Store age: '%s' older than a week", name)
        return days

    def entries(self) -> list[str]:
        """Names of stored entries (hidden temporary files excluded)."""
        try:
            return sorted(
                p.name for p in self.directory.iterdir()
                if p.is_file() and not p.name.startswith(".")
            )
        except OSError:
            return []

    def describe(self) -> str:
        """Human-readable summary; diagnostic only."""
        if not self.directory.is_dir():
            return f"Store {self.directory} does not exist."
        names = self.entries()
        return (
            f"Store {self.directory}\n"
            f"  count: {len(names)}\n"
            f"  files: {', '.join(names) if names else '-'}"
        )
