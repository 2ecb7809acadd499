# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for retrieving raw element-set payloads.

Adapters handle the actual HTTP calls.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class FetchResult:
    """Raw response of a fetch: body bytes plus server metadata."""
    payload: bytes
    server_date: datetime | None = None
    content_type: str | None = None


@runtime_checkable
class ElementsFetcher(Protocol):
    """Port for fetching element-set payloads from a URL."""

    def fetch(self, url: str, timeout: float | None = None) -> FetchResult:
        """Fetch a URL; raise NetworkError on failure."""
        ...
