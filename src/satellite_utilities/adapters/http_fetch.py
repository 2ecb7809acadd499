# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
HTTP fetch adapter: one GET per call, no retries.

External dependencies (urllib, email.utils) are confined to this layer.
Failures surface as NetworkError; a timeout is a retryable
FetchTimeoutError so callers can decide whether to try again.
"""
import logging
import socket
import urllib.error
import urllib.request
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from urllib.parse import urlparse

from satellite_utilities.domain.errors import FetchTimeoutError, NetworkError
from satellite_utilities.ports.orbital_data import ElementsFetcher, FetchResult


_log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0
USER_AGENT = "SatelliteUtilities/1.0"


def parse_http_date(value: str | None) -> datetime | None:
    """Parse an RFC 7231 'Date' header ("Tue, 15 Nov 1994 08:12:31 GMT")."""
    if not value:
        _log.warning("No HTTP 'Date' header")
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        _log.warning("HTTP 'Date' header malformed: %s", value)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class UrllibFetcher(ElementsFetcher):
    """Fetches payloads over HTTP(S) with urllib."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_S, user_agent: str = USER_AGENT):
        self._timeout = timeout
        self._user_agent = user_agent

    def fetch(self, url: str, timeout: float | None = None) -> FetchResult:
        """
        GET a URL.

        Args:
            url: http or https URL.
            timeout: Seconds before giving up (default: adapter timeout).

        Returns:
            FetchResult with body, server Date (if any) and Content-Type.

        Raises:
            NetworkError: Non-2xx status, unsupported scheme or connection
                failure.
            FetchTimeoutError: The request exceeded its timeout.
        """
        scheme = urlparse(url).scheme.lower()
        if scheme not in ("http", "https"):
            raise NetworkError(f"Unsupported URL scheme {scheme!r} in {url!r}")

        limit = self._timeout if timeout is None else timeout
        req = urllib.request.Request(url, headers={"User-Agent": self._user_agent})
        _log.info("GET %s", url)
        try:
            with urllib.request.urlopen(req, timeout=limit) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    raise NetworkError(f"HTTP {status} from {url}", status=status,
                                       retryable=status >= 500)
                payload = response.read()
                headers = response.headers
        except urllib.error.HTTPError as e:
            raise NetworkError(
                f"HTTP {e.code} from {url}: {e.reason}",
                status=e.code,
                retryable=e.code >= 500 or e.code == 429,
            ) from e
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                raise FetchTimeoutError(f"Timed out after {limit}s fetching {url}") from e
            raise NetworkError(f"Connection to {url} failed: {e.reason}", retryable=True) from e
        except (socket.timeout, TimeoutError) as e:
            raise FetchTimeoutError(f"Timed out after {limit}s fetching {url}") from e

        return FetchResult(
            payload=payload,
            server_date=parse_http_date(headers.get("Date")),
            content_type=headers.get("Content-Type"),
        )
