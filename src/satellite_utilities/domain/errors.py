# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Error taxonomy for element ingestion, caching and the astronomy helpers.

Every error derives from ElementsError and from the closest builtin, so
callers may catch either the project hierarchy or ValueError/OSError/etc.
A lookup miss is never an error: catalog and store lookups return None.
"""


class ElementsError(Exception):
    """Base class for all satellite_utilities errors."""


class MalformedInputError(ElementsError, ValueError):
    """A payload does not have the structure its format requires."""

    def __init__(self, fmt: str, detail: str, line: int | None = None):
        self.fmt = fmt
        self.detail = detail
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"malformed {fmt} input{where}: {detail}")


class FieldDecodeError(ElementsError, ValueError):
    """A single field failed to decode or validate."""

    def __init__(self, field: str, raw: object, reason: str = "invalid value"):
        self.field = field
        self.raw = raw
        self.reason = reason
        super().__init__(f"{field}: {reason} ({raw!r})")


class StoreIOError(ElementsError, OSError):
    """A store directory or entry could not be created, written or removed."""


class CacheDirectoryError(StoreIOError):
    """No usable base cache directory exists; the store cannot operate."""


class NetworkError(ElementsError, ConnectionError):
    """A remote fetch failed.

    Attributes:
        status: HTTP status code, when the server answered.
        retryable: True when repeating the request may succeed.
    """

    def __init__(self, message: str, status: int | None = None,
                 retryable: bool = False):
        self.status = status
        self.retryable = retryable
        super().__init__(message)


class FetchTimeoutError(NetworkError):
    """A remote fetch exceeded its timeout."""

    def __init__(self, message: str):
        super().__init__(message, status=None, retryable=True)


class PropagationError(ElementsError, RuntimeError):
    """The propagator could not produce a position for a record."""


class SatelliteInfoNotFoundError(ElementsError, LookupError):
    """No optical properties are known for a catalog number."""


class OrbitPathError(ElementsError, RuntimeError):
    """An orbit path could not be sampled."""
