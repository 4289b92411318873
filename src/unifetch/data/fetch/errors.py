"""
Closed set of errors raised by the registry and the fetchers.

Each error carries a ``kind`` tag so callers can branch on it
(``match error.kind``) instead of inspecting message strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    UNINITIALIZED_REGISTRY = "uninitialized_registry"
    NOT_REGISTERED = "not_registered"
    DUPLICATE_REGISTRATION = "duplicate_registration"
    NETWORK_FAILURE = "network_failure"
    INVALID_DATA_FORMAT = "invalid_data_format"


class FetchError(Exception):
    """
    Base class for every error the fetch core raises.
    """

    kind: ErrorKind

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class UninitializedRegistryError(FetchError):
    """A fetcher was looked up before the registry was initialized."""

    kind = ErrorKind.UNINITIALIZED_REGISTRY

    def __init__(self, key: Optional[str] = None):
        super().__init__(
            "Fetcher registry is not initialized; call ensure_initialized() first",
            key=key,
        )


class NotRegisteredError(FetchError):
    """No fetcher is registered under the requested key."""

    kind = ErrorKind.NOT_REGISTERED

    def __init__(self, key: str, available: Optional[list] = None):
        available_str = ", ".join(sorted(available or [])) or "none"
        super().__init__(
            f"No fetcher registered for '{key}'. Available: {available_str}",
            key=key,
        )


class DuplicateRegistrationError(FetchError):
    """A fetcher is already registered under the key."""

    kind = ErrorKind.DUPLICATE_REGISTRATION

    def __init__(self, key: str):
        super().__init__(
            f"A fetcher is already registered for '{key}'; unregister it first",
            key=key,
        )


class NetworkFailureError(FetchError):
    """Transport error or non-2xx response from an endpoint."""

    kind = ErrorKind.NETWORK_FAILURE

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, key=key)
        self.url = url
        self.status_code = status_code


class InvalidDataFormatError(FetchError):
    """A payload failed structural validation."""

    kind = ErrorKind.INVALID_DATA_FORMAT

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        collection: Optional[str] = None,
    ):
        super().__init__(message, key=key)
        self.collection = collection
