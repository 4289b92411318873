"""
Keyed fetchers for typed entity collections.

This package provides the fetch pipeline, the per-entity fetchers, the
registry that maps keys to them, and a manager for concurrent fetches.
"""

# Errors
from .errors import (
    DuplicateRegistrationError,
    ErrorKind,
    FetchError,
    InvalidDataFormatError,
    NetworkFailureError,
    NotRegisteredError,
    UninitializedRegistryError,
)

# Core components
from .fetcher_base import DataFetcher, EnvelopeTransform, FetcherConfig

# Individual fetchers
from .fetchers import (
    FruitDataFetcher,
    ProductDataFetcher,
    UserDataFetcher,
    register_default_fetchers,
)

# Registry and factory
from .registry import (
    FetcherRegistry,
    get_fetcher,
    get_fetcher_info,
    list_fetcher_keys,
    register_fetcher,
)

# Management layer
from .manager import FetchManager

__all__ = [
    # Errors
    "ErrorKind",
    "FetchError",
    "UninitializedRegistryError",
    "NotRegisteredError",
    "DuplicateRegistrationError",
    "NetworkFailureError",
    "InvalidDataFormatError",
    # Core
    "DataFetcher",
    "EnvelopeTransform",
    "FetcherConfig",
    # Fetchers
    "UserDataFetcher",
    "ProductDataFetcher",
    "FruitDataFetcher",
    "register_default_fetchers",
    # Registry
    "FetcherRegistry",
    "register_fetcher",
    "get_fetcher",
    "list_fetcher_keys",
    "get_fetcher_info",
    # Management
    "FetchManager",
]
