"""
Registry mapping entity keys to fetcher factories.

A registry is a plain object that can be threaded through an application as a
context value; ``FetcherRegistry.get_instance()`` additionally exposes one
shared, lazily created instance for the process. Lookups are only allowed
after ``ensure_initialized()`` has run the registration sequence, which
happens at most once per registry.

Duplicate keys are rejected: ``register`` raises
``DuplicateRegistrationError`` and a replacement must ``unregister`` first.
Keys registered before initialization take precedence over the built-in
fetchers, which ``register_default_fetchers`` only adds for missing keys.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

import httpx

from ...settings import Settings, settings as default_settings
from .errors import (
    DuplicateRegistrationError,
    NotRegisteredError,
    UninitializedRegistryError,
)
from .fetcher_base import DataFetcher
from .fetchers import register_default_fetchers

logger = logging.getLogger(__name__)

FetcherFactory = Callable[..., DataFetcher]
Initializer = Callable[["FetcherRegistry"], None]


class FetcherRegistry:
    """
    Keyed registry of fetcher factories with one-time initialization.
    """

    _instance: Optional["FetcherRegistry"] = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        initializer: Optional[Initializer] = None,
        settings: Optional[Settings] = None,
    ):
        self._fetchers: Dict[str, FetcherFactory] = {}
        self._initializer = initializer
        self._initialized = False
        self._lock = threading.RLock()
        self.settings = settings or default_settings

    @classmethod
    def get_instance(cls) -> "FetcherRegistry":
        """
        Return the process-wide registry, creating it on first call.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls(initializer=register_default_fetchers)
                    logger.debug("Created shared fetcher registry")
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared registry so the next get_instance() builds a new one."""
        with cls._instance_lock:
            cls._instance = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def register(self, key: str, factory: FetcherFactory) -> None:
        """
        Register a fetcher factory for a key.

        Args:
            key: Non-empty entity key, also the fetcher's endpoint segment
            factory: Callable ``(key, settings, client=None) -> DataFetcher``

        Raises:
            DuplicateRegistrationError: If the key is already registered
        """
        if not isinstance(key, str) or not key.strip():
            raise ValueError(f"Fetcher key must be a non-empty string: {key!r}")
        if not callable(factory):
            raise TypeError(f"Fetcher factory must be callable: {factory!r}")

        with self._lock:
            if key in self._fetchers:
                raise DuplicateRegistrationError(key)
            self._fetchers[key] = factory

        logger.debug(f"Registered fetcher: {key} -> {factory!r}")

    def unregister(self, key: str) -> None:
        """
        Remove a fetcher from the registry.
        """
        with self._lock:
            if key in self._fetchers:
                del self._fetchers[key]
                logger.debug(f"Unregistered fetcher: {key}")

    def ensure_initialized(self) -> "FetcherRegistry":
        """
        Run the registration sequence once; later calls do nothing.

        If the initializer raises, every entry it added is rolled back, the
        registry stays uninitialized and the error propagates; a later call
        runs the initializer again.
        """
        if self._initialized:
            return self

        with self._lock:
            if not self._initialized:
                if self._initializer is not None:
                    snapshot = dict(self._fetchers)
                    try:
                        self._initializer(self)
                    except Exception:
                        self._fetchers = snapshot
                        raise
                self._initialized = True
                logger.info(
                    f"Fetcher registry initialized with {len(self._fetchers)} "
                    f"fetcher(s): {', '.join(self.keys())}"
                )
        return self

    def get(self, key: str, client: Optional[httpx.AsyncClient] = None) -> DataFetcher:
        """
        Build the fetcher registered under ``key``.

        Raises:
            UninitializedRegistryError: If ensure_initialized() has not run
            NotRegisteredError: If nothing is registered under the key
        """
        if not self._initialized:
            raise UninitializedRegistryError(key)

        factory = self._fetchers.get(key)
        if factory is None:
            raise NotRegisteredError(key, self.keys())

        if client is None:
            return factory(key, self.settings)
        return factory(key, self.settings, client=client)

    def keys(self) -> List[str]:
        """Get list of all registered fetcher keys."""
        return list(self._fetchers.keys())

    def get_info(self) -> Dict[str, str]:
        """
        Describe every registered fetcher.
        """
        info = {}
        for key, factory in self._fetchers.items():
            collection = getattr(factory, "collection", None)
            entity = getattr(factory, "entity", None)
            if collection and entity is not None:
                info[key] = f"{entity.__name__} records from '{collection}'"
            else:
                info[key] = getattr(factory, "__doc__", None) or "No description"
        return info

    def __contains__(self, key: Any) -> bool:
        return key in self._fetchers

    def __len__(self) -> int:
        return len(self._fetchers)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(initialized={self._initialized}, "
            f"keys={self.keys()})"
        )


def register_fetcher(key: str, factory: Optional[FetcherFactory] = None):
    """
    Decorator and function for registering fetchers on the shared registry.

    Can be used as:
    1. Function: register_fetcher("my_key", my_factory)
    2. Decorator: @register_fetcher("my_key")
    """

    def decorator(fn: FetcherFactory) -> FetcherFactory:
        FetcherRegistry.get_instance().register(key, fn)
        return fn

    if factory is not None:
        FetcherRegistry.get_instance().register(key, factory)
        return factory
    return decorator


def get_fetcher(key: str, client: Optional[httpx.AsyncClient] = None) -> DataFetcher:
    """
    Look up a fetcher on the shared registry, initializing it if needed.

    This is the main entry point for callers without their own registry.
    """
    return FetcherRegistry.get_instance().ensure_initialized().get(key, client=client)


def list_fetcher_keys() -> List[str]:
    """
    List all keys of the shared registry.
    """
    return FetcherRegistry.get_instance().ensure_initialized().keys()


def get_fetcher_info() -> Dict[str, str]:
    """
    Get information about all fetchers on the shared registry.
    """
    return FetcherRegistry.get_instance().ensure_initialized().get_info()
