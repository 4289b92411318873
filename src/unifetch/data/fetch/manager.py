"""
Fetch manager for running several fetchers concurrently.

Each key is fetched as an independent coroutine; results come back keyed, so
completion order does not matter. A failed key maps to its ``FetchError``
rather than to an empty list.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Union

import httpx

from ..entities import BaseEntity
from .errors import FetchError
from .registry import FetcherRegistry

logger = logging.getLogger(__name__)

FetchOutcome = Union[List[BaseEntity], FetchError]


class FetchManager:
    """
    Orchestrates fetches for a set of keys against one registry.
    """

    def __init__(
        self,
        registry: Optional[FetcherRegistry] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.registry = registry or FetcherRegistry.get_instance()
        self.client = client
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    async def fetch(self, key: str) -> List[BaseEntity]:
        """
        Fetch a single collection.

        Raises:
            FetchError: Any registry or fetch failure for the key
        """
        fetcher = self.registry.ensure_initialized().get(key, client=self.client)
        return await fetcher.fetch_data()

    async def fetch_all(
        self, keys: Optional[Iterable[str]] = None
    ) -> Dict[str, FetchOutcome]:
        """
        Fetch several collections concurrently.

        Args:
            keys: Keys to fetch; defaults to every registered key

        Returns:
            Dictionary mapping each key to its records or to the FetchError
            raised for it. Exceptions outside the FetchError family propagate.
        """
        self.registry.ensure_initialized()
        keys = list(keys) if keys is not None else self.registry.keys()

        self.logger.info(f"Fetching {len(keys)} collections: {', '.join(keys)}")
        outcomes = await asyncio.gather(
            *(self.fetch(key) for key in keys), return_exceptions=True
        )

        results: Dict[str, FetchOutcome] = {}
        for key, outcome in zip(keys, outcomes):
            if isinstance(outcome, FetchError):
                results[key] = outcome
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results[key] = outcome

        failed = sum(1 for v in results.values() if isinstance(v, FetchError))
        self.logger.info(
            f"Completed fetching {len(results) - failed}/{len(results)} collections"
        )
        return results
