"""
Server-side component factory.

A server component fetches during the render pass itself: ``render()``
completes only once the data is in, then hands it to the presenter.
"""

import logging
from typing import Callable, Generic, List, Optional, TypeVar

import httpx

from ..data.entities import BaseEntity
from ..data.fetch.registry import FetcherRegistry

logger = logging.getLogger(__name__)

R = TypeVar("R")
Presenter = Callable[[List[BaseEntity]], R]


class ServerComponent(Generic[R]):
    """
    Fetches one collection and presents it in a single render call.

    Fetch errors are not caught here; wrap the component in an
    ``ErrorBoundary`` to turn them into fallback output.
    """

    def __init__(
        self,
        key: str,
        presenter: Presenter,
        registry: Optional[FetcherRegistry] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.key = key
        self.presenter = presenter
        self.registry = registry
        self.client = client

    async def render(self) -> R:
        registry = self.registry or FetcherRegistry.get_instance()
        fetcher = registry.ensure_initialized().get(self.key, client=self.client)
        records = await fetcher.fetch_data()
        logger.debug(f"Server render of '{self.key}' with {len(records)} records")
        return self.presenter(records)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r})"


def server_component(
    key: str,
    presenter: Presenter,
    registry: Optional[FetcherRegistry] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ServerComponent:
    """
    Wrap ``presenter`` in a component that fetches ``key`` at render time.
    """
    return ServerComponent(key, presenter, registry=registry, client=client)
