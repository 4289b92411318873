"""
Client-side component factory.

A client component renders immediately with a loading placeholder, starts its
fetch when mounted, and reports every state change through ``on_change`` so
the owner can render again.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional

import httpx

from ..data.entities import BaseEntity
from ..data.fetch.registry import FetcherRegistry
from .server import Presenter

logger = logging.getLogger(__name__)


class ComponentState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ClientComponent:
    """
    Tracks one collection through idle -> loading -> loaded | error.

    ``render()`` raises the stored error in the error state, so an enclosing
    ``ErrorBoundary`` chooses the fallback. ``unmount()`` cancels an
    in-flight fetch; no state change is reported after it.
    """

    def __init__(
        self,
        key: str,
        presenter: Presenter,
        registry: Optional[FetcherRegistry] = None,
        on_change: Optional[Callable[["ClientComponent"], None]] = None,
        loading: str = "Loading...",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.key = key
        self.presenter = presenter
        self.registry = registry
        self.client = client
        self.on_change = on_change
        self.loading = loading

        self.state = ComponentState.IDLE
        self.data: Optional[List[BaseEntity]] = None
        self.error: Optional[Exception] = None
        self._task: Optional[asyncio.Task] = None
        self._disposed = False

    @property
    def mounted(self) -> bool:
        return self._task is not None and not self._disposed

    def mount(self) -> asyncio.Task:
        """
        Start the fetch on the running event loop.

        Mounting twice returns the existing task.
        """
        if self._disposed:
            raise RuntimeError(f"Component '{self.key}' was unmounted")
        if self._task is None:
            self._set_state(ComponentState.LOADING)
            self._task = asyncio.get_running_loop().create_task(self._load())
        return self._task

    def unmount(self) -> None:
        """
        Dispose the component, cancelling an in-flight fetch.
        """
        self._disposed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug(f"Cancelled in-flight fetch for '{self.key}'")

    async def wait(self) -> ComponentState:
        """Wait for the mounted fetch to settle and return the final state."""
        if self._task is None:
            raise RuntimeError(f"Component '{self.key}' is not mounted")
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        return self.state

    def render(self):
        if self.state is ComponentState.ERROR:
            raise self.error
        if self.state is ComponentState.LOADED:
            return self.presenter(self.data)
        return self.loading

    async def _load(self) -> None:
        try:
            registry = self.registry or FetcherRegistry.get_instance()
            fetcher = registry.ensure_initialized().get(self.key, client=self.client)
            records = await fetcher.fetch_data()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not self._disposed:
                self.error = e
                self._set_state(ComponentState.ERROR)
            return

        if not self._disposed:
            self.data = records
            self._set_state(ComponentState.LOADED)

    def _set_state(self, state: ComponentState) -> None:
        self.state = state
        if self.on_change is not None:
            self.on_change(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r}, state={self.state.value})"


def client_component(
    key: str,
    presenter: Presenter,
    registry: Optional[FetcherRegistry] = None,
    on_change: Optional[Callable[[ClientComponent], None]] = None,
    loading: str = "Loading...",
    client: Optional[httpx.AsyncClient] = None,
) -> ClientComponent:
    """
    Wrap ``presenter`` in a component that fetches ``key`` once mounted.
    """
    return ClientComponent(
        key, presenter, registry=registry, on_change=on_change, loading=loading, client=client
    )
