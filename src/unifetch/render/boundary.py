"""
Error boundary that turns fetch errors into fallback output.
"""

import inspect
import logging
from typing import Callable, Union

from ..data.fetch.errors import FetchError

logger = logging.getLogger(__name__)

Fallback = Union[str, Callable[[FetchError], str]]


class ErrorBoundary:
    """
    Render a component, substituting ``fallback`` when its fetch failed.

    Only ``FetchError`` is caught; anything else is a bug and propagates.
    """

    def __init__(self, fallback: Fallback):
        self.fallback = fallback

    async def render(self, component):
        try:
            output = component.render()
            if inspect.isawaitable(output):
                output = await output
            return output
        except FetchError as e:
            logger.warning(
                f"Rendering fallback for {component!r}: [{e.kind.value}] {e}"
            )
            if callable(self.fallback):
                return self.fallback(e)
            return self.fallback
