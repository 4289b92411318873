"""
unifetch: uniform fetching of typed collections for server and client renders.

Subpackages
-----------
- data:        Entity models, fetchers and the fetcher registry
- render:      Server and client component factories
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:  # local editable install
    __version__ = "0.0.0-dev"

__all__ = [
    "data",
    "render",
]

from . import data, render
