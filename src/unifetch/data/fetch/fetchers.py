"""
Fetchers for the built-in entity collections.

Each fetcher is a ``FetcherConfig``: calling it with a registry key (and
optionally settings and a shared client) builds a ``DataFetcher`` whose
transform validates that entity's envelope. Adding an entity means adding a
model in ``entities``, one config here, and one line in
``register_default_fetchers``.
"""

from ..entities import Fruit, Product, User
from .fetcher_base import FetcherConfig

# {"users": [{"id": 1, "name": ..., "email": ...}]}
UserDataFetcher = FetcherConfig(collection="users", entity=User)

# {"products": [{"id": 1, "name": ..., "price": ..., "description": ...}]}
ProductDataFetcher = FetcherConfig(collection="products", entity=Product)

# {"fruits": [{"id": 1, "name": ..., "richIn": ...}]}
FruitDataFetcher = FetcherConfig(collection="fruits", entity=Fruit)

DEFAULT_FETCHERS = {
    "users": UserDataFetcher,
    "products": ProductDataFetcher,
    "fruits": FruitDataFetcher,
}


def register_default_fetchers(registry) -> None:
    """
    Register every built-in fetcher under its collection key.

    Used as the initializer of the shared registry. A key registered before
    initialization keeps its factory; the built-in one is skipped.
    """
    for key, factory in DEFAULT_FETCHERS.items():
        if key in registry:
            continue
        registry.register(key, factory)
