"""
Data layer: entity models and the fetch core.
"""

from .entities import BaseEntity, Fruit, Product, User
from .fetch import FetcherRegistry, FetchManager, get_fetcher, list_fetcher_keys

__all__ = [
    "BaseEntity",
    "User",
    "Product",
    "Fruit",
    "FetcherRegistry",
    "FetchManager",
    "get_fetcher",
    "list_fetcher_keys",
]
