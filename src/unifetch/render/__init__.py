"""
Component factories that feed fetched collections to presenters.
"""

from .boundary import ErrorBoundary
from .client import ClientComponent, ComponentState, client_component
from .presenters import fruit_list, get_presenter, product_list, user_list
from .server import ServerComponent, server_component

__all__ = [
    "ServerComponent",
    "server_component",
    "ClientComponent",
    "ComponentState",
    "client_component",
    "ErrorBoundary",
    "user_list",
    "product_list",
    "fruit_list",
    "get_presenter",
]
