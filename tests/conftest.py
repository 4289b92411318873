"""
Fixtures and test configuration for the unifetch test suite.
"""

from typing import Any, Callable, Dict

import httpx
import pytest

from unifetch.settings import Settings
from unifetch.data.fetch import FetcherRegistry, register_default_fetchers


API_URL = "http://testserver/api"


@pytest.fixture(autouse=True)
def reset_shared_registry():
    """Give every test a fresh process-wide registry."""
    FetcherRegistry.reset_instance()
    yield
    FetcherRegistry.reset_instance()


@pytest.fixture
def test_settings():
    """Settings pointing the fetchers at the stub API."""
    return Settings(api_url=API_URL, request_timeout=5, log_level="DEBUG")


@pytest.fixture
def payloads() -> Dict[str, Any]:
    """Well-formed envelopes served by the stub API."""
    return {
        "users": {
            "users": [
                {"id": 1, "name": "Leanne Graham", "email": "leanne@example.com"},
                {"id": 2, "name": "Ervin Howell", "email": "ervin@example.com"},
            ]
        },
        "products": {
            "products": [
                {"id": 1, "name": "Laptop", "price": 999.99, "description": "Ultrabook"},
            ]
        },
        "fruits": {
            "fruits": [{"id": 1, "name": "Banana", "richIn": "Potassium"}]
        },
    }


@pytest.fixture
def make_client() -> Callable[[Callable], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def stub_api(payloads):
    """Request handler serving ``payloads`` at /api/<key>, 404 otherwise."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        key = request.url.path.rsplit("/", 1)[-1]
        if request.url.path == f"/api/{key}" and key in payloads:
            return httpx.Response(200, json=payloads[key])
        return httpx.Response(404, json={"detail": "Not Found"})

    handler.requests = requests
    return handler


@pytest.fixture
def stub_client(make_client, stub_api):
    """AsyncClient bound to the stub API."""
    return make_client(stub_api)


@pytest.fixture
def registry(test_settings):
    """Uninitialized registry with the built-in fetchers as initializer."""
    return FetcherRegistry(initializer=register_default_fetchers, settings=test_settings)
