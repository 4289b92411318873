"""
FastAPI demo service for unifetch.

This module serves the three JSON collection endpoints the built-in fetchers
read (`/api/users`, `/api/products`, `/api/fruits`) and an `/exercise` page
that renders all three lists twice through the fetcher registry, once with
server components and once with mounted client components, each inside an
error boundary. A health endpoint is exposed at `/health`.
"""

import asyncio
from html import escape
from typing import Any, Dict, List, Optional

import httpx
from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse

from unifetch.data.fetch import FetcherRegistry, FetchError
from unifetch.render import (
    ErrorBoundary,
    client_component,
    get_presenter,
    server_component,
)

app = FastAPI(title="unifetch API", version="0.1.0")

USERS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Leanne Graham", "email": "leanne@example.com"},
    {"id": 2, "name": "Ervin Howell", "email": "ervin@example.com"},
    {"id": 3, "name": "Clementine Bauch", "email": "clementine@example.com"},
]

PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Laptop", "price": 999.99, "description": "14-inch ultrabook"},
    {"id": 2, "name": "Headphones", "price": 149.5, "description": "Noise cancelling"},
    {"id": 3, "name": "Keyboard", "price": 79.0, "description": "Mechanical, tenkeyless"},
]

FRUITS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Apple", "richIn": "Vitamin C"},
    {"id": 2, "name": "Banana", "richIn": "Potassium"},
    {"id": 3, "name": "Avocado", "richIn": "Healthy fats"},
]

# Page sections in render order: (registry key, label used in the fallback)
SECTIONS = [("users", "users"), ("products", "products"), ("fruits", "fruits")]


def get_registry() -> FetcherRegistry:
    """Shared registry, initialized before any lookup."""
    return FetcherRegistry.get_instance().ensure_initialized()


def get_http_client() -> Optional[httpx.AsyncClient]:
    """HTTP client for the fetchers; None lets each fetch open its own."""
    return None


@app.get("/health", summary="Health check", tags=["system"])
async def health() -> dict[str, str]:
    """Return a simple health check status."""
    return {"status": "ok"}


@app.get("/", summary="Welcome", tags=["system"])
async def root() -> dict[str, Any]:
    """Return a welcome message and the available endpoints."""
    return {
        "message": "Welcome to the unifetch API",
        "endpoints": {
            "users": "GET /api/users",
            "products": "GET /api/products",
            "fruits": "GET /api/fruits",
            "page": "GET /exercise",
        },
    }


@app.get("/api/users", summary="List users", tags=["collections"])
async def list_users() -> dict[str, Any]:
    return {"users": USERS}


@app.get("/api/products", summary="List products", tags=["collections"])
async def list_products() -> dict[str, Any]:
    return {"products": PRODUCTS}


@app.get("/api/fruits", summary="List fruits", tags=["collections"])
async def list_fruits() -> dict[str, Any]:
    return {"fruits": FRUITS}


def _fallback(label: str):
    def render(error: FetchError) -> str:
        return f'<p class="error">Failed to load {label}: {escape(str(error))}</p>'

    return render


@app.get("/exercise", response_class=HTMLResponse, tags=["pages"])
async def exercise_page(
    registry: FetcherRegistry = Depends(get_registry),
    client: Optional[httpx.AsyncClient] = Depends(get_http_client),
) -> str:
    """
    Render every collection with both component kinds.

    Server components fetch while rendering. Client components are mounted,
    awaited until they settle, then rendered. All fetches run concurrently.
    """
    server_renders = [
        ErrorBoundary(_fallback(label)).render(
            server_component(key, get_presenter(key), registry=registry, client=client)
        )
        for key, label in SECTIONS
    ]

    components = [
        client_component(key, get_presenter(key), registry=registry, client=client)
        for key, _ in SECTIONS
    ]
    for component in components:
        component.mount()

    server_sections, _ = await asyncio.gather(
        asyncio.gather(*server_renders),
        asyncio.gather(*(component.wait() for component in components)),
    )
    client_sections = [
        await ErrorBoundary(_fallback(label)).render(component)
        for component, (_, label) in zip(components, SECTIONS)
    ]

    return (
        "<!doctype html><html><head><title>Unified API Integration</title></head>"
        "<body><h1>Unified API Integration</h1>"
        '<div class="server-side"><h2>Server-side Fetching</h2>'
        f"{''.join(server_sections)}</div>"
        '<div class="client-side"><h2>Client-side Fetching</h2>'
        f"{''.join(client_sections)}</div>"
        "</body></html>"
    )
