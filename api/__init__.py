"""
unifetch REST API package.

This package defines the FastAPI demo application: the JSON collection
endpoints the fetchers read and a page that renders them server-side.
"""

from .server import app  # noqa: F401
