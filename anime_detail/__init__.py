"""anime-detail-mcp package.

Exports the FastMCP app factory `create_app` and the ASGI factory `create_http_app`.
"""
from .server import create_app, create_http_app

__all__ = ["create_app", "create_http_app"]
