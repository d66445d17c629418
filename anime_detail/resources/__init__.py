"""MCP resources (UI widgets) for anime-detail-mcp."""

from . import widget

__all__ = ["widget"]
