"""MCP tools for anime-detail-mcp."""

from . import details

__all__ = ["details"]
