"""Models and type definitions for anime-detail-mcp."""

from .types import AnimePayload, AnimeStructuredContent, Empty, Found, SearchOutcome

__all__ = ["AnimePayload", "AnimeStructuredContent", "Empty", "Found", "SearchOutcome"]
