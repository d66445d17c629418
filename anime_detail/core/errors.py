"""Error taxonomy for anime-detail-mcp."""

from typing import Optional


class AnimeDetailError(Exception):
    """Base class for errors raised by this package."""


class UpstreamError(AnimeDetailError):
    """The anime API answered with a failure status, or could not be read."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AssetLoadError(AnimeDetailError):
    """Bundled widget HTML is missing or unfetchable. Always recovered locally."""


class HostConnectionError(AnimeDetailError):
    """The widget could not initialize its bridge to the MCP host."""


class RenderableError(AnimeDetailError):
    """A recoverable widget failure, shown as a banner until the next update."""
