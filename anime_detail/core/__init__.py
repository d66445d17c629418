"""Core functionality for anime-detail-mcp."""

from .assets import ASSETS_ORIGIN, asset_url, local_assets
from .config import Settings, configure_logging
from .errors import AnimeDetailError, AssetLoadError, HostConnectionError, RenderableError, UpstreamError
from .http_client import http_get
from .normalizers import norm_anime_from_jikan

__all__ = [
    "ASSETS_ORIGIN", "asset_url", "local_assets",
    "Settings", "configure_logging",
    "AnimeDetailError", "AssetLoadError", "HostConnectionError", "RenderableError", "UpstreamError",
    "http_get",
    "norm_anime_from_jikan",
]
