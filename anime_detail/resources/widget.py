"""UI widget resources for anime-detail-mcp.

Each widget is a bundled HTML document served as an MCP resource. The HTML is
fetched from the assets source on every read; a missing document degrades to
a small error page instead of failing the read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import mcp.types as types

from ..core.assets import AssetsSource, asset_url
from ..core.errors import AssetLoadError

UI_MIME_TYPE = "text/html+mcp"

FALLBACK_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Error</title>
  </head>
  <body>
    <div>Error loading widget HTML</div>
  </body>
</html>"""

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WidgetConfig:
    name: str
    html_path: str
    resource_uri: str
    description: str
    connect_domains: Optional[Tuple[str, ...]] = None   # fetch/XHR/WebSocket origins
    resource_domains: Optional[Tuple[str, ...]] = None  # images, scripts, fonts
    domain: Optional[str] = None
    prefers_border: Optional[bool] = None


ANIME_WIDGET = WidgetConfig(
    name="anime-detail-widget",
    html_path="/anime-detail-widget.html",
    resource_uri="ui://widget/anime-detail-widget.html",
    description="Anime detail card rendered from get-anime-detail results.",
    connect_domains=("https://api.jikan.moe",),
    resource_domains=("https://cdn.myanimelist.net",),
)


def load_html(assets: Optional[AssetsSource], html_path: str) -> str:
    try:
        if assets is None:
            raise AssetLoadError("assets source not available")
        r = assets.get(asset_url(html_path))
        if not r.ok:
            raise AssetLoadError(f"Failed to fetch HTML: {r.status_code}")
        return r.text
    except Exception as e:
        logger.error("Failed to load widget HTML %s: %s", html_path, e)
        return FALLBACK_HTML


def widget_meta(config: WidgetConfig) -> Optional[Dict[str, Any]]:
    """`_meta` block for a widget's resource contents, or None if nothing is configured."""
    csp = tuple(
        (k, list(v))
        for k, v in (("connectDomains", config.connect_domains), ("resourceDomains", config.resource_domains))
        if v is not None
    )
    ui = tuple(
        (k, v)
        for k, v in (
            ("csp", dict(csp) if csp else None),
            ("domain", config.domain or None),
            ("prefersBorder", config.prefers_border),
        )
        if v is not None
    )
    return {"ui": dict(ui)} if ui else None


def build_contents(uri: str, html: str, config: WidgetConfig) -> types.TextResourceContents:
    meta = widget_meta(config)
    if meta is None:
        return types.TextResourceContents(uri=uri, mimeType=UI_MIME_TYPE, text=html)
    return types.TextResourceContents(uri=uri, mimeType=UI_MIME_TYPE, text=html, _meta=meta)


def register_widget(mcp, assets: Optional[AssetsSource], config: WidgetConfig) -> None:
    """List `config` as a resource and serve its HTML with the widget `_meta`."""

    @mcp.resource(config.resource_uri, name=config.name, description=config.description, mime_type=UI_MIME_TYPE)
    def widget_html() -> str:
        return load_html(assets, config.html_path)

    # FastMCP's own read path drops per-content _meta, so reads for this URI
    # are answered here and everything else goes to the previous handler.
    handlers = mcp._mcp_server.request_handlers
    previous = handlers[types.ReadResourceRequest]

    async def read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
        uri = str(req.params.uri)
        if uri != config.resource_uri:
            return await previous(req)
        contents = build_contents(uri, load_html(assets, config.html_path), config)
        return types.ServerResult(types.ReadResourceResult(contents=[contents]))

    handlers[types.ReadResourceRequest] = read_resource


def register_resources(mcp, assets: Optional[AssetsSource]):
    """Register UI widget resources with FastMCP."""
    register_widget(mcp, assets, ANIME_WIDGET)
