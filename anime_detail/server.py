# SPDX-License-Identifier: MIT
"""
anime-detail-mcp server entrypoint.

Wires FastMCP with the anime detail tool and its UI widget resource, and
serves a landing page at `/` beside the streamable HTTP endpoint at `/mcp`.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Optional, Sequence

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import HTMLResponse

from .core.assets import AssetsSource, local_assets
from .core.config import Settings, configure_logging
from .resources import widget
from .tools import details

LANDING_HTML = """<main style="font-family: system-ui, -apple-system, sans-serif; max-width: 640px; margin: 4rem auto; padding: 0 1.5rem; line-height: 1.6;">
  <h1 style="font-size: 1.6rem; margin-bottom: 0.5rem;">Anime Detail MCP Server</h1>
  <p>This server exposes an MCP endpoint at <code>/mcp</code>. Connect with an MCP-compatible host to use the widgets.</p>
  <p>If you reached this page in a browser, there's nothing else to do here.</p>
</main>"""

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, assets: Optional[AssetsSource] = None) -> FastMCP:
    settings = settings or Settings.from_env()
    if assets is None:
        assets = local_assets(settings.assets_dir)

    # stateless: nothing is shared between requests
    mcp = FastMCP("anime-detail", host=settings.host, port=settings.port, stateless_http=True)

    details.register_tools(mcp, jikan_base=settings.jikan_base, timeout=settings.http_timeout)
    widget.register_resources(mcp, assets)

    @mcp.custom_route("/", methods=["GET"])
    async def landing(_request: Request) -> HTMLResponse:
        return HTMLResponse(LANDING_HTML)

    return mcp


def create_http_app(settings: Optional[Settings] = None):
    """ASGI app: `/` landing page plus FastMCP's `/mcp` endpoint."""
    return create_app(settings).streamable_http_app()


def main(argv: Optional[Sequence[str]] = None) -> None:
    env = Settings.from_env()
    parser = argparse.ArgumentParser(prog="anime-detail-mcp", description="Anime detail MCP server")
    parser.add_argument("--transport", choices=["streamable-http", "stdio"], default="streamable-http")
    parser.add_argument("--host", default=env.host)
    parser.add_argument("--port", type=int, default=env.port)
    parser.add_argument("--log-level", default=env.log_level)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    settings = replace(env, host=args.host, port=args.port, log_level=args.log_level)
    app = create_app(settings)
    if args.transport == "stdio":
        logger.info("serving anime-detail over stdio")
    else:
        logger.info("serving anime-detail on http://%s:%d/mcp", settings.host, settings.port)
    app.run(transport=args.transport)


if __name__ == "__main__":
    main()
