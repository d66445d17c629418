"""Anime detail tool for anime-detail-mcp."""

import logging
import urllib.parse
from typing import Annotated, Optional

import anyio.to_thread
import mcp.types as types
import requests
from pydantic import Field

from ..core.config import JIKAN_BASE
from ..core.errors import UpstreamError
from ..core.http_client import http_get
from ..core.normalizers import norm_anime_from_jikan
from ..models.types import Empty, Found, SearchOutcome
from ..resources.widget import ANIME_WIDGET

TOOL_NAME = "get-anime-detail"

logger = logging.getLogger(__name__)


def search_anime(query: str, jikan_base: str = JIKAN_BASE, timeout: Optional[float] = None) -> SearchOutcome:
    """Look up `query` on Jikan and keep the first hit."""
    url = jikan_base + "/anime?" + urllib.parse.urlencode({"q": query, "sfw": "true"})
    try:
        r = http_get(url, timeout=timeout)
        if not r.ok:
            raise UpstreamError(f"Jikan request failed: {r.status_code} {r.reason}", status_code=r.status_code)
        payload = r.json()
    except requests.JSONDecodeError as e:
        # also a RequestException, so it must come first
        raise UpstreamError(f"Jikan returned malformed JSON for {query!r}: {e}") from e
    except requests.RequestException as e:
        raise UpstreamError(f"Could not reach Jikan for {query!r}: {e}") from e
    except ValueError as e:
        raise UpstreamError(f"Jikan returned malformed JSON for {query!r}: {e}") from e

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list) or not data:
        return Empty(query=query)
    return Found(query=query, anime=norm_anime_from_jikan(data[0]))


def to_tool_result(outcome: SearchOutcome) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=outcome.text)],
        structuredContent=outcome.structured_content().model_dump(mode="json"),
        isError=False,
    )


def anime_detail(query: str, jikan_base: str = JIKAN_BASE, timeout: Optional[float] = None) -> types.CallToolResult:
    try:
        outcome = search_anime(query, jikan_base, timeout)
    except UpstreamError as e:
        logger.warning("get-anime-detail failed for %r: %s", query, e)
        raise
    logger.info("get-anime-detail %r -> %s", query, type(outcome).__name__)
    return to_tool_result(outcome)


def tool_meta() -> dict:
    uri = ANIME_WIDGET.resource_uri
    return {"ui/resourceUri": uri, "ui": {"resourceUri": uri}}


def register_tools(mcp, jikan_base: str = JIKAN_BASE, timeout: Optional[float] = None):
    """Register the anime detail tool with FastMCP."""

    @mcp.tool(
        name=TOOL_NAME,
        title="Get anime detail",
        description="Search the anime database by title and show the best match in the anime detail widget.",
        annotations=types.ToolAnnotations(readOnlyHint=True, destructiveHint=False, openWorldHint=True),
        meta=tool_meta(),
    )
    async def get_anime_detail(
        query: Annotated[str, Field(min_length=1, description="Anime title to search for.")],
    ) -> types.CallToolResult:
        # requests blocks; keep it off the event loop serving other requests
        return await anyio.to_thread.run_sync(anime_detail, query, jikan_base, timeout)

    return get_anime_detail
