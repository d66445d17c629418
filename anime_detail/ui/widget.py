"""Anime detail widget view state.

The widget receives three events from its host (tool input, partial tool
input, tool result) and keeps exactly one state value. Handlers run one at a
time in delivery order; a new result simply replaces whatever came before.

This model is the contract the built browser bundle (served as
ui://widget/anime-detail-widget.html) implements; the shipped HTML is only a
placeholder for that bundle.
"""

import logging
from dataclasses import dataclass
from html import escape
from typing import Any, Mapping, Optional, Protocol, Union

from pydantic import ValidationError

from ..core.errors import HostConnectionError, RenderableError
from ..models.types import AnimeStructuredContent
from .card import CardProps, render_card

NO_DETAILS = "No anime details were returned."
LINK_REJECTED = "Host rejected ui/open-link request."

logger = logging.getLogger(__name__)


class HostBridge(Protocol):
    def open_link(self, url: str) -> None:
        """Ask the host to open `url`; raises if the host refuses."""


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    query: str
    card: Optional[CardProps] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Ready:
    query: str
    card: CardProps
    url: Optional[str] = None


@dataclass(frozen=True)
class Failed:
    query: str
    message: str
    card: Optional[CardProps] = None
    url: Optional[str] = None


WidgetState = Union[Idle, Loading, Ready, Failed]


def _query_of(params: Optional[Mapping[str, Any]]) -> Optional[str]:
    args = (params or {}).get("arguments")
    q = args.get("query") if isinstance(args, Mapping) else None
    return q if isinstance(q, str) and q.strip() else None


class AnimeWidget:
    def __init__(self) -> None:
        self.state: WidgetState = Idle()
        self.bridge: Optional[HostBridge] = None
        self.init_error: Optional[HostConnectionError] = None

    # host lifecycle

    def connect(self, bridge: HostBridge) -> None:
        self.bridge = bridge
        self.init_error = None

    def fail(self, exc: BaseException) -> None:
        self.bridge = None
        self.init_error = exc if isinstance(exc, HostConnectionError) else HostConnectionError(str(exc))

    @property
    def connected(self) -> bool:
        return self.bridge is not None

    # shared view fields

    @property
    def query(self) -> str:
        return "" if isinstance(self.state, Idle) else self.state.query

    @property
    def card(self) -> Optional[CardProps]:
        return None if isinstance(self.state, Idle) else self.state.card

    @property
    def url(self) -> Optional[str]:
        return None if isinstance(self.state, Idle) else self.state.url

    @property
    def can_open_link(self) -> bool:
        return self.card is not None and self.url is not None

    # inbound events

    def on_tool_input(self, params: Optional[Mapping[str, Any]]) -> None:
        q = _query_of(params)
        if q is not None:
            self.state = Loading(query=q, card=self.card, url=self.url)

    on_tool_input_partial = on_tool_input

    def on_tool_result(self, params: Optional[Mapping[str, Any]]) -> None:
        raw = (params or {}).get("structuredContent")
        try:
            content = AnimeStructuredContent.model_validate(raw)
        except ValidationError:
            logger.debug("tool-result without usable structuredContent: %r", raw)
            content = None

        query = content.query if content is not None else self.query
        if content is None or content.anime is None:
            self.state = Failed(query=query, message=NO_DETAILS, card=self.card, url=self.url)
            return

        anime = content.anime
        # the last known url survives a result that has none
        url = anime.url if anime.url is not None else self.url
        self.state = Ready(query=query, card=CardProps.from_payload(anime), url=url)

    def dispatch(self, event: str, params: Optional[Mapping[str, Any]]) -> None:
        handler = {
            "tool-input": self.on_tool_input,
            "tool-input-partial": self.on_tool_input_partial,
            "tool-result": self.on_tool_result,
        }.get(event)
        if handler is None:
            logger.debug("ignoring widget event %s", event)
            return
        handler(params)

    # outbound capability

    def open_external_link(self) -> bool:
        """Ask the host to open the detail page. Returns True if the host accepted."""
        if self.bridge is None or not self.can_open_link:
            return False
        try:
            self.bridge.open_link(self.url)
        except Exception as e:
            err = RenderableError(LINK_REJECTED)
            logger.warning("%s (%s)", err, e)
            self.state = Failed(query=self.query, message=str(err), card=self.card, url=self.url)
            return False
        return True

    # markup

    def render(self) -> str:
        if self.init_error is not None:
            return f'<div class="error">Error initializing widget: {escape(str(self.init_error))}</div>'
        if not self.connected:
            return '<div class="placeholder">Connecting to MCP host...</div>'

        parts = []
        if isinstance(self.state, Failed):
            parts.append(f'<div class="error">{escape(self.state.message)}</div>')
        if self.card is not None:
            parts.append(render_card(self.card, can_open_link=self.can_open_link))
        else:
            parts.append('<div class="placeholder">Waiting for anime data from the host...</div>')
        return "\n".join(parts)
