import asyncio
import urllib.parse

import pytest
import requests
from mcp.server.fastmcp.exceptions import ToolError

from anime_detail.core import http_client as hc
from anime_detail.core.config import Settings
from anime_detail.core.errors import UpstreamError
from anime_detail.models import Empty, Found
from anime_detail.server import create_app
from anime_detail.tools import details


class DummyResponse:
    def __init__(self, status_code=200, json_data=None, reason="OK", bad_json=False):
        self.status_code = status_code
        self.reason = reason
        self._json = json_data
        self._bad_json = bad_json

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._bad_json:
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)
        return self._json


def fake_jikan(monkeypatch, response, seen=None):
    def fake_request(method, url, timeout=None, headers=None, **kw):
        if seen is not None:
            seen.append(url)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(hc.requests, "request", fake_request)


def test_builds_jikan_url(monkeypatch):
    seen = []
    fake_jikan(monkeypatch, DummyResponse(200, {"data": []}), seen)

    details.search_anime("Fullmetal Alchemist: Brotherhood", jikan_base="https://jikan.test/v4")

    parts = urllib.parse.urlsplit(seen[0])
    assert parts.path == "/v4/anime"
    assert urllib.parse.parse_qs(parts.query) == {"q": ["Fullmetal Alchemist: Brotherhood"], "sfw": ["true"]}


def test_empty_data_is_not_an_error(monkeypatch):
    fake_jikan(monkeypatch, DummyResponse(200, {"data": []}))

    r = details.anime_detail("zzzz")
    assert r.isError is False
    assert r.structuredContent == {"query": "zzzz", "anime": None}
    assert r.content[0].text == 'No anime found for "zzzz".'


@pytest.mark.parametrize("body", [{}, {"data": None}, {"data": {"mal_id": 1}}, []])
def test_missing_data_is_empty(monkeypatch, body):
    fake_jikan(monkeypatch, DummyResponse(200, body))
    assert details.search_anime("x") == Empty(query="x")


def test_first_hit_is_normalized(monkeypatch):
    body = {"data": [
        {"title_english": "Naruto", "score": 8.2, "genres": [{"name": "Action"}]},
        {"title_english": "Naruto Shippuden"},
    ]}
    fake_jikan(monkeypatch, DummyResponse(200, body))

    r = details.anime_detail("naruto")
    anime = r.structuredContent["anime"]
    assert r.structuredContent["query"] == "naruto"
    assert anime["title_english"] == "Naruto"
    assert anime["score"] == 8.2
    assert anime["genres"] == ["Action"]
    assert anime["studios"] == []
    assert anime["url"] is None
    assert "Naruto" in r.content[0].text
    assert r.content[0].text == 'Showing results for "naruto": Naruto.'


def test_unknown_title_in_summary(monkeypatch):
    fake_jikan(monkeypatch, DummyResponse(200, {"data": [{"title": "Kimi no Na wa."}]}))

    outcome = details.search_anime("your name")
    assert isinstance(outcome, Found)
    assert outcome.text == 'Showing results for "your name": Unknown title.'


def test_upstream_500_raises(monkeypatch):
    fake_jikan(monkeypatch, DummyResponse(500, None, reason="Internal Server Error"))

    with pytest.raises(UpstreamError) as ei:
        details.anime_detail("naruto")
    assert ei.value.status_code == 500
    assert "Internal Server Error" in str(ei.value)


def test_transport_failure_raises_upstream_error(monkeypatch):
    fake_jikan(monkeypatch, requests.ConnectionError("network down"))

    with pytest.raises(UpstreamError) as ei:
        details.search_anime("naruto")
    assert ei.value.status_code is None
    assert isinstance(ei.value.__cause__, requests.ConnectionError)


def test_malformed_json_raises_upstream_error(monkeypatch):
    fake_jikan(monkeypatch, DummyResponse(200, bad_json=True))

    with pytest.raises(UpstreamError, match="malformed JSON"):
        details.search_anime("naruto")


@pytest.fixture
def app(tmp_path):
    return create_app(Settings(assets_dir=tmp_path, jikan_base="https://jikan.test/v4"))


def test_tool_registration(app):
    tools = asyncio.run(app.list_tools())
    tool = next(t for t in tools if t.name == "get-anime-detail")

    assert tool.inputSchema["required"] == ["query"]
    assert tool.inputSchema["properties"]["query"]["type"] == "string"
    assert tool.inputSchema["properties"]["query"]["minLength"] == 1
    assert tool.meta["ui/resourceUri"] == "ui://widget/anime-detail-widget.html"
    assert tool.annotations.readOnlyHint is True


def test_empty_query_rejected_before_handler(app, monkeypatch):
    seen = []
    fake_jikan(monkeypatch, DummyResponse(200, {"data": []}), seen)

    with pytest.raises(ToolError):
        asyncio.run(app.call_tool("get-anime-detail", {"query": ""}))
    assert seen == [], "La validación ocurre antes de llamar a Jikan"


def test_upstream_failure_surfaces_as_tool_error(app, monkeypatch):
    seen = []
    fake_jikan(monkeypatch, DummyResponse(500, None, reason="Internal Server Error"), seen)

    with pytest.raises(ToolError):
        asyncio.run(app.call_tool("get-anime-detail", {"query": "naruto"}))
    assert len(seen) == 1, "Sin reintentos"
    assert seen[0].startswith("https://jikan.test/v4/anime?")


def test_concurrent_calls_overlap(app, monkeypatch):
    import threading

    # both upstream calls must be in flight at once to get past the barrier
    barrier = threading.Barrier(2, timeout=5)
    seen = []

    def fake_request(method, url, timeout=None, headers=None, **kw):
        seen.append(url)
        barrier.wait()
        return DummyResponse(200, {"data": []})

    monkeypatch.setattr(hc.requests, "request", fake_request)

    async def both():
        await asyncio.gather(
            app.call_tool("get-anime-detail", {"query": "naruto"}),
            app.call_tool("get-anime-detail", {"query": "bleach"}),
        )

    asyncio.run(both())
    assert len(seen) == 2
    assert not barrier.broken, "Las llamadas a Jikan deben correr en paralelo"
