"""Bundled asset store, exposed as a fetch-like requests.Session."""

import mimetypes
from pathlib import Path
from typing import Protocol, Union
from urllib.parse import unquote, urljoin, urlsplit

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

# The store expects absolute URLs, so paths resolve against a placeholder origin.
ASSETS_ORIGIN = "https://assets.invalid"


class AssetsSource(Protocol):
    def get(self, url: str, **kw) -> requests.Response: ...


def asset_url(path: str) -> str:
    return urljoin(ASSETS_ORIGIN + "/", path)


class LocalAssetsAdapter(BaseAdapter):
    """Serves files under `root` for requests to the placeholder origin."""

    def __init__(self, root: Union[str, Path]):
        super().__init__()
        self.root = Path(root).resolve()

    def _respond(self, request, status: int, reason: str, body: bytes = b"", ctype: str = "text/plain") -> requests.Response:
        r = requests.Response()
        r.status_code = status
        r.reason = reason
        r.url = request.url
        r.request = request
        r.headers = CaseInsensitiveDict({"Content-Type": ctype, "Content-Length": str(len(body))})
        r.encoding = "utf-8"
        r._content = body if request.method != "HEAD" else b""
        return r

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        if request.method not in ("GET", "HEAD"):
            return self._respond(request, 405, "Method Not Allowed")

        rel = unquote(urlsplit(request.url).path).lstrip("/")
        target = (self.root / rel).resolve()
        if not target.is_relative_to(self.root) or not target.is_file():
            return self._respond(request, 404, "Not Found")

        ctype = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return self._respond(request, 200, "OK", target.read_bytes(), ctype)

    def close(self):
        pass


def local_assets(root: Union[str, Path]) -> requests.Session:
    s = requests.Session()
    s.mount(ASSETS_ORIGIN + "/", LocalAssetsAdapter(root))
    return s
