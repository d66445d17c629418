"""HTTP client and network functions for anime-detail-mcp."""

import logging

import requests

# Constants
DEFAULT_TIMEOUT = 15
UA = "anime-detail-mcp/0.1"

logger = logging.getLogger(__name__)


def _req(method: str, url: str, **kw) -> requests.Response:
    """Single request with the package User-Agent. No retries."""
    timeout = kw.pop("timeout", None) or DEFAULT_TIMEOUT
    headers = {"User-Agent": UA, **kw.pop("headers", {})}
    logger.debug("%s %s", method, url)
    return requests.request(method, url, timeout=timeout, headers=headers, **kw)


def http_get(url: str, **kw) -> requests.Response:
    return _req("GET", url, **kw)
