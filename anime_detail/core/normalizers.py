"""Normalization of raw Jikan search results."""

from numbers import Real
from typing import Any, Optional, Tuple

from ..models.types import AnimePayload


def _str(v: Any) -> Optional[str]:
    return v if isinstance(v, str) else None


def _names(items: Any) -> Tuple[str, ...]:
    if not isinstance(items, list):
        return ()
    return tuple(it["name"] for it in items if isinstance(it, dict) and isinstance(it.get("name"), str))


def norm_anime_from_jikan(m: Any) -> AnimePayload:
    """Map one element of Jikan's `data` array onto an AnimePayload.

    Missing or mistyped fields become None (or an empty tuple for
    genres/studios); this never raises for JSON input.
    """
    if not isinstance(m, dict):
        m = {}
    images = m.get("images")
    jpg = images.get("jpg") if isinstance(images, dict) else None
    score = m.get("score")
    year = m.get("year")
    return AnimePayload(
        image_url=_str(jpg.get("image_url")) if isinstance(jpg, dict) else None,
        url=_str(m.get("url")),
        title_english=_str(m.get("title_english")),
        rating=_str(m.get("rating")),
        score=float(score) if isinstance(score, Real) and not isinstance(score, bool) else None,
        synopsis=_str(m.get("synopsis")),
        year=year if isinstance(year, int) and not isinstance(year, bool) else None,
        genres=_names(m.get("genres")),
        studios=_names(m.get("studios")),
    )
