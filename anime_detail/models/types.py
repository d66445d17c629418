"""Type definitions for anime-detail-mcp."""

from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator


class AnimePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_url: Optional[str] = None
    url: Optional[str] = None
    title_english: Optional[str] = None
    rating: Optional[str] = None            # "PG-13 - Teens 13 or older"...
    score: Optional[float] = None           # 0.0-10.0, never clamped
    synopsis: Optional[str] = None
    year: Optional[int] = None
    genres: Tuple[str, ...] = ()
    studios: Tuple[str, ...] = ()

    @field_validator("genres", "studios", mode="before")
    @classmethod
    def keep_string_names(cls, v):
        # hosts may relay lists with stray non-string entries; drop them
        if isinstance(v, (list, tuple)):
            return tuple(x for x in v if isinstance(x, str))
        return v


class AnimeStructuredContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str
    anime: Optional[AnimePayload] = None


class Empty(BaseModel):
    """Search returned no results."""

    model_config = ConfigDict(frozen=True)

    query: str

    @property
    def text(self) -> str:
        return f'No anime found for "{self.query}".'

    def structured_content(self) -> AnimeStructuredContent:
        return AnimeStructuredContent(query=self.query, anime=None)


class Found(BaseModel):
    """First search hit, normalized."""

    model_config = ConfigDict(frozen=True)

    query: str
    anime: AnimePayload

    @property
    def text(self) -> str:
        title = self.anime.title_english or "Unknown title"
        return f'Showing results for "{self.query}": {title}.'

    def structured_content(self) -> AnimeStructuredContent:
        return AnimeStructuredContent(query=self.query, anime=self.anime)


SearchOutcome = Union[Empty, Found]
