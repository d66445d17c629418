"""Anime card markup."""

from dataclasses import dataclass
from html import escape
from typing import Optional, Tuple

from ..models.types import AnimePayload


@dataclass(frozen=True)
class CardProps:
    image_url: Optional[str] = None
    title_english: Optional[str] = None
    rating: Optional[str] = None
    score: Optional[float] = None
    synopsis: Optional[str] = None
    year: Optional[int] = None
    genres: Optional[Tuple[str, ...]] = None
    studios: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_payload(cls, anime: AnimePayload) -> "CardProps":
        return cls(
            image_url=anime.image_url,
            title_english=anime.title_english,
            rating=anime.rating,
            score=anime.score,
            synopsis=anime.synopsis,
            year=anime.year,
            genres=anime.genres or None,
            studios=anime.studios or None,
        )


def genres_label(genres: Tuple[str, ...]) -> str:
    if len(genres) > 2:
        return f"{' • '.join(genres[:2])} +{len(genres) - 2}"
    return " • ".join(genres)


def _chip(kind: str, label: str) -> str:
    return f'<span class="chip chip-{kind}">{escape(label)}</span>'


def render_card(props: CardProps, can_open_link: bool = False) -> str:
    parts = ['<article class="anime-card">']

    if props.score is not None:
        parts.append(f'<div class="score">{props.score:.1f}</div>')

    if props.image_url:
        alt = f"{props.title_english or 'Anime'} poster"
        parts.append(
            f'<img class="poster" src="{escape(props.image_url)}" alt="{escape(alt)}" '
            'loading="lazy" referrerpolicy="no-referrer" />'
        )
    else:
        parts.append('<div class="poster poster-empty">No Poster</div>')

    parts.append(f'<h2 class="title">{escape(props.title_english or "Anime Title")}</h2>')
    if props.studios:
        parts.append(f'<p class="studios">{escape(", ".join(props.studios))}</p>')

    if props.title_english and can_open_link:
        parts.append('<button type="button" class="open-link" data-action="open-external-link">Open in MyAnimeList</button>')

    chips = []
    if props.year:
        chips.append(_chip("year", str(props.year)))
    if props.rating:
        chips.append(_chip("rating", props.rating))
    if props.genres:
        chips.append(_chip("genres", genres_label(props.genres)))
    if chips:
        parts.append(f'<div class="chips">{"".join(chips)}</div>')

    if props.synopsis:
        parts.append(f'<p class="synopsis">{escape(props.synopsis)}</p>')

    parts.append("</article>")
    return "\n".join(parts)
