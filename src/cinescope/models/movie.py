from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def normalize_movie_id(value: int | str) -> int | str:
    """TMDB ids are integers; numeric strings ("272") are the same movie."""
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return value


class Genre(BaseModel):
    id: int
    name: str

    model_config = {"frozen": True, "extra": "ignore"}


class Movie(BaseModel):
    """A movie as listed by search/discover results."""

    id: int | str
    title: str
    original_title: str | None = None
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None  # ISO date, may be empty
    vote_average: float = Field(default=0.0, ge=0, le=10)
    vote_count: int = Field(default=0, ge=0)
    original_language: str = ""
    genre_ids: list[int] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return normalize_movie_id(value)

    model_config = {"frozen": True, "extra": "ignore"}


class MovieDetails(Movie):
    tagline: str | None = None
    runtime: int | None = Field(default=None, ge=0)
    # 0 means unreported by TMDB, not a literal zero
    budget: int = Field(default=0, ge=0)
    revenue: int = Field(default=0, ge=0)
    status: str = ""
    genres: list[Genre] = Field(default_factory=list)

    @property
    def reported_budget(self) -> int | None:
        return self.budget or None

    @property
    def reported_revenue(self) -> int | None:
        return self.revenue or None


class Video(BaseModel):
    type: str
    site: str
    key: str
    name: str = ""

    model_config = {"frozen": True, "extra": "ignore"}


class MoviePage(BaseModel):
    results: list[Movie] = Field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total_results: int = 0

    model_config = {"extra": "ignore"}
