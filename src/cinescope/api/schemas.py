from pydantic import BaseModel, Field, field_validator

from cinescope.constants.tmdb import SORT_OPTIONS
from cinescope.models.movie import Movie, MovieDetails


class FilterUpdate(BaseModel):
    search_query: str | None = None
    genre: str | None = Field(default=None, pattern=r"^(\d+)?$")
    year: str | None = Field(default=None, pattern=r"^(\d{4})?$")
    sort_by: str | None = None

    @field_validator("sort_by")
    @classmethod
    def check_sort_key(cls, value: str | None) -> str | None:
        if value is not None and value not in SORT_OPTIONS:
            raise ValueError(f"sort_by must be one of: {', '.join(SORT_OPTIONS)}")
        return value


class FiltersOut(BaseModel):
    search_query: str
    genre: str
    year: str
    sort_by: str


class CatalogView(BaseModel):
    movies: list[Movie]
    filters: FiltersOut
    current_page: int
    total_pages: int
    has_more: bool
    loading: bool
    error: str | None = None


class FavoritesView(BaseModel):
    favorites: list[Movie]
    count: int


class ToggleResult(BaseModel):
    movie_id: int | str
    is_favorite: bool
    count: int


class MovieDetailView(BaseModel):
    movie: Movie
    details: MovieDetails | None = None
    details_error: str | None = None
    genres: list[str] = Field(default_factory=list)
    trailer_url: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    runtime: str | None = None
    budget: str | None = None
    revenue: str | None = None
    release_year: str
    is_favorite: bool
