from cinescope.models.filters import (
    CatalogRequest,
    DiscoverRequest,
    FilterOptions,
    SearchRequest,
    build_catalog_request,
)
from cinescope.models.movie import Genre, Movie, MovieDetails, MoviePage, Video
from cinescope.models.results import LoadResult
from cinescope.models.storage import Base, KeyValueEntry

__all__ = [
    "Base",
    "CatalogRequest",
    "DiscoverRequest",
    "FilterOptions",
    "Genre",
    "KeyValueEntry",
    "LoadResult",
    "Movie",
    "MovieDetails",
    "MoviePage",
    "SearchRequest",
    "Video",
    "build_catalog_request",
]
