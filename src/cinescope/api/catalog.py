import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from cinescope.api.dependencies import (
    get_catalog,
    get_details_loader,
    get_favorites,
    get_gateway,
)
from cinescope.api.schemas import (
    CatalogView,
    FiltersOut,
    FilterUpdate,
    MovieDetailView,
)
from cinescope.core.formatting import format_currency, format_runtime, release_year
from cinescope.models.movie import Genre, MoviePage, normalize_movie_id
from cinescope.services.catalog import CatalogController
from cinescope.services.details import MovieDetailsLoader
from cinescope.services.favorites import FavoritesStore
from cinescope.services.tmdb import GatewayError, TMDBGateway

logger = logging.getLogger(__name__)

router = APIRouter()


def _catalog_view(catalog: CatalogController) -> CatalogView:
    f = catalog.filters
    return CatalogView(
        movies=catalog.movies,
        filters=FiltersOut(
            search_query=f.search_query, genre=f.genre, year=f.year, sort_by=f.sort_by
        ),
        current_page=catalog.current_page,
        total_pages=catalog.total_pages,
        has_more=catalog.has_more,
        loading=catalog.loading,
        error=catalog.error,
    )


@router.get("/movies", response_model=CatalogView)
async def list_movies(catalog: CatalogController = Depends(get_catalog)):
    return _catalog_view(catalog)


@router.patch("/movies/filters", response_model=CatalogView)
async def update_filters(
    update: FilterUpdate, catalog: CatalogController = Depends(get_catalog)
):
    partial = {k: v for k, v in update.model_dump(exclude_unset=True).items() if v is not None}
    logger.info("Filters updated: %s", partial)
    await catalog.update_filters(**partial)
    return _catalog_view(catalog)


@router.post("/movies/more", response_model=CatalogView)
async def load_more(catalog: CatalogController = Depends(get_catalog)):
    await catalog.load_more()
    return _catalog_view(catalog)


@router.post("/movies/refresh", response_model=CatalogView)
async def refresh(catalog: CatalogController = Depends(get_catalog)):
    await catalog.refetch()
    return _catalog_view(catalog)


@router.get("/genres", response_model=list[Genre])
async def list_genres(catalog: CatalogController = Depends(get_catalog)):
    result = await catalog.load_genres()
    return result.value or []


@router.get("/movies/popular", response_model=MoviePage)
async def popular_movies(
    page: int = Query(default=1, ge=1, le=500),
    gateway: TMDBGateway = Depends(get_gateway),
):
    try:
        return await gateway.get_popular_movies(page)
    except GatewayError as e:
        raise HTTPException(status_code=502, detail=e.message)


@router.get("/movies/{movie_id}", response_model=MovieDetailView)
async def movie_details(
    movie_id: str,
    catalog: CatalogController = Depends(get_catalog),
    favorites: FavoritesStore = Depends(get_favorites),
    loader: MovieDetailsLoader = Depends(get_details_loader),
    gateway: TMDBGateway = Depends(get_gateway),
):
    wanted = normalize_movie_id(movie_id)
    movie = next(
        (m for m in [*catalog.movies, *favorites.favorites] if m.id == wanted),
        None,
    )
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not in catalog or favorites")

    details_result, trailer_result = await loader.open(movie)
    details = details_result.value
    if details is not None and details.id != movie.id:
        logger.warning("Details for %s came back for %s, ignoring", movie.id, details.id)
        details = None

    if details is not None:
        genres = [g.name for g in details.genres]
    else:
        genres = catalog.genre_names(movie)

    return MovieDetailView(
        movie=movie,
        details=details,
        details_error=details_result.error,
        genres=genres,
        trailer_url=trailer_result.value,
        poster_url=gateway.image_url(movie.poster_path),
        backdrop_url=gateway.backdrop_url(movie.backdrop_path),
        runtime=format_runtime(details.runtime) if details else None,
        budget=format_currency(details.reported_budget) if details else None,
        revenue=format_currency(details.reported_revenue) if details else None,
        release_year=release_year(movie.release_date),
        is_favorite=favorites.is_favorite(movie.id),
    )
