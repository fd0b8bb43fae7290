from fastapi import APIRouter, Depends

from cinescope.api.dependencies import get_favorites
from cinescope.api.schemas import FavoritesView, ToggleResult
from cinescope.models.movie import Movie
from cinescope.services.favorites import FavoritesStore

router = APIRouter(prefix="/favorites")


@router.get("", response_model=FavoritesView)
async def list_favorites(favorites: FavoritesStore = Depends(get_favorites)):
    return FavoritesView(favorites=favorites.favorites, count=favorites.count)


@router.post("/toggle", response_model=ToggleResult)
async def toggle_favorite(
    movie: Movie, favorites: FavoritesStore = Depends(get_favorites)
):
    is_favorite = favorites.toggle_favorite(movie)
    return ToggleResult(movie_id=movie.id, is_favorite=is_favorite, count=favorites.count)


@router.delete("/{movie_id}", response_model=FavoritesView)
async def remove_favorite(
    movie_id: str, favorites: FavoritesStore = Depends(get_favorites)
):
    favorites.remove_from_favorites(movie_id)
    return FavoritesView(favorites=favorites.favorites, count=favorites.count)
