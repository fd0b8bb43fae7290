from fastapi import Request

from cinescope.services.catalog import CatalogController
from cinescope.services.details import MovieDetailsLoader
from cinescope.services.favorites import FavoritesStore
from cinescope.services.tmdb import TMDBGateway


def get_gateway(request: Request) -> TMDBGateway:
    return request.app.state.gateway


def get_catalog(request: Request) -> CatalogController:
    return request.app.state.catalog


def get_favorites(request: Request) -> FavoritesStore:
    return request.app.state.favorites


def get_details_loader(request: Request) -> MovieDetailsLoader:
    return request.app.state.details
