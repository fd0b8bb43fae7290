import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinescope import __version__
from cinescope.api.catalog import router as catalog_router
from cinescope.api.favorites import router as favorites_router
from cinescope.api.health import router as health_router
from cinescope.config import load_settings
from cinescope.core.storage import SqlKeyValueStore
from cinescope.services.catalog import CatalogController
from cinescope.services.details import MovieDetailsLoader
from cinescope.services.favorites import FavoritesStore
from cinescope.services.tmdb import TMDBGateway

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing TMDB key is fatal: ConfigurationError aborts startup
    settings = load_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    gateway = TMDBGateway.from_settings(settings)
    storage = SqlKeyValueStore.from_url(settings.DATABASE_URL)

    app.state.gateway = gateway
    app.state.favorites = FavoritesStore(storage, key=settings.FAVORITES_KEY)
    app.state.catalog = CatalogController(gateway)
    app.state.details = MovieDetailsLoader(gateway)

    await app.state.catalog.initialize()
    logger.info(
        "CineScope ready: language=%s favorites=%d movies=%d",
        settings.TMDB_LANGUAGE,
        app.state.favorites.count,
        len(app.state.catalog.movies),
    )

    yield
    await gateway.aclose()
    storage.dispose()


def create_app() -> FastAPI:
    app = FastAPI(title="CineScope", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173"],
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    app.include_router(health_router)
    app.include_router(catalog_router)
    app.include_router(favorites_router)
    return app


app = create_app()
