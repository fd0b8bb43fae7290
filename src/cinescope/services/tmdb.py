from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from cinescope.config import ConfigurationError, Settings
from cinescope.constants.tmdb import BACKDROP_SIZE, POSTER_SIZE, YOUTUBE_WATCH_URL
from cinescope.models.filters import CatalogRequest, DiscoverRequest, SearchRequest
from cinescope.models.movie import Genre, MovieDetails, MoviePage, Video

logger = logging.getLogger(__name__)

_GENRES = TypeAdapter(list[Genre])
_VIDEOS = TypeAdapter(list[Video])


class GatewayError(Exception):
    """A TMDB call failed: transport error, non-2xx status or bad payload."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.message = message


class TMDBGateway:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.themoviedb.org/3",
        image_base_url: str = "https://image.tmdb.org/t/p",
        language: str = "pt-BR",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ConfigurationError("TMDB API key is not configured.")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.image_base_url = image_base_url.rstrip("/")
        self.language = language
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> TMDBGateway:
        return cls(
            api_key=settings.TMDB_API_KEY,
            base_url=settings.TMDB_BASE_URL,
            image_base_url=settings.TMDB_IMAGE_BASE_URL,
            language=settings.TMDB_LANGUAGE,
            timeout=settings.TMDB_TIMEOUT,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get(
        self, operation: str, path: str, params: dict[str, Any] | None = None
    ) -> dict:
        query = {"api_key": self.api_key, "language": self.language}
        query.update(params or {})

        try:
            response = await self.client.get(f"{self.base_url}{path}", params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error("TMDB %s failed on %s: %s", operation, path, e)
            raise GatewayError(operation, f"Failed to {operation}") from e
        except ValueError as e:
            logger.error("TMDB %s returned an undecodable body: %s", operation, e)
            raise GatewayError(operation, f"Failed to {operation}") from e

        if not isinstance(data, dict):
            raise GatewayError(operation, f"Failed to {operation}")
        logger.debug("TMDB request successful: %s", path)
        return data

    @staticmethod
    def _parse(operation: str, parser: type[BaseModel] | TypeAdapter, data: Any):
        try:
            if isinstance(parser, TypeAdapter):
                return parser.validate_python(data)
            return parser.model_validate(data)
        except ValidationError as e:
            logger.error("TMDB %s returned an unexpected payload: %s", operation, e)
            raise GatewayError(operation, f"Failed to {operation}") from e

    async def search_movies(self, query: str, page: int = 1) -> MoviePage:
        data = await self._get(
            "search movies", "/search/movie", {"query": query, "page": page}
        )
        return self._parse("search movies", MoviePage, data)

    async def discover_movies(self, request: DiscoverRequest) -> MoviePage:
        data = await self._get("discover movies", "/discover/movie", request.to_params())
        return self._parse("discover movies", MoviePage, data)

    async def fetch_page(self, request: CatalogRequest) -> MoviePage:
        if isinstance(request, SearchRequest):
            return await self.search_movies(request.query, request.page)
        return await self.discover_movies(request)

    async def get_popular_movies(self, page: int = 1) -> MoviePage:
        data = await self._get("fetch popular movies", "/movie/popular", {"page": page})
        return self._parse("fetch popular movies", MoviePage, data)

    async def get_genres(self) -> list[Genre]:
        data = await self._get("fetch genres", "/genre/movie/list")
        return self._parse("fetch genres", _GENRES, data.get("genres", []))

    async def get_movie_details(self, movie_id: int | str) -> MovieDetails:
        data = await self._get("fetch movie details", f"/movie/{movie_id}")
        return self._parse("fetch movie details", MovieDetails, data)

    async def get_movie_videos(self, movie_id: int | str) -> list[Video]:
        data = await self._get("fetch movie videos", f"/movie/{movie_id}/videos")
        return self._parse("fetch movie videos", _VIDEOS, data.get("results", []))

    @staticmethod
    def find_trailer(videos: list[Video]) -> Video | None:
        return next(
            (v for v in videos if v.type == "Trailer" and v.site == "YouTube"),
            None,
        )

    @staticmethod
    def trailer_url(video: Video | None) -> str | None:
        if video is None:
            return None
        return YOUTUBE_WATCH_URL.format(key=video.key)

    def image_url(self, path: str | None, size: str = POSTER_SIZE) -> str | None:
        return f"{self.image_base_url}/{size}{path}" if path else None

    def backdrop_url(self, path: str | None, size: str = BACKDROP_SIZE) -> str | None:
        return self.image_url(path, size)
