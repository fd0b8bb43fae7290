from __future__ import annotations

import asyncio
import logging

from cinescope.core.generation import RequestGenerations
from cinescope.models.filters import CatalogRequest, FilterOptions, build_catalog_request
from cinescope.models.movie import Genre, Movie, MoviePage
from cinescope.models.results import LoadResult
from cinescope.services.tmdb import GatewayError, TMDBGateway

logger = logging.getLogger(__name__)

# Independent request streams
CATALOG_STREAM = "catalog"
APPEND_STREAM = "append"
GENRES_STREAM = "genres"


class CatalogController:
    """Filter state, paginated results and the session genre cache.

    Gateway failures never escape this class: they become ``error`` (for
    catalog pages) or an empty ``LoadResult`` (for genres).
    """

    def __init__(self, gateway: TMDBGateway, filters: FilterOptions | None = None):
        self.gateway = gateway
        self.filters = filters or FilterOptions()
        self.movies: list[Movie] = []
        self.loading = False
        self.error: str | None = None
        self.current_page = 1
        self.total_pages = 1
        self.genres: list[Genre] = []
        self._genres_loaded = False
        self._generations = RequestGenerations()

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages

    async def initialize(self) -> None:
        await asyncio.gather(self.refetch(), self.load_genres())

    async def update_filters(self, **partial) -> None:
        self.filters = self.filters.merge(**partial)
        self.current_page = 1
        await self._fetch_first_page()

    async def refetch(self) -> None:
        await self._fetch_first_page()

    async def load_more(self) -> None:
        if self.loading or self.current_page >= self.total_pages:
            return

        next_page = self.current_page + 1
        generation = self._generations.issue(APPEND_STREAM)
        page = await self._request(
            APPEND_STREAM, generation, build_catalog_request(self.filters, next_page)
        )
        if page is None:
            return

        self.movies = [*self.movies, *page.results]
        self.current_page = next_page
        self.total_pages = max(page.total_pages, next_page)

    async def _fetch_first_page(self) -> None:
        generation = self._generations.issue(CATALOG_STREAM)
        # A new first page supersedes any append still in flight
        self._generations.invalidate(APPEND_STREAM)

        page = await self._request(
            CATALOG_STREAM, generation, build_catalog_request(self.filters, 1)
        )
        if page is None:
            if self._generations.is_current(CATALOG_STREAM, generation):
                # Shown movies no longer match the filters: nothing to page into
                # until a first page succeeds
                self.current_page = 1
                self.total_pages = 1
            return

        self.movies = list(page.results)
        self.current_page = 1
        self.total_pages = max(page.total_pages, 1)

    async def _request(
        self, stream: str, generation: int, request: CatalogRequest
    ) -> MoviePage | None:
        """Fetch one page; return it only if it is still the latest for its stream."""
        self.loading = True
        try:
            page = await self.gateway.fetch_page(request)
        except GatewayError as e:
            if not self._generations.is_current(stream, generation):
                logger.debug("Ignoring stale %s failure: %s", stream, e.message)
                return None
            logger.error("Catalog fetch failed (%s): %s", request, e.message)
            self.error = e.message
            self.loading = False
            return None

        if not self._generations.is_current(stream, generation):
            logger.debug("Discarding stale %s response for %s", stream, request)
            return None

        self.error = None
        self.loading = False
        return page

    async def load_genres(self) -> LoadResult[list[Genre]]:
        if self._genres_loaded:
            return LoadResult(value=list(self.genres))

        generation = self._generations.issue(GENRES_STREAM)
        try:
            genres = await self.gateway.get_genres()
        except GatewayError as e:
            logger.warning("Failed to fetch genres: %s", e.message)
            return LoadResult(value=[], error=e.message)

        if self._generations.is_current(GENRES_STREAM, generation):
            self.genres = genres
            self._genres_loaded = True
        return LoadResult(value=list(self.genres))

    def genre_names(self, movie: Movie) -> list[str]:
        names = {g.id: g.name for g in self.genres}
        return [names[gid] for gid in movie.genre_ids if gid in names]
