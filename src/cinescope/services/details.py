from __future__ import annotations

import asyncio
import logging

from cinescope.core.generation import RequestGenerations
from cinescope.models.movie import Movie, MovieDetails
from cinescope.models.results import LoadResult
from cinescope.services.tmdb import GatewayError, TMDBGateway

logger = logging.getLogger(__name__)

DETAILS_STREAM = "details"
TRAILER_STREAM = "trailer"


class MovieDetailsLoader:
    """Details and trailer for the movie the user has opened."""

    def __init__(self, gateway: TMDBGateway):
        self.gateway = gateway
        self.movie: Movie | None = None
        self.details: LoadResult[MovieDetails] = LoadResult()
        self.trailer_url: LoadResult[str] = LoadResult()
        self.loading = False
        self._generations = RequestGenerations()

    async def open(
        self, movie: Movie
    ) -> tuple[LoadResult[MovieDetails], LoadResult[str]]:
        """Load details and trailer for ``movie``.

        The returned results always belong to ``movie``. ``self.details`` and
        ``self.trailer_url`` only track the most recently opened movie.
        """
        self.movie = movie
        self.details = LoadResult()
        self.trailer_url = LoadResult()
        details, trailer = await asyncio.gather(
            self._load_details(movie), self._load_trailer(movie)
        )
        return details, trailer

    def close(self) -> None:
        self.movie = None
        self.details = LoadResult()
        self.trailer_url = LoadResult()
        self.loading = False
        self._generations.invalidate(DETAILS_STREAM)
        self._generations.invalidate(TRAILER_STREAM)

    async def _load_details(self, movie: Movie) -> LoadResult[MovieDetails]:
        generation = self._generations.issue(DETAILS_STREAM)
        self.loading = True
        try:
            details = await self.gateway.get_movie_details(movie.id)
            result = LoadResult(value=details)
        except GatewayError as e:
            logger.warning("Error fetching movie details for %s: %s", movie.id, e.message)
            result = LoadResult(error=e.message)

        if self._generations.is_current(DETAILS_STREAM, generation):
            self.details = result
            self.loading = False
        return result

    async def _load_trailer(self, movie: Movie) -> LoadResult[str]:
        generation = self._generations.issue(TRAILER_STREAM)
        try:
            videos = await self.gateway.get_movie_videos(movie.id)
            url = TMDBGateway.trailer_url(TMDBGateway.find_trailer(videos))
            result = LoadResult(value=url)
        except GatewayError as e:
            logger.warning("Error fetching trailer for %s: %s", movie.id, e.message)
            result = LoadResult(error=e.message)

        if self._generations.is_current(TRAILER_STREAM, generation):
            self.trailer_url = result
        return result
