from __future__ import annotations

import json
import logging

from pydantic import TypeAdapter, ValidationError

from cinescope.constants.storage import FAVORITES_KEY
from cinescope.core.storage import KeyValueStore
from cinescope.models.movie import Movie, normalize_movie_id

logger = logging.getLogger(__name__)


_MOVIE_LIST = TypeAdapter(list[Movie])


class FavoritesStore:
    """Movies the user has marked, persisted wholesale under one key.

    Entries are snapshots taken when the movie was favorited, kept in the
    order they were added.
    """

    def __init__(self, storage: KeyValueStore, key: str = FAVORITES_KEY):
        self.storage = storage
        self.key = key
        self._favorites: list[Movie] = self._load()

    def _load(self) -> list[Movie]:
        raw = self.storage.get(self.key)
        if raw is None:
            return []
        try:
            return _MOVIE_LIST.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Discarding unreadable favorites under %r: %s",
                self.key,
                e.errors(include_url=False)[:1],
            )
            return []

    def _persist(self) -> None:
        payload = [m.model_dump(mode="json") for m in self._favorites]
        self.storage.set(self.key, json.dumps(payload, ensure_ascii=False))

    @property
    def favorites(self) -> list[Movie]:
        return list(self._favorites)

    @property
    def count(self) -> int:
        return len(self._favorites)

    def is_favorite(self, movie_id: int | str) -> bool:
        movie_id = normalize_movie_id(movie_id)
        return any(m.id == movie_id for m in self._favorites)

    def add_to_favorites(self, movie: Movie) -> None:
        if self.is_favorite(movie.id):
            return
        self._favorites = [*self._favorites, movie]
        self._persist()

    def remove_from_favorites(self, movie_id: int | str) -> None:
        movie_id = normalize_movie_id(movie_id)
        self._favorites = [m for m in self._favorites if m.id != movie_id]
        self._persist()

    def toggle_favorite(self, movie: Movie) -> bool:
        """Flip membership; return True if the movie is now a favorite."""
        if self.is_favorite(movie.id):
            self.remove_from_favorites(movie.id)
            return False
        self.add_to_favorites(movie)
        logger.info("Added favorite: %s (%s)", movie.title, movie.id)
        return True
