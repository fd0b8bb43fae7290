import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("TMDB_API_KEY", "test-tmdb")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402

from cinescope.models.movie import Movie, MoviePage  # noqa: E402


def make_movie(movie_id, title: str | None = None, **fields) -> Movie:
    return Movie(id=movie_id, title=title or f"Movie {movie_id}", **fields)


def make_page(ids, page: int = 1, total_pages: int = 1) -> MoviePage:
    return MoviePage(
        results=[make_movie(i) for i in ids],
        page=page,
        total_pages=total_pages,
        total_results=len(ids),
    )


@pytest.fixture
def batman():
    return make_movie(
        272,
        "Batman Begins",
        overview="Driven by tragedy, billionaire Bruce Wayne...",
        poster_path="/8RW2runSEc34IwKN2D1aPcJd2UL.jpg",
        backdrop_path="/lh5lbisD4oDbEKgUxoRaZU8HVrk.jpg",
        release_date="2005-06-10",
        vote_average=7.7,
        vote_count=20000,
        original_language="en",
        genre_ids=[28, 80, 18],
    )
