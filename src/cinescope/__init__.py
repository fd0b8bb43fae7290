"""Movie discovery core backed by the TMDB API."""

__version__ = "0.1.0"
