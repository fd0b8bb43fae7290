from pydantic import ValidationError
from pydantic_settings import BaseSettings

from cinescope.constants.storage import FAVORITES_KEY


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class Settings(BaseSettings):
    # TMDB credentials, must be set in .env or the environment
    TMDB_API_KEY: str
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p"
    TMDB_LANGUAGE: str = "pt-BR"
    TMDB_TIMEOUT: float = 10.0

    DATABASE_URL: str = "sqlite:///cinescope.db"
    FAVORITES_KEY: str = FAVORITES_KEY
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


def load_settings(env_file: str | None = ".env") -> Settings:
    try:
        settings = Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(
            "TMDB API key is not configured. Add TMDB_API_KEY to your .env file."
        ) from e

    if not settings.TMDB_API_KEY.strip():
        raise ConfigurationError(
            "TMDB API key is not configured. Add TMDB_API_KEY to your .env file."
        )
    return settings
