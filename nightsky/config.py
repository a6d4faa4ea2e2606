"""Application configuration pulled from environment variables via pydantic."""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


def _default_favorites_path() -> Path:
    return Path.home() / ".config" / "nightsky" / "favorites.json"


def _default_cache_path() -> Path:
    return Path.home() / ".cache" / "nightsky" / "http_cache"


class Settings(BaseSettings):
    """Environment-driven configuration for the nightsky tool."""
    model_config = SettingsConfigDict(env_prefix="NIGHTSKY_", extra="ignore")

    forecast_source: str = "open_meteo"  # options: open_meteo, file
    forecast_file_path: Path | None = None
    forecast_days: int = 7
    timezone: str = "auto"
    good_cloud_cover_threshold: int = 30
    min_consecutive_good_hours: int = 2
    http_timeout_seconds: float = 10.0
    cache_path: Path = _default_cache_path()
    cache_expire_seconds: int = 3600
    geocoder_lang: str = "en"
    geocoder_limit: int = 10
    favorites_path: Path = _default_favorites_path()
    log_level: str = "WARNING"
    table_hours: int = 24

    @field_validator("forecast_source", mode="after")
    @classmethod
    def normalize_source(cls, v: str) -> str:
        """Accept any casing/whitespace for the source name."""
        return str(v).strip().lower()

    @field_validator("min_consecutive_good_hours", mode="after")
    @classmethod
    def positive_run_length(cls, v: int) -> int:
        """A window needs at least one hour."""
        if v < 1:
            raise ValueError("min_consecutive_good_hours must be >= 1")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return str(v).upper()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
