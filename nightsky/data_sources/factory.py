"""Factory helpers for choosing a forecast data source at startup."""

from __future__ import annotations

from nightsky import config
from nightsky.data_sources.base import CallableForecastDataSource, ForecastDataSource
from nightsky.data_sources.open_meteo_client import fetch_hourly_forecast
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> ForecastDataSource:
    """Instantiate the configured forecast data source."""
    settings = settings or config.settings
    source = (settings.forecast_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        logger.info("Using Open-Meteo data source")
        return CallableForecastDataSource(hourly_forecast=fetch_hourly_forecast)

    if source == "file":
        from .file_source import JsonFileForecastDataSource

        path = settings.forecast_file_path
        if not path:
            raise ValueError("forecast_file_path must be set for the file data source")
        logger.info("Using file data source at %s", path)
        return JsonFileForecastDataSource.from_path(path)

    raise ValueError(f"Unknown forecast source '{source}'")
