"""Data source factories for plugging different forecast backends."""

from .base import CallableForecastDataSource, ForecastDataSource
from .factory import build_data_source
from .file_source import JsonFileForecastDataSource
from .open_meteo_client import fetch_hourly_forecast
from .photon_client import search_places

__all__ = [
    "build_data_source",
    "JsonFileForecastDataSource",
    "ForecastDataSource",
    "CallableForecastDataSource",
    "fetch_hourly_forecast",
    "search_places",
]
