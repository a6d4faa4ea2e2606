"""Replay a saved Open-Meteo response from disk (offline use, fixtures)."""
from __future__ import annotations

import json
from pathlib import Path

from nightsky.data_sources.base import ForecastDataSource
from nightsky.models import WeatherPayload
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/file_source")


class JsonFileForecastDataSource(ForecastDataSource):
    """Serve the same payload for every location; coordinates are not checked."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def from_path(cls, path: str | Path) -> "JsonFileForecastDataSource":
        """Build a source for `path`, failing early if the file is missing."""
        p = Path(path).expanduser()
        if not p.is_file():
            raise ValueError(f"Forecast file not found: {p}")
        return cls(p)

    def fetch_hourly_forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        timezone: str = "auto",
        forecast_days: int | None = None,
    ) -> WeatherPayload:
        """Load and validate the stored payload."""
        logger.info("Loading forecast payload from %s", self.path)
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        payload = WeatherPayload.model_validate(data)
        if payload.latitude != latitude or payload.longitude != longitude:
            logger.debug(
                "Stored payload is for %.4f,%.4f; requested %.4f,%.4f",
                payload.latitude, payload.longitude, latitude, longitude,
            )
        return payload
