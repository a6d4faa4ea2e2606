"""Fetch hourly forecasts and daily sun times from the Open-Meteo API."""
from __future__ import annotations

from typing import Dict

import requests

from nightsky import config
from nightsky.data_sources.http import shared_session
from nightsky.models import WeatherPayload
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="open_meteo_client")

OPEN_METEO_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"

HOURLY_VARIABLES = [
    "precipitation_probability",
    "dew_point_2m",
    "temperature_2m",
    "relative_humidity_2m",
    "cloud_cover",
    "cloud_cover_low",
    "cloud_cover_mid",
    "cloud_cover_high",
    "wind_speed_10m",
    "wind_direction_10m",
]

# Informational: night boundaries are computed by the ephemeris, not read from here.
DAILY_VARIABLES = ["sunrise", "sunset"]

# Units the analysis engine assumes (metric defaults of the API).
EXPECTED_HOURLY_UNITS: Dict[str, str] = {
    "temperature_2m": "°C",
    "dew_point_2m": "°C",
    "relative_humidity_2m": "%",
    "precipitation_probability": "%",
    "cloud_cover": "%",
    "cloud_cover_low": "%",
    "cloud_cover_mid": "%",
    "cloud_cover_high": "%",
    "wind_speed_10m": "km/h",
    "wind_direction_10m": "°",
}

# Spellings the API is known to use for the same unit.
ALLOWED_HOURLY_UNIT_SYNONYMS = {
    "relative_humidity_2m": {"%", "percent"},
    "precipitation_probability": {"%", "percent"},
    "cloud_cover": {"%", "percent"},
    "cloud_cover_low": {"%", "percent"},
    "cloud_cover_mid": {"%", "percent"},
    "cloud_cover_high": {"%", "percent"},
    "wind_speed_10m": {"km/h", "kmh"},
    "wind_direction_10m": {"°", "deg", "degrees"},
}

# Built on first use so importing the module never touches the filesystem.
session: requests.Session | None = None


def _get_session() -> requests.Session:
    global session
    if session is None:
        session = shared_session()
    return session


def _warn_on_unexpected_units(units: Dict[str, str], *, context: str) -> None:
    """Log a warning if Open-Meteo returns units the engine does not assume."""
    if not units:
        return
    for field, expected in EXPECTED_HOURLY_UNITS.items():
        actual = units.get(field)
        if not actual or actual == expected:
            continue
        allowed = ALLOWED_HOURLY_UNIT_SYNONYMS.get(field, set())
        if actual not in allowed:
            logger.warning(
                "Unexpected Open-Meteo unit for %s: %s (expected %s)", field, actual, expected,
                extra={"context": context, "field": field, "unit": actual, "expected": expected},
            )


def fetch_hourly_forecast(
    latitude: float,
    longitude: float,
    *,
    timezone: str = "auto",
    forecast_days: int | None = None,
) -> WeatherPayload:
    """Fetch `forecast_days` of hourly weather plus daily sunrise/sunset in local time."""
    days = forecast_days or config.settings.forecast_days
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "hourly": ",".join(HOURLY_VARIABLES),
        "daily": ",".join(DAILY_VARIABLES),
        "timezone": timezone,
        "forecast_days": days,
        "models": "best_match",
    }

    logger.info("Fetching Open-Meteo forecast for %.4f,%.4f (%d days)", latitude, longitude, days)
    resp = _get_session().get(OPEN_METEO_WEATHER_URL, params=params, timeout=config.settings.http_timeout_seconds)
    resp.raise_for_status()

    payload = WeatherPayload.model_validate(resp.json())
    _warn_on_unexpected_units(payload.hourly_units, context="weather_hourly")
    logger.debug("Received %d hourly samples (timezone=%s)", len(payload.hourly.time), payload.timezone)
    return payload
