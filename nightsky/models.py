"""Pydantic models for the raw Open-Meteo forecast payload.

Field names follow the API's JSON keys. Arrays are kept exactly as received:
they may be shorter than `time` or hold nulls, and the forecast builder is
responsible for masking both.

Daily sunrise/sunset are kept for reference only; the night boundaries come
from the ephemeris.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _PayloadModel(BaseModel):
    """Payload models ignore keys we do not request."""

    model_config = ConfigDict(extra="ignore")


class HourlyWeather(_PayloadModel):
    """Parallel hourly arrays, index-aligned to `time`."""
    time: List[str] = Field(default_factory=list)
    temperature_2m: List[Optional[float]] = Field(default_factory=list)
    relative_humidity_2m: List[Optional[float]] = Field(default_factory=list)
    dew_point_2m: List[Optional[float]] = Field(default_factory=list)
    precipitation_probability: List[Optional[float]] = Field(default_factory=list)
    cloud_cover: List[Optional[float]] = Field(default_factory=list)
    cloud_cover_low: List[Optional[float]] = Field(default_factory=list)
    cloud_cover_mid: List[Optional[float]] = Field(default_factory=list)
    cloud_cover_high: List[Optional[float]] = Field(default_factory=list)
    wind_speed_10m: List[Optional[float]] = Field(default_factory=list)
    wind_direction_10m: List[Optional[float]] = Field(default_factory=list)


class DailyWeather(_PayloadModel):
    """Daily sunrise/sunset strings as reported by Open-Meteo."""
    time: List[str] = Field(default_factory=list)
    sunrise: List[str] = Field(default_factory=list)
    sunset: List[str] = Field(default_factory=list)


class WeatherPayload(_PayloadModel):
    """Top-level forecast response."""
    latitude: float = 0.0
    longitude: float = 0.0
    elevation: float | None = None
    timezone: str | None = None
    timezone_abbreviation: str | None = None
    hourly: HourlyWeather = Field(default_factory=HourlyWeather)
    hourly_units: Dict[str, str] = Field(default_factory=dict)
    daily: DailyWeather = Field(default_factory=DailyWeather)
