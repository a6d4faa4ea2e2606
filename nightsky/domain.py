"""Domain vocabulary and strict schemas for night-sky observation forecasts.

This module defines the contract between the numeric analysis engine and
whatever renders its results: per-hour records, observation windows, the
night summary and the sun/moon figures that frame it. No interpretation
logic lives here.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class _FrozenModel(_StrictBaseModel):
    """Strict model that cannot be mutated once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)


# Compass points in 45 degree sectors, clockwise from north.
CARDINAL_DIRECTIONS: Tuple[str, ...] = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


class ForecastHour(_FrozenModel):
    """One hourly sample with its derived quality scores."""
    time: datetime
    hour: int = Field(ge=0, le=23)
    cloud_cover: int = 0
    cloud_cover_low: int = 0
    cloud_cover_mid: int = 0
    cloud_cover_high: int = 0
    temperature: float = 0.0  # C
    dew_point: float = 0.0  # C
    wind_speed: float = 0.0  # km/h
    wind_direction: float = 0.0  # degrees
    humidity: int = 0
    precipitation_probability: int = 0
    seeing: int = Field(ge=1, le=5)
    sky_quality: int = Field(default=0, ge=0, le=5)
    timestamp_valid: bool = True


class TimeRange(_FrozenModel):
    """
    Start and end hour-of-day labels of a window.

    The labels are not monotonic across midnight (22 -> 1), so the datetimes
    of the first and last hour are carried alongside.
    """
    start: int = Field(ge=0, le=23)
    end: int = Field(ge=0, le=23)
    start_time: datetime | None = None
    end_time: datetime | None = None


class BestObservationWindow(_FrozenModel):
    """First run of clear-enough hours found during the night, if any."""
    time_range: TimeRange | None = None
    lowest_cloud_cover: int | None = None
    hour_count: int = 0

    @property
    def found(self) -> bool:
        return self.time_range is not None


class NightForecast(_FrozenModel):
    """Night-level aggregates over the hours between sunset and sunrise."""
    best_window: BestObservationWindow = Field(default_factory=BestObservationWindow)
    extreme_cloud_cover: int = 0
    display_cloud_cover: int = 0
    nightly_temperature: int = 0
    nightly_humidity: int = 0
    nightly_wind_speed: int = 0
    nightly_dew_point: int = 0
    max_precipitation_probability: int = 0
    wind_direction: int | None = None
    wind_direction_label: str | None = None
    seeing_index: int = 0
    hour_count: int = 0


class SunTimes(_FrozenModel):
    """Sun events framing one night; None when the sun never reaches the event."""
    sunset: datetime | None = None
    dusk: datetime | None = None  # astronomical dusk, same evening
    dawn: datetime | None = None  # astronomical dawn, next morning
    sunrise: datetime | None = None  # next morning


class MoonInfo(_FrozenModel):
    """Moon phase and rise/set times for the day."""
    phase_day: float = Field(ge=0.0, lt=30.0)
    phase_name: str
    phase_emoji: str
    illumination: float = Field(ge=0.0, le=100.0)
    moonrise: datetime | None = None
    moonset: datetime | None = None


class AstroInfo(_FrozenModel):
    """Everything the ephemeris provides for a night."""
    sun: SunTimes
    moon: MoonInfo


class Place(_FrozenModel):
    """A named location with coordinates."""
    name: str
    address: str = ""
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    def same_place(self, other: "Place") -> bool:
        """Places are identified by name and exact coordinates."""
        return (
            self.name == other.name
            and self.latitude == other.latitude
            and self.longitude == other.longitude
        )


class NightReport(_StrictBaseModel):
    """Full payload handed to the presentation layer."""
    latitude: float
    longitude: float
    timezone: str | None = None
    place_name: str | None = None
    day: date
    generated_at: datetime | None = None
    astro: AstroInfo
    hours: List[ForecastHour] = Field(default_factory=list)
    night: NightForecast = Field(default_factory=NightForecast)
