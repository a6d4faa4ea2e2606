"""Interfaces and helpers for forecast data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from nightsky.models import WeatherPayload


class ForecastDataSource(Protocol):
    """Interface for anything that can provide an hourly forecast payload."""

    def fetch_hourly_forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        timezone: str = "auto",
        forecast_days: int | None = None,
    ) -> WeatherPayload:
        """Return hourly arrays (and daily sun times) for a location."""
        ...


@dataclass
class CallableForecastDataSource(ForecastDataSource):
    """Wrap a plain function so it can be swapped for a different backend."""

    hourly_forecast: Callable[..., WeatherPayload]

    def fetch_hourly_forecast(self, *args, **kwargs) -> WeatherPayload:
        """Delegate to the configured callable."""
        return self.hourly_forecast(*args, **kwargs)
