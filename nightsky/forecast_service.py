"""Turn raw forecast payloads into per-hour records and a night report."""
from __future__ import annotations

import datetime as dt
from typing import Callable, List, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from nightsky import config
from nightsky.assessment_engine import analyze_night, summarize_night
from nightsky.data_sources import ForecastDataSource, build_data_source
from nightsky.domain import ForecastHour, NightReport
from nightsky.ephemeris import AstronomyProvider, compute_astro_info
from nightsky.models import HourlyWeather
from nightsky.seeing import calculate_seeing_index, calculate_sky_quality_index
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="forecast_service")

OPEN_METEO_TIME_FORMAT = "%Y-%m-%dT%H:%M"


def _value_at(values: Sequence[Optional[float]], index: int, cast: Callable[[float], float | int]):
    """Element `index` of an array, or zero when the array is short or holds null."""
    if index < len(values) and values[index] is not None:
        return cast(values[index])
    return cast(0)


def _parse_local_time(raw: str, tz: dt.tzinfo | None) -> dt.datetime | None:
    """Interpret an Open-Meteo local time string as being in `tz`."""
    try:
        naive = dt.datetime.strptime(raw, OPEN_METEO_TIME_FORMAT)
    except (TypeError, ValueError):
        return None
    return naive.replace(tzinfo=tz) if tz is not None else naive


def _epoch(tz: dt.tzinfo | None) -> dt.datetime:
    return dt.datetime(1970, 1, 1, tzinfo=tz)


def build_forecast_hours(hourly: HourlyWeather, *, tz: dt.tzinfo | None = None) -> List[ForecastHour]:
    """
    Build one ForecastHour per entry of `hourly.time`, in source order.

    Value arrays shorter than the time array (or holding nulls) read as zero.
    A timestamp that does not parse keeps its slot, with the epoch as time
    and `timestamp_valid=False`, so it can never fall inside a night.
    """
    hours: List[ForecastHour] = []
    for i, raw_time in enumerate(hourly.time):
        parsed = _parse_local_time(raw_time, tz)
        if parsed is None:
            logger.warning("Unparseable forecast timestamp %r at index %d", raw_time, i)

        temperature = _value_at(hourly.temperature_2m, i, float)
        dew_point = _value_at(hourly.dew_point_2m, i, float)
        wind_speed = _value_at(hourly.wind_speed_10m, i, float)
        humidity = _value_at(hourly.relative_humidity_2m, i, int)
        cloud_cover = _value_at(hourly.cloud_cover, i, int)

        seeing = calculate_seeing_index(temperature, dew_point, wind_speed, humidity)
        sky_quality = calculate_sky_quality_index(cloud_cover, humidity, wind_speed, temperature, dew_point, seeing)

        time_val = parsed or _epoch(tz)
        hours.append(
            ForecastHour(
                time=time_val,
                hour=time_val.hour,
                cloud_cover=cloud_cover,
                cloud_cover_low=_value_at(hourly.cloud_cover_low, i, int),
                cloud_cover_mid=_value_at(hourly.cloud_cover_mid, i, int),
                cloud_cover_high=_value_at(hourly.cloud_cover_high, i, int),
                temperature=temperature,
                dew_point=dew_point,
                wind_speed=wind_speed,
                wind_direction=_value_at(hourly.wind_direction_10m, i, float),
                humidity=humidity,
                precipitation_probability=_value_at(hourly.precipitation_probability, i, int),
                seeing=seeing,
                sky_quality=sky_quality,
                timestamp_valid=parsed is not None,
            )
        )
    return hours


def upcoming_hours(hours: Sequence[ForecastHour], now: dt.datetime, count: int = 24) -> List[ForecastHour]:
    """The first `count` hours strictly after `now` (empty if the forecast is stale)."""
    future = [h for h in hours if h.timestamp_valid and h.time > now]
    return future[:count]


def resolve_timezone(name: str | None) -> dt.tzinfo:
    """ZoneInfo for an Open-Meteo timezone name, UTC when missing or unknown."""
    if not name:
        return dt.timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; falling back to UTC", name)
        return dt.timezone.utc


def get_night_report(
    latitude: float,
    longitude: float,
    *,
    day: dt.date | None = None,
    data_source: ForecastDataSource | None = None,
    astronomy: AstronomyProvider = compute_astro_info,
    settings: config.Settings | None = None,
    place_name: str | None = None,
    now: dt.datetime | None = None,
) -> NightReport:
    """
    Fetch the forecast for a location and analyse the night starting on `day`.

    `day` defaults to today in the forecast's timezone. The `data_source` and
    `astronomy` arguments let callers inject offline providers.
    """
    settings = settings or config.settings
    ds = data_source or build_data_source(settings)

    payload = ds.fetch_hourly_forecast(
        latitude,
        longitude,
        timezone=settings.timezone,
        forecast_days=settings.forecast_days,
    )
    tz = resolve_timezone(payload.timezone)
    generated_at = now or dt.datetime.now(tz)
    day = day or generated_at.astimezone(tz).date()

    astro = astronomy(latitude, longitude, day, tz)
    hours = build_forecast_hours(payload.hourly, tz=tz)

    if astro.sun.sunset is None or astro.sun.sunrise is None:
        logger.warning("No sunset/sunrise on %s at %.4f,%.4f; night is empty", day, latitude, longitude)
        night = summarize_night([])
    else:
        night = analyze_night(
            hours,
            astro.sun.sunset,
            astro.sun.sunrise,
            cloud_cover_threshold=settings.good_cloud_cover_threshold,
            min_consecutive_hours=settings.min_consecutive_good_hours,
        )

    logger.info(
        "Analysed %d night hours out of %d (window found: %s)",
        night.hour_count, len(hours), night.best_window.found,
    )

    return NightReport(
        latitude=latitude,
        longitude=longitude,
        timezone=payload.timezone,
        place_name=place_name,
        day=day,
        generated_at=generated_at,
        astro=astro,
        hours=hours,
        night=night,
    )
