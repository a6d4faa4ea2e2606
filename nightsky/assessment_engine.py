"""Deterministic night analysis over a sequence of ForecastHour records.

The functions here restrict a forecast to the astronomical night, locate the
first usable observation window and aggregate night-level statistics. They
do no I/O and never mutate their inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from nightsky.domain import (
    CARDINAL_DIRECTIONS,
    BestObservationWindow,
    ForecastHour,
    NightForecast,
    TimeRange,
)
from nightsky.seeing import round_half_up

GOOD_CLOUD_COVER_THRESHOLD = 30
MIN_CONSECUTIVE_GOOD_HOURS = 2

# Mean resultant length below which the wind has no prevailing direction.
_DEGENERATE_RESULTANT = 1e-9

_AVERAGED_FIELDS = ("temperature", "humidity", "wind_speed", "dew_point")


def filter_night_hours(hours: Sequence[ForecastHour], sunset: datetime, sunrise: datetime) -> list[ForecastHour]:
    """Return the hours with sunset <= time <= sunrise, in their original order."""
    return [h for h in hours if sunset <= h.time <= sunrise]


@dataclass(frozen=True)
class _Run:
    """A run of consecutive good hours; confirmed once it is long enough."""
    first: ForecastHour
    last: ForecastHour
    length: int
    lowest_cloud_cover: int

    def extend(self, hour: ForecastHour) -> "_Run":
        return _Run(
            first=self.first,
            last=hour,
            length=self.length + 1,
            lowest_cloud_cover=min(self.lowest_cloud_cover, hour.cloud_cover),
        )

    def confirmed(self, min_hours: int) -> bool:
        return self.length >= min_hours


def find_best_observation_window(
    night_hours: Sequence[ForecastHour],
    *,
    cloud_cover_threshold: int = GOOD_CLOUD_COVER_THRESHOLD,
    min_consecutive_hours: int = MIN_CONSECUTIVE_GOOD_HOURS,
) -> BestObservationWindow:
    """
    Scan the night once and return the first run of at least
    `min_consecutive_hours` hours with cloud cover <= `cloud_cover_threshold`.

    The first confirmed run wins: the scan stops at the first cloudy hour after
    it, so a later, longer or clearer run is never considered.
    """
    run: _Run | None = None

    for hour in night_hours:
        if hour.cloud_cover <= cloud_cover_threshold:
            if run is None:
                run = _Run(first=hour, last=hour, length=1, lowest_cloud_cover=hour.cloud_cover)
            else:
                run = run.extend(hour)
            continue

        if run is not None and run.confirmed(min_consecutive_hours):
            break
        run = None

    if run is None or not run.confirmed(min_consecutive_hours):
        return BestObservationWindow()

    return BestObservationWindow(
        time_range=TimeRange(
            start=run.first.hour,
            end=run.last.hour,
            start_time=run.first.time,
            end_time=run.last.time,
        ),
        lowest_cloud_cover=run.lowest_cloud_cover,
        hour_count=run.length,
    )


def nightly_average(hours: Sequence[ForecastHour], field: str) -> float:
    """Arithmetic mean of a numeric field, 0.0 for an empty night."""
    if field not in _AVERAGED_FIELDS:
        raise ValueError(f"Unsupported field for nightly average: '{field}'")
    if not hours:
        return 0.0
    return sum(getattr(h, field) for h in hours) / len(hours)


def max_precipitation_probability(hours: Sequence[ForecastHour]) -> int:
    """Highest precipitation probability of the night, 0 if empty."""
    return max((h.precipitation_probability for h in hours), default=0)


def extreme_cloud_cover(hours: Sequence[ForecastHour]) -> int:
    """Highest cloud cover of the night, 0 if empty."""
    return max((h.cloud_cover for h in hours), default=0)


def mean_seeing_index(hours: Sequence[ForecastHour]) -> int:
    """Rounded mean of the hourly seeing scores, 0 if empty."""
    if not hours:
        return 0
    return round_half_up(sum(h.seeing for h in hours) / len(hours))


def mean_wind_direction(hours: Sequence[ForecastHour]) -> int | None:
    """
    Circular mean of the wind direction in whole degrees [0, 360).

    Hours with a negative reading are ignored. Returns None when no hour has
    a reading, or when the unit vectors cancel out (e.g. 0/90/180/270) and
    there is no prevailing direction.
    """
    x = 0.0
    y = 0.0
    count = 0
    for h in hours:
        if h.wind_direction < 0:
            continue
        radians = math.radians(h.wind_direction)
        x += math.cos(radians)
        y += math.sin(radians)
        count += 1

    if count == 0:
        return None
    if math.hypot(x, y) / count < _DEGENERATE_RESULTANT:
        return None

    degrees = math.degrees(math.atan2(y, x))
    return round_half_up((degrees + 360) % 360) % 360


def wind_direction_label(degrees: float | None) -> str | None:
    """Map degrees to one of 8 compass points, each sector centred on its point."""
    if degrees is None or degrees < 0:
        return None
    index = int(math.floor((degrees + 22.5) / 45)) % len(CARDINAL_DIRECTIONS)
    return CARDINAL_DIRECTIONS[index]


def summarize_night(
    night_hours: Sequence[ForecastHour],
    *,
    cloud_cover_threshold: int = GOOD_CLOUD_COVER_THRESHOLD,
    min_consecutive_hours: int = MIN_CONSECUTIVE_GOOD_HOURS,
) -> NightForecast:
    """Aggregate hours that are already restricted to the night."""
    best = find_best_observation_window(
        night_hours,
        cloud_cover_threshold=cloud_cover_threshold,
        min_consecutive_hours=min_consecutive_hours,
    )
    extreme = extreme_cloud_cover(night_hours)
    display = best.lowest_cloud_cover if best.found else extreme
    direction = mean_wind_direction(night_hours)

    return NightForecast(
        best_window=best,
        extreme_cloud_cover=extreme,
        display_cloud_cover=display,
        nightly_temperature=math.floor(nightly_average(night_hours, "temperature")),
        nightly_humidity=math.floor(nightly_average(night_hours, "humidity")),
        nightly_wind_speed=math.floor(nightly_average(night_hours, "wind_speed")),
        nightly_dew_point=math.floor(nightly_average(night_hours, "dew_point")),
        max_precipitation_probability=max_precipitation_probability(night_hours),
        wind_direction=direction,
        wind_direction_label=wind_direction_label(direction),
        seeing_index=mean_seeing_index(night_hours),
        hour_count=len(night_hours),
    )


def analyze_night(
    hours: Sequence[ForecastHour],
    sunset: datetime,
    sunrise: datetime,
    *,
    cloud_cover_threshold: int = GOOD_CLOUD_COVER_THRESHOLD,
    min_consecutive_hours: int = MIN_CONSECUTIVE_GOOD_HOURS,
) -> NightForecast:
    """Restrict a full forecast to [sunset, sunrise] and summarize it."""
    night_hours = filter_night_hours(hours, sunset, sunrise)
    return summarize_night(
        night_hours,
        cloud_cover_threshold=cloud_cover_threshold,
        min_consecutive_hours=min_consecutive_hours,
    )
