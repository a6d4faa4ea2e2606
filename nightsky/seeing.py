"""Heuristic per-hour quality scores for telescope observing.

Both scores are proxies built from surface weather, not measurements of
atmospheric turbulence. The weights and clamps are fixed: consumers rely on
the exact bucket boundaries.
"""

from __future__ import annotations

import math

SEEING_MIN = 1
SEEING_MAX = 5

_TEMP_WEIGHT = 0.25
_WIND_WEIGHT = 0.40
_HUMIDITY_WEIGHT = 0.15
_DEW_POINT_WEIGHT = 0.20


def round_half_up(value: float) -> int:
    """Round halves away from zero (Python's round() would go to even)."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def _clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a value to [lower, upper]."""
    return max(lower, min(upper, value))


def calculate_seeing_index(temperature: float, dew_point: float, wind_speed: float, humidity: float) -> int:
    """
    Estimate seeing on a 1-5 scale.

    Steadiness degrades with wind (km/h), humidity (%) and a wide
    temperature/dew-point spread.
    """
    spread = abs(temperature - dew_point)
    temp_factor = _clamp((15 - spread) / 15, 0.1, 1.0)
    wind_factor = _clamp(1 - wind_speed / 25, 0.1, 1.0)
    humidity_factor = _clamp(1 - humidity / 100, 0.1, 1.0)
    dew_point_factor = _clamp((10 - spread) / 10, 0.1, 1.0)

    weighted = (
        _TEMP_WEIGHT * temp_factor
        + _WIND_WEIGHT * wind_factor
        + _HUMIDITY_WEIGHT * humidity_factor
        + _DEW_POINT_WEIGHT * dew_point_factor
    )
    return round_half_up(max(SEEING_MIN, weighted * SEEING_MAX))


def calculate_sky_quality_index(
    cloud_cover: int,
    humidity: int,
    wind_speed: float,
    temperature: float,
    dew_point: float,
    seeing: int,
) -> int:
    """
    Overall 0-5 sky rating for an hour.

    Cloud cover and humidity contribute in whole steps (15 % and 20 %), the
    other inputs linearly. The result is truncated, not rounded.
    """
    temp_diff = abs(temperature - 15)
    dew_point_diff = abs(temperature - dew_point)

    clouds_factor = 1 - int(cloud_cover / 15)
    humidity_factor = 5 - int(humidity / 20)
    wind_factor = 5 - wind_speed / 10
    temp_factor = 5 - temp_diff / 10
    dew_point_factor = 5 - dew_point_diff / 5
    seeing_factor = 5 - seeing

    quality = (
        0.5 * clouds_factor
        + 0.2 * humidity_factor
        + 0.2 * wind_factor
        + 0.1 * temp_factor
        + 0.15 * dew_point_factor
        + 0.5 * seeing_factor
    )
    return int(_clamp(quality, 0, 5))
