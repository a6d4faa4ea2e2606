"""Sun and moon figures for a night, computed with astral.

`compute_astro_info` is the default astronomy provider injected into the
forecast service. Any callable with the same signature can replace it.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Optional

from astral import Depression, Observer
from astral import moon as astral_moon
from astral import sun as astral_sun

from nightsky.domain import AstroInfo, MoonInfo, SunTimes
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ephemeris")

AstronomyProvider = Callable[[float, float, date, tzinfo], AstroInfo]

# astral reports the moon phase on a 0..28 day scale.
ASTRAL_PHASE_PERIOD = 28.0

# Upper bound (in astral phase days) of each named phase.
_MOON_PHASES = (
    (3.5, "New Moon", "🌑"),
    (7.0, "Waxing Crescent", "🌒"),
    (10.5, "First Quarter", "🌓"),
    (14.0, "Waxing Gibbous", "🌔"),
    (17.5, "Full Moon", "🌕"),
    (21.0, "Waning Gibbous", "🌖"),
    (24.5, "Last Quarter", "🌗"),
)
_LAST_PHASE = ("Waning Crescent", "🌘")


def _safe_event(func: Callable[..., datetime | None], *args, event: str, **kwargs) -> Optional[datetime]:
    """Run an astral event function; None when the event does not occur that day."""
    try:
        return func(*args, **kwargs)
    except ValueError as exc:
        logger.debug("Astral could not compute %s: %s", event, exc)
        return None


def get_sun_times(latitude: float, longitude: float, day: date, tz: tzinfo) -> SunTimes:
    """Sunset and astronomical dusk on `day`, astronomical dawn and sunrise on the next day."""
    observer = Observer(latitude=latitude, longitude=longitude)
    next_day = day + timedelta(days=1)

    return SunTimes(
        sunset=_safe_event(astral_sun.sunset, observer, day, tzinfo=tz, event="sunset"),
        dusk=_safe_event(astral_sun.dusk, observer, day, depression=Depression.ASTRONOMICAL,
                         tzinfo=tz, event="dusk"),
        dawn=_safe_event(astral_sun.dawn, observer, next_day, depression=Depression.ASTRONOMICAL,
                         tzinfo=tz, event="dawn"),
        sunrise=_safe_event(astral_sun.sunrise, observer, next_day, tzinfo=tz, event="sunrise"),
    )


def moon_phase_name(phase_day: float) -> tuple[str, str]:
    """Return (name, emoji) for an astral phase day (0 = new, ~14 = full)."""
    for upper, name, emoji in _MOON_PHASES:
        if phase_day < upper:
            return name, emoji
    return _LAST_PHASE


def moon_illumination(phase_day: float) -> float:
    """Illuminated fraction of the disc in percent for a phase day."""
    angle = 2 * math.pi * phase_day / ASTRAL_PHASE_PERIOD
    return round((1 - math.cos(angle)) / 2 * 100, 1)


def get_moon_info(latitude: float, longitude: float, day: date, tz: tzinfo) -> MoonInfo:
    """Phase, illumination and rise/set times of the moon on `day`."""
    observer = Observer(latitude=latitude, longitude=longitude)
    phase_day = float(astral_moon.phase(day))
    name, emoji = moon_phase_name(phase_day)

    return MoonInfo(
        phase_day=phase_day,
        phase_name=name,
        phase_emoji=emoji,
        illumination=moon_illumination(phase_day),
        moonrise=_safe_event(astral_moon.moonrise, observer, day, tzinfo=tz, event="moonrise"),
        moonset=_safe_event(astral_moon.moonset, observer, day, tzinfo=tz, event="moonset"),
    )


def compute_astro_info(latitude: float, longitude: float, day: date, tz: tzinfo) -> AstroInfo:
    """Default astronomy provider."""
    return AstroInfo(
        sun=get_sun_times(latitude, longitude, day, tz),
        moon=get_moon_info(latitude, longitude, day, tz),
    )
