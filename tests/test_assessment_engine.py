import datetime as dt
from zoneinfo import ZoneInfo

import pytest

from nightsky.assessment_engine import (
    analyze_night,
    filter_night_hours,
    mean_wind_direction,
    nightly_average,
    wind_direction_label,
)
from nightsky.domain import ForecastHour

TZ = ZoneInfo("UTC")
BASE = dt.datetime(2024, 1, 15, 12, 0, tzinfo=TZ)


def _hour(offset: int, **overrides):
    t = BASE + dt.timedelta(hours=offset)
    base = {"time": t, "hour": t.hour, "seeing": 3}
    base.update(overrides)
    return ForecastHour(**base)


def _hours_with_direction(directions):
    return [_hour(i, wind_direction=d) for i, d in enumerate(directions)]


def test_filter_keeps_exact_inclusive_slice_in_order():
    hours = [_hour(i) for i in range(24)]
    sunset = BASE + dt.timedelta(hours=5)
    sunrise = BASE + dt.timedelta(hours=19)

    night = filter_night_hours(hours, sunset, sunrise)

    assert night == [h for h in hours if sunset <= h.time <= sunrise]
    assert night[0].time == sunset
    assert night[-1].time == sunrise
    assert len(night) == 15


def test_filter_between_samples_excludes_neighbours():
    hours = [_hour(i) for i in range(6)]
    night = filter_night_hours(hours, BASE + dt.timedelta(minutes=90), BASE + dt.timedelta(minutes=250))
    assert [h.hour for h in night] == [14, 15, 16]


def test_filter_drops_hours_with_unparsed_timestamps():
    bad = ForecastHour(time=dt.datetime(1970, 1, 1, tzinfo=TZ), hour=0, seeing=3, timestamp_valid=False)
    hours = [_hour(0), bad, _hour(1)]
    night = filter_night_hours(hours, BASE, BASE + dt.timedelta(hours=1))
    assert bad not in night
    assert len(night) == 2


def test_empty_night_aggregates_to_zero():
    night = analyze_night([], BASE, BASE + dt.timedelta(hours=12))
    assert not night.best_window.found
    assert night.best_window.lowest_cloud_cover is None
    assert night.extreme_cloud_cover == 0
    assert night.display_cloud_cover == 0
    assert night.nightly_temperature == 0
    assert night.nightly_humidity == 0
    assert night.nightly_wind_speed == 0
    assert night.nightly_dew_point == 0
    assert night.max_precipitation_probability == 0
    assert night.seeing_index == 0
    assert night.hour_count == 0
    assert night.wind_direction is None
    assert night.wind_direction_label is None


def test_display_cloud_cover_uses_window_when_found():
    hours = [_hour(i, cloud_cover=c) for i, c in enumerate([40, 20, 15, 50])]
    night = analyze_night(hours, BASE, BASE + dt.timedelta(hours=3))
    assert night.best_window.found
    assert night.extreme_cloud_cover == 50
    assert night.display_cloud_cover == 15


def test_display_cloud_cover_falls_back_to_extreme():
    hours = [_hour(i, cloud_cover=c) for i, c in enumerate([40, 50, 35, 10])]
    night = analyze_night(hours, BASE, BASE + dt.timedelta(hours=3))
    assert not night.best_window.found
    assert night.display_cloud_cover == night.extreme_cloud_cover == 50


def test_night_statistics_only_cover_the_night():
    hours = [
        _hour(0, temperature=30.0, precipitation_probability=90),  # before sunset
        _hour(1, temperature=10.5, humidity=81, wind_speed=7.9, dew_point=-0.5, precipitation_probability=20, seeing=3),
        _hour(2, temperature=11.9, humidity=84, wind_speed=9.0, dew_point=-1.0, precipitation_probability=40, seeing=4),
        _hour(3, temperature=30.0, precipitation_probability=100),  # after sunrise
    ]
    night = analyze_night(hours, BASE + dt.timedelta(hours=1), BASE + dt.timedelta(hours=2))

    assert night.hour_count == 2
    assert night.nightly_temperature == 11  # 11.2
    assert night.nightly_humidity == 82  # 82.5
    assert night.nightly_wind_speed == 8  # 8.45
    assert night.nightly_dew_point == -1  # -0.75 floors down
    assert night.max_precipitation_probability == 40
    assert night.seeing_index == 4  # 3.5 rounds half up


def test_nightly_average_rejects_unknown_field():
    with pytest.raises(ValueError):
        nightly_average([_hour(0)], "cloud_cover_low")


def test_circular_mean_wraps_around_north():
    assert mean_wind_direction(_hours_with_direction([350.0, 10.0])) == 0
    assert mean_wind_direction(_hours_with_direction([80.0, 100.0])) == 90
    assert mean_wind_direction(_hours_with_direction([270.0, 300.0, 330.0])) == 300


def test_circular_mean_ignores_negative_readings():
    assert mean_wind_direction(_hours_with_direction([-1.0, 90.0])) == 90
    assert mean_wind_direction(_hours_with_direction([-1.0, -5.0])) is None


def test_balanced_directions_have_no_prevailing_wind():
    hours = _hours_with_direction([0.0, 90.0, 180.0, 270.0])
    assert mean_wind_direction(hours) is None
    night = analyze_night(hours, BASE, BASE + dt.timedelta(hours=3))
    assert night.wind_direction is None
    assert night.wind_direction_label is None


@pytest.mark.parametrize(
    "degrees,label",
    [
        (0, "N"),
        (22.4, "N"),
        (22.5, "NE"),
        (40, "NE"),  # centred sectors: 40 degrees is north-east, not north
        (90, "E"),
        (135, "SE"),
        (180, "S"),
        (225, "SW"),
        (270, "W"),
        (337.4, "NW"),
        (337.5, "N"),
        (359, "N"),
    ],
)
def test_wind_direction_label_uses_half_sector_offset(degrees, label):
    assert wind_direction_label(degrees) == label


def test_wind_direction_label_absent():
    assert wind_direction_label(None) is None
    assert wind_direction_label(-10) is None


def test_night_wind_direction_and_label():
    hours = _hours_with_direction([200.0, 230.0])
    night = analyze_night(hours, BASE, BASE + dt.timedelta(hours=1))
    assert night.wind_direction == 215
    assert night.wind_direction_label == "SW"
