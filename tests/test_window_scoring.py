import datetime as dt
from zoneinfo import ZoneInfo

from nightsky.assessment_engine import find_best_observation_window
from nightsky.domain import ForecastHour

TZ = ZoneInfo("Europe/Paris")
START = dt.datetime(2024, 3, 10, 20, 0, tzinfo=TZ)


def _night(clouds):
    hours = []
    for i, c in enumerate(clouds):
        t = START + dt.timedelta(hours=i)
        hours.append(ForecastHour(time=t, hour=t.hour, cloud_cover=c, seeing=3))
    return hours


def test_first_qualifying_window_wins():
    result = find_best_observation_window(_night([40, 20, 15, 50, 10, 10, 10, 60]))
    assert result.found
    assert (result.time_range.start, result.time_range.end) == (21, 22)
    assert result.lowest_cloud_cover == 15
    assert result.hour_count == 2


def test_confirmed_window_keeps_extending_on_good_hours():
    result = find_best_observation_window(_night([10, 20, 25, 30, 40, 5, 5]))
    assert (result.time_range.start, result.time_range.end) == (20, 23)
    assert result.lowest_cloud_cover == 10
    assert result.hour_count == 4


def test_threshold_is_inclusive():
    result = find_best_observation_window(_night([30, 30]))
    assert result.found
    assert result.lowest_cloud_cover == 30


def test_short_runs_are_discarded():
    result = find_best_observation_window(_night([10, 50, 20, 60, 0]))
    assert not result.found
    assert result.time_range is None
    assert result.lowest_cloud_cover is None


def test_literal_zero_cloud_cover_is_distinct_from_absent():
    result = find_best_observation_window(_night([0, 0]))
    assert result.found
    assert result.lowest_cloud_cover == 0


def test_window_across_midnight_carries_datetimes():
    result = find_best_observation_window(_night([80, 80, 80, 10, 10, 10, 90]))
    tr = result.time_range
    assert (tr.start, tr.end) == (23, 1)
    assert tr.start_time == START + dt.timedelta(hours=3)
    assert tr.end_time == START + dt.timedelta(hours=5)
    assert tr.end_time > tr.start_time


def test_custom_threshold_and_run_length():
    hours = _night([45, 35, 50, 35, 35, 35])
    assert not find_best_observation_window(hours).found

    loose = find_best_observation_window(hours, cloud_cover_threshold=40, min_consecutive_hours=3)
    assert (loose.time_range.start, loose.time_range.end) == (23, 1)

    single = find_best_observation_window(hours, cloud_cover_threshold=40, min_consecutive_hours=1)
    assert (single.time_range.start, single.time_range.end) == (21, 21)
    assert single.lowest_cloud_cover == 35


def test_empty_night_has_no_window():
    result = find_best_observation_window([])
    assert not result.found
    assert result.hour_count == 0
