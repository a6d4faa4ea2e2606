import itertools

import pytest

from nightsky.seeing import calculate_seeing_index, calculate_sky_quality_index, round_half_up


def test_calm_dry_saturated_spread_is_best():
    assert calculate_seeing_index(10.0, 10.0, 0.0, 0) == 5


def test_typical_night_value():
    # factors: temp 13/15, wind 1.0, humidity 0.5, dew 0.8 -> 0.8517 * 5 = 4.26
    assert calculate_seeing_index(10.0, 8.0, 0.0, 50) == 4


def test_worst_conditions_floor_at_one():
    assert calculate_seeing_index(30.0, 0.0, 60.0, 100) == 1


@pytest.mark.parametrize(
    "value,expected",
    [(0.5, 1), (1.49, 1), (2.5, 3), (3.5, 4), (4.4999, 4), (-2.5, -3)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_seeing_always_in_range():
    temps = (-20.0, 0.0, 12.5, 35.0)
    dews = (-25.0, 0.0, 12.0)
    winds = (0.0, 5.0, 24.9, 80.0)
    humidities = (0, 45, 100)
    for t, d, w, h in itertools.product(temps, dews, winds, humidities):
        assert 1 <= calculate_seeing_index(t, d, w, h) <= 5


def test_seeing_non_increasing_in_wind():
    for t, d, h in [(10.0, 8.0, 50), (5.0, -5.0, 80), (15.0, 15.0, 10)]:
        scores = [calculate_seeing_index(t, d, w, h) for w in range(0, 40)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_sky_quality_typical():
    # 0.5*1 + 0.2*3 + 0.2*5 + 0.1*5 + 0.15*5 + 0.5*0 = 3.35
    assert calculate_sky_quality_index(0, 50, 0.0, 15.0, 15.0, 5) == 3


def test_sky_quality_uses_whole_cloud_steps():
    # 14 % still counts as the clearest step, 15 % drops a full step
    assert calculate_sky_quality_index(14, 50, 0.0, 15.0, 15.0, 5) == 3
    assert calculate_sky_quality_index(15, 50, 0.0, 15.0, 15.0, 5) == 2


def test_sky_quality_clamped():
    assert calculate_sky_quality_index(0, 0, 0.0, 15.0, 15.0, 1) == 5
    assert calculate_sky_quality_index(100, 90, 30.0, 0.0, -2.0, 2) == 0
