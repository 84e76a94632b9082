"""Tests for time-of-day weight profiles and edge cost strategies."""

from datetime import datetime

import pytest

from safety_aware_routing.algorithms.routing.cost_functions import (
    distance_cost,
    make_safety_cost,
    safety_cost,
    safety_score
)
from safety_aware_routing.config.routing_config import RoutingConfig
from safety_aware_routing.config.weight_profile_factory import (
    CostMode,
    Regime,
    is_daytime,
    resolve_hour,
    weight_profile_for_time
)
from safety_aware_routing.data.models import SegmentScores
from helpers import P1, P2, make_segment

NIGHT = weight_profile_for_time(22)
DAY = weight_profile_for_time(12)


@pytest.mark.parametrize("time,hour", [
    (None, 12),
    (0, 0),
    ("0", 0),
    (22, 22),
    ("7", 7),
    (" 18 ", 18),
    (18.9, 18),
    (25, 1),
    (-1, 23),
    ("2024-06-01T21:30:00", 21),
    (datetime(2024, 6, 1, 5, 15), 5),
    ("dusk", 12),
    ("nan", 12),
    ("inf", 12),
    ([], 12),
])
def test_resolve_hour(time, hour):
    assert resolve_hour(time) == hour


def test_default_hour_is_configurable():
    assert resolve_hour(None, RoutingConfig(default_hour=3)) == 3


@pytest.mark.parametrize("hour,day", [
    (6, False), (7, True), (12, True), (18, True), (19, False), (0, False), (23, False),
])
def test_day_window(hour, day):
    assert is_daytime(hour) is day


def test_profiles():
    assert NIGHT.regime is Regime.NIGHT and NIGHT.is_night
    assert NIGHT.light_weight == 2.0
    assert NIGHT.crime_multiplier == 1.5
    assert DAY.regime is Regime.DAY and not DAY.is_night
    assert DAY.light_weight == 0.1
    assert DAY.crime_multiplier == 1.0
    assert DAY.cost_mode is CostMode.EXPONENTIAL
    assert weight_profile_for_time(5, RoutingConfig.create_legacy_config()).cost_mode is CostMode.BONUS


def test_safety_score_weights():
    scores = SegmentScores(infra=9, light=9, crime=1, amenity=8, disruption=0)
    assert safety_score(scores, NIGHT) == pytest.approx(22.5 + 18 + 12 - 4.5)
    assert safety_score(scores, DAY) == pytest.approx(22.5 + 0.9 + 12 - 3)

    disrupted = SegmentScores(infra=0, light=0, crime=0, amenity=0, disruption=2)
    assert safety_score(disrupted, DAY) == pytest.approx(-4.0)


def test_distance_cost_is_the_length():
    assert distance_cost(make_segment('s', [P1, P2]), 0.42) == 0.42


@pytest.mark.parametrize("distance", [0.0, 1e-9, 0.05, 10.0])
@pytest.mark.parametrize("score", [-1e6, -100.0, 0.0, 100.0, 1e6])
def test_cost_is_strictly_positive(distance, score):
    cost = safety_cost(distance, score, NIGHT)
    assert cost > 0
    assert cost < float('inf')


@pytest.mark.parametrize("field", ['infra', 'light', 'amenity'])
def test_cost_decreases_with_positive_scores(field):
    cost = make_safety_cost(NIGHT)
    low = make_segment('s', [P1, P2], **{field: 2})
    high = make_segment('s', [P1, P2], **{field: 3})
    assert cost(high, 0.1) < cost(low, 0.1)


@pytest.mark.parametrize("field", ['crime', 'disruption'])
def test_cost_increases_with_negative_scores(field):
    cost = make_safety_cost(NIGHT)
    low = make_segment('s', [P1, P2], **{field: 2})
    high = make_segment('s', [P1, P2], **{field: 3})
    assert cost(high, 0.1) > cost(low, 0.1)


def test_night_weighs_light_and_crime_more():
    dark = make_segment('dark', [P1, P2], light=0, crime=9)
    day_cost = make_safety_cost(DAY)(dark, 0.1)
    night_cost = make_safety_cost(NIGHT)(dark, 0.1)
    assert night_cost > day_cost


def test_exponential_cost_values():
    assert safety_cost(0.1, 0.0, NIGHT) == pytest.approx(0.101)
    assert safety_cost(0.12, 48.0, NIGHT) == pytest.approx(0.001 + 0.12 * 0.0907180)


def test_bonus_cost_values():
    config = RoutingConfig.create_legacy_config()
    profile = weight_profile_for_time(22, config)
    assert safety_cost(0.5, 2.0, profile, config) == pytest.approx(0.3)
    assert safety_cost(0.5, 48.0, profile, config) == pytest.approx(0.1)
    assert safety_cost(0.07, -14.0, profile, config) == pytest.approx(1.47)


def test_config_validation():
    RoutingConfig().validate()
    RoutingConfig.create_legacy_config().validate()
    RoutingConfig.create_night_cautious_config().validate()

    with pytest.raises(ValueError, match="min_edge_cost"):
        RoutingConfig(min_edge_cost=0).validate()
    with pytest.raises(ValueError, match="cost_mode"):
        RoutingConfig(cost_mode='linear').validate()
    with pytest.raises(ValueError, match="day hours"):
        RoutingConfig(day_start_hour=19, day_end_hour=7).validate()
    with pytest.raises(ValueError, match="crime_weight"):
        RoutingConfig(crime_weight=1.0).validate()
