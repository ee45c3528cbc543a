import random

import pytest

from conftest import FixedRandom, make_route
from safety.models import SafetyLevel
from safety.policy import SafetyPolicy, default_safety_policy
from safety.scoring import (
    SafetyScorer,
    format_distance,
    format_duration,
    legend,
    safety_color,
    safety_label,
)


def test_short_simple_steady_route_hits_ceiling():
    """
    1.5 km, 3 steps, 45 km/h: 7.5 + 1.0 + 0.5 + 0.5 = 9.5 before the random term.
    """
    route = make_route(distance_m=1500.0, duration_s=120.0, step_count=3)

    assert SafetyScorer(rng=FixedRandom(0.0)).base_score(route) == pytest.approx(9.5)

    # the perturbation can never push it past the ceiling
    assert SafetyScorer(rng=FixedRandom(0.5)).score(route) == 9.5
    assert SafetyScorer(rng=FixedRandom(-0.5)).score(route) == 9.0


def test_long_complex_route_is_penalised():
    # 12 km, 20 steps, 12 km/h -> 7.5 - 1.5 - 0.5 = 5.5
    route = make_route(distance_m=12000.0, duration_s=3600.0, step_count=20)
    assert SafetyScorer(rng=FixedRandom(0.0)).score(route) == 5.5


def test_speed_band_is_exclusive():
    # exactly 30 km/h, mid distance, mid steps -> base only
    route = make_route(distance_m=3000.0, duration_s=360.0, step_count=10)
    assert SafetyScorer(rng=FixedRandom(0.0)).score(route) == 7.5

    # 36 km/h earns the bonus
    route = make_route(distance_m=3000.0, duration_s=300.0, step_count=10)
    assert SafetyScorer(rng=FixedRandom(0.0)).score(route) == 8.0


def test_zero_duration_gets_no_speed_bonus():
    route = make_route(distance_m=3000.0, duration_s=0.0, step_count=10)
    assert SafetyScorer(rng=FixedRandom(0.0)).score(route) == 7.5


def test_perturbation_is_drawn_from_policy_range():
    rng = FixedRandom(0.25)
    route = make_route(distance_m=3000.0, duration_s=360.0, step_count=10)

    assert SafetyScorer(rng=rng).score(route) == 7.8  # 7.75 rounds to one decimal
    assert rng.calls == [(-0.5, 0.5)]


def test_scores_stay_in_range_and_one_decimal():
    scorer = SafetyScorer(rng=random.Random(1234))
    for distance_m in (0.0, 500.0, 1999.0, 5000.0, 10001.0, 80000.0):
        for duration_s in (0.0, 60.0, 600.0, 7200.0):
            for step_count in (0, 4, 10, 16, 60):
                value = scorer.score(make_route(distance_m, duration_s, step_count))
                assert 3.0 <= value <= 9.5
                assert round(value, 1) == value


def test_floor_clamp():
    policy = SafetyPolicy(base_score=2.0)
    route = make_route(distance_m=3000.0, duration_s=360.0, step_count=10)
    assert SafetyScorer(policy=policy, rng=FixedRandom(-0.5)).score(route) == 3.0


@pytest.mark.parametrize("score, level", [
    (9.5, SafetyLevel.SAFE),
    (8.0, SafetyLevel.SAFE),
    (7.9, SafetyLevel.MODERATE),
    (5.0, SafetyLevel.MODERATE),
    (4.9, SafetyLevel.RISKY),
    (3.0, SafetyLevel.RISKY),
])
def test_labels_and_colors_share_thresholds(score, level):
    policy = default_safety_policy()
    expected_color = {
        SafetyLevel.SAFE: policy.safe_color,
        SafetyLevel.MODERATE: policy.moderate_color,
        SafetyLevel.RISKY: policy.risky_color,
    }[level]

    assert safety_label(score) == level
    assert safety_color(score) == expected_color


def test_legend_matches_label_mapping():
    entries = legend()

    assert [entry.level for entry in entries] == [SafetyLevel.SAFE, SafetyLevel.MODERATE, SafetyLevel.RISKY]
    assert [entry.range_text for entry in entries] == ["8.0+", "5.0-7.9", "<5.0"]
    for entry, sample in zip(entries, (8.5, 6.0, 4.0)):
        assert entry.color == safety_color(sample)


def test_score_route_fills_labels():
    scored = SafetyScorer(rng=FixedRandom(0.0)).score_route(make_route(1500.0, 120.0, 3), index=2)

    assert scored.index == 2
    assert scored.safety_score == 9.5
    assert scored.safety_label == SafetyLevel.SAFE
    assert scored.safety_color == default_safety_policy().safe_color
    assert scored.distance_label == "1.5 km"
    assert scored.duration_label == "2 min"


@pytest.mark.parametrize("meters, text", [(0, "0 m"), (850.4, "850 m"), (1500, "1.5 km"), (12345, "12.3 km")])
def test_format_distance(meters, text):
    assert format_distance(meters) == text


@pytest.mark.parametrize("seconds, text", [(30, "1 min"), (720, "12 min"), (3600, "1 h"), (3900, "1 h 5 min")])
def test_format_duration(seconds, text):
    assert format_duration(seconds) == text


def test_policy_validation_rejects_inverted_range():
    with pytest.raises(ValueError):
        SafetyPolicy(min_score=9.5, max_score=3.0).validate()
