import random

import pytest

from footycast.config import HOME_ADVANTAGE, MAX_POINTS, MAX_POSITION
from footycast.engine.estimator import (
    compute_factors,
    estimate,
    form_score,
    round_half_up,
    split_percentages,
)
from footycast.engine.types import HeadToHeadTally, MatchFactors, TeamMetrics


def _team(team_id, position=None, points=None, form=None):
    return TeamMetrics(id=team_id, name=f"Team {team_id}", position=position, points=points, form=form)


def test_form_score_weights_and_floor():
    assert form_score(["W", "W", "W", "W", "W"]) == pytest.approx(5.1)
    assert form_score(["D", "D", "L"]) == pytest.approx(1.1)
    assert form_score([]) == pytest.approx(0.1)
    assert form_score(None) == pytest.approx(0.1)


def test_form_score_ignores_unknown_codes():
    assert form_score(["W", "X", "?"]) == pytest.approx(1.1)


def test_round_half_up_rounds_ties_upwards():
    assert round_half_up(40.5) == 41
    assert round_half_up(41.5) == 42
    assert round_half_up(-4.5) == -4
    assert round_half_up(2.49) == 2


def test_strong_home_team_dominates():
    home = TeamMetrics(1, "Leaders", position=1, points=60, form=["W"] * 5)
    away = TeamMetrics(2, "Strugglers", position=20, points=10, form=["L"] * 5)

    result = estimate(home, away, HeadToHeadTally())

    assert result.home_chance > 60
    assert result.draw_chance <= 10
    assert result.home_chance > result.away_chance
    assert result.home_chance + result.draw_chance + result.away_chance == 100
    assert result.recommendation == (
        "Leaders has a higher chance to win with home advantage and better league position"
    )


def test_strong_away_team_wins_on_league_position():
    home = TeamMetrics(1, "Home", position=18, points=20, form=["L"] * 5)
    away = TeamMetrics(2, "Visitors", position=2, points=70, form=["W"] * 5)

    result = estimate(home, away, HeadToHeadTally())

    assert (result.home_chance, result.draw_chance, result.away_chance) == (3, 0, 97)
    assert result.recommendation == (
        "Despite playing away, Visitors is likely to win based on their superior league position"
    )


def test_identical_teams_without_history():
    home = _team(1, position=10, points=30, form=["D"] * 5)
    away = _team(2, position=10, points=30, form=["D"] * 5)

    factors = compute_factors(home, away, HeadToHeadTally())
    result = estimate(home, away, HeadToHeadTally())

    # All closeness signals are maximal, so the draw factor hits its cap
    assert factors.draw_factor == pytest.approx(0.8)
    expected_home = 0.3 * HOME_ADVANTAGE + 0.3 * HOME_ADVANTAGE + 0.5 * 0.2 * HOME_ADVANTAGE
    assert factors.base_home_chance == pytest.approx(expected_home)
    assert factors.base_away_chance == pytest.approx(0.7)

    assert (result.home_chance, result.draw_chance, result.away_chance) == (41, 24, 35)
    assert result.recommendation.endswith("and better recent form")


def test_drawn_history_does_not_lower_draw_share():
    home = _team(1, position=10, points=30, form=["D"] * 5)
    away = _team(2, position=10, points=30, form=["D"] * 5)

    without = estimate(home, away, HeadToHeadTally())
    with_history = estimate(home, away, HeadToHeadTally(4, 1, 1, 2))

    assert with_history.draw_chance >= without.draw_chance
    assert with_history.h2h == HeadToHeadTally(4, 1, 1, 2)


def test_head_to_head_dominance_is_cited_first():
    home = _team(1, position=10, points=30, form=["D"] * 5)
    away = _team(2, position=10, points=30, form=["D"] * 5)

    result = estimate(home, away, HeadToHeadTally(3, 3, 0, 0))

    assert (result.home_chance, result.draw_chance, result.away_chance) == (45, 24, 31)
    assert result.recommendation.endswith("and better head-to-head record")


def test_head_to_head_factor_applies_home_advantage_to_home_wins_only():
    home, away = _team(1), _team(2)

    factors = compute_factors(home, away, HeadToHeadTally(5, 2, 2, 1))

    assert factors.h2h_factor == pytest.approx((2 * HOME_ADVANTAGE - 2) / 5)


def test_missing_metrics_use_documented_defaults():
    home, away = _team(1), _team(2)

    factors = compute_factors(home, away, HeadToHeadTally())
    result = estimate(home, away, HeadToHeadTally())

    assert factors.home_position == 20
    assert factors.away_position == 20
    assert factors.position_score == pytest.approx(0.1)
    assert factors.points_score == pytest.approx(0.1)
    assert factors.home_form == pytest.approx(0.1)
    assert factors.away_form == pytest.approx(0.1)
    assert factors.points_diff == 0
    assert (result.home_chance, result.draw_chance, result.away_chance) == (2, 24, 74)
    assert result.recommendation == (
        "Despite playing away, Team 2 is likely to win based on their superior recent form"
    )


def test_unranked_away_team_does_not_divide_by_zero():
    home = _team(1, position=5, points=40)
    away = _team(2, points=40)

    factors = compute_factors(home, away, HeadToHeadTally())

    assert factors.position_score == pytest.approx(15.0)


def test_oversized_points_are_clamped():
    huge = estimate(_team(1, points=10**400), _team(2, points=3), HeadToHeadTally())
    capped = estimate(_team(1, points=MAX_POINTS), _team(2, points=3), HeadToHeadTally())

    assert huge == capped
    assert huge.home_chance + huge.draw_chance + huge.away_chance == 100


def test_oversized_position_is_clamped():
    huge = estimate(_team(1, position=1, points=30), _team(2, position=10**400, points=30), HeadToHeadTally())
    capped = estimate(
        _team(1, position=1, points=30), _team(2, position=MAX_POSITION, points=30), HeadToHeadTally()
    )

    assert huge == capped
    assert huge.home_chance + huge.draw_chance + huge.away_chance == 100


def test_zero_points_away_team_uses_unit_denominator():
    factors = compute_factors(_team(1, points=12), _team(2, points=0), HeadToHeadTally())
    assert factors.points_score == pytest.approx(12.0)


def test_negative_draw_terms_pull_draw_factor_down():
    home = _team(1, position=1, points=95, form=["W"] * 5)
    away = _team(2, position=20, points=5, form=["L"] * 5)

    factors = compute_factors(home, away, HeadToHeadTally())
    result = estimate(home, away, HeadToHeadTally())

    assert factors.draw_factor < 0
    assert result.draw_chance == 0
    assert result.home_chance + result.away_chance == 100


def test_split_percentages_never_overshoots_100():
    factors = MatchFactors(
        home_position=20,
        away_position=20,
        position_score=1.0,
        points_score=1.0,
        home_form=0.1,
        away_form=0.1,
        h2h_factor=0.0,
        position_diff=0,
        points_diff=0,
        draw_factor=-1.0,
        base_home_chance=101.0,
        base_away_chance=99.0,
    )

    # 50.5 and 49.5 both round up
    assert split_percentages(factors) == (51, 0, 49)


def _random_team(rng: random.Random, team_id: int) -> TeamMetrics:
    return TeamMetrics(
        id=team_id,
        name=f"Team {team_id}",
        position=rng.choice([None, 1, 2, 5, 10, 17, 19, 20, 24]),
        points=rng.choice([None, 0, 1, 7, 30, 45, 60, 99]),
        form=rng.choice([None, [], ["W"] * 5, ["L"] * 5, ["W", "D", "L"], ["D"] * 6]),
    )


def _random_tally(rng: random.Random) -> HeadToHeadTally:
    home_wins, away_wins, draws = (rng.randint(0, 4) for _ in range(3))
    return HeadToHeadTally(home_wins + away_wins + draws, home_wins, away_wins, draws)


def test_percentages_always_sum_to_100_and_stay_in_range():
    rng = random.Random(42)

    for _ in range(2000):
        home = _random_team(rng, 1)
        away = _random_team(rng, 2)
        result = estimate(home, away, _random_tally(rng))

        chances = (result.home_chance, result.draw_chance, result.away_chance)
        assert sum(chances) == 100
        assert all(0 <= c <= 100 for c in chances)
        assert all(isinstance(c, int) for c in chances)
        assert result.recommendation
