import logging

from footycast.engine.estimator import compute_factors
from footycast.engine.recommendation import (
    AWAY_WIN_RULES,
    DRAW_RULES,
    HOME_WIN_RULES,
    build_recommendation,
    pick_outcome,
)
from footycast.engine.types import HeadToHeadTally, TeamMetrics


def _recommend(outcome, home, away, tally=HeadToHeadTally()):
    return build_recommendation(outcome, home, away, tally, compute_factors(home, away, tally))


def test_rule_tables_priority_order():
    assert [r.name for r in HOME_WIN_RULES] == ["head_to_head", "league_position", "recent_form"]
    assert [r.name for r in AWAY_WIN_RULES] == ["head_to_head", "league_position", "recent_form"]
    assert [r.name for r in DRAW_RULES] == [
        "previous_encounters",
        "league_position",
        "points",
        "recent_form",
    ]


def test_pick_outcome_requires_strict_maximum():
    assert pick_outcome(50, 20, 30) == "home_win"
    assert pick_outcome(30, 20, 50) == "away_win"
    assert pick_outcome(38, 24, 38) == "draw"
    assert pick_outcome(40, 40, 20) == "draw"


def test_home_branch_head_to_head_beats_position():
    home = TeamMetrics(1, "Home", position=12, points=30)
    away = TeamMetrics(2, "Away", position=3, points=40)
    text = _recommend("home_win", home, away, HeadToHeadTally(3, 2, 1, 0))
    assert text == "Home has a higher chance to win with home advantage and better head-to-head record"


def test_home_branch_falls_back_to_position_then_form():
    better = TeamMetrics(1, "Home", position=3)
    worse = TeamMetrics(2, "Away", position=12)
    assert _recommend("home_win", better, worse).endswith("and better league position")
    assert _recommend("home_win", worse, better).endswith("and better recent form")


def test_home_branch_unranked_home_team_is_not_better_placed():
    home = TeamMetrics(1, "Home")
    away = TeamMetrics(2, "Away", position=20)
    assert _recommend("home_win", home, away).endswith("and better recent form")


def test_away_branch_clauses():
    home = TeamMetrics(1, "Home", position=4)
    away = TeamMetrics(2, "Away", position=8)
    assert _recommend("away_win", home, away, HeadToHeadTally(2, 0, 2, 0)) == (
        "Despite playing away, Away is likely to win based on their superior head-to-head record"
    )
    assert _recommend("away_win", away, home).endswith("superior league position")
    assert _recommend("away_win", home, away).endswith("superior recent form")


def test_draw_branch_clauses_in_priority_order():
    home = TeamMetrics(1, "Home", position=10, points=30)
    away = TeamMetrics(2, "Away", position=11, points=31)
    assert _recommend("draw", home, away, HeadToHeadTally(4, 1, 1, 2)) == (
        "A draw is likely as both teams are closely matched in previous encounters"
    )
    assert _recommend("draw", home, away).endswith("closely matched in league position")

    far_apart = TeamMetrics(2, "Away", position=15, points=33)
    assert _recommend("draw", home, far_apart).endswith("closely matched in points")

    very_far = TeamMetrics(2, "Away", position=15, points=45)
    assert _recommend("draw", home, very_far).endswith("closely matched in recent form")


def test_draw_branch_needs_strictly_more_draws_than_wins():
    home = TeamMetrics(1, "Home", position=1)
    away = TeamMetrics(2, "Away", position=20, points=40)
    text = _recommend("draw", home, away, HeadToHeadTally(4, 2, 0, 2))
    assert text.endswith("closely matched in recent form")


def test_matched_rule_is_logged(caplog):
    home = TeamMetrics(1, "Home", position=3, points=40)
    away = TeamMetrics(2, "Away", position=12, points=30)

    with caplog.at_level(logging.DEBUG, logger="footycast.engine.recommendation"):
        _recommend("home_win", home, away)

    assert "Recommendation rule matched: league_position" in caplog.text
