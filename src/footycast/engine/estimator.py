"""
Win/draw/loss probability estimator.

A fixed heuristic: league position, points and recent form of both teams are
blended with the head-to-head record into base home/away chances, while a
separate "closeness" blend decides the draw share. The three integer
percentages always sum to exactly 100.

Missing metrics are first-class inputs, never errors:

- position -> UNRANKED_POSITION (last place)
- points   -> DEFAULT_POINTS (DEFAULT_OPPONENT_POINTS as a denominator)
- form     -> empty, scored as FORM_FLOOR

Present positions and points are clamped to [0, MAX_POSITION] and
[0, MAX_POINTS] before they enter the formula.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from footycast.config import (
    DEFAULT_OPPONENT_POINTS,
    DEFAULT_POINTS,
    DRAW_FACTOR_CAP,
    DRAW_FORM_SPAN,
    DRAW_FORM_WEIGHT,
    DRAW_H2H_WEIGHT,
    DRAW_POINTS_SPAN,
    DRAW_POINTS_WEIGHT,
    DRAW_POSITION_SPAN,
    DRAW_POSITION_WEIGHT,
    FORM_FLOOR,
    FORM_RESULT_WEIGHTS,
    FORM_WEIGHT,
    H2H_WEIGHT,
    HOME_ADVANTAGE,
    MAX_DRAW_PERCENT,
    MAX_POINTS,
    MAX_POSITION,
    MIN_SCORE_RATIO,
    POINTS_WEIGHT,
    POSITION_WEIGHT,
    UNRANKED_POSITION,
)
from footycast.engine.recommendation import build_recommendation, pick_outcome
from footycast.engine.types import (
    HeadToHeadTally,
    MatchFactors,
    PredictionResult,
    TeamMetrics,
)
from footycast.utils.logging_utils import get_logger

logger = get_logger(__name__)


def _clamp(value: int, upper: int) -> int:
    return min(max(value, 0), upper)


def _position_or_default(team: TeamMetrics) -> int:
    if team.position is None:
        return UNRANKED_POSITION
    return _clamp(team.position, MAX_POSITION)


def _points_or(team: TeamMetrics, default: int) -> int:
    if team.points is None:
        return default
    return _clamp(team.points, MAX_POINTS)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity."""
    return int(math.floor(value + 0.5))


def form_score(form: Optional[Sequence[str]]) -> float:
    """
    Score a recent-form sequence: 1 per win, 0.5 per draw, 0 per loss.

    Unknown codes count as 0. FORM_FLOOR is added once so that a team with no
    form data never scores zero.
    """
    results = form if form is not None else ()
    return sum(FORM_RESULT_WEIGHTS.get(code, 0.0) for code in results) + FORM_FLOOR


def compute_factors(
    home_team: TeamMetrics,
    away_team: TeamMetrics,
    tally: HeadToHeadTally,
) -> MatchFactors:
    """
    Compute every intermediate score used by `estimate`.

    Parameters
    ----------
    home_team, away_team : TeamMetrics
        Current-season metrics of both teams.
    tally : HeadToHeadTally
        Head-to-head record oriented to `home_team`.

    Returns
    -------
    MatchFactors
        Position/points/form scores, the head-to-head factor, the draw factor
        and the base (unnormalized) home and away chances.
    """
    home_position = _position_or_default(home_team)
    away_position = _position_or_default(away_team)

    # The denominator is floored at 1 so an unranked away side cannot divide by zero
    position_score = max(
        (UNRANKED_POSITION - home_position)
        / max(UNRANKED_POSITION - away_position, 1),
        MIN_SCORE_RATIO,
    )
    points_score = max(
        _points_or(home_team, DEFAULT_POINTS)
        / max(_points_or(away_team, DEFAULT_OPPONENT_POINTS), 1),
        MIN_SCORE_RATIO,
    )

    home_form = form_score(home_team.form)
    away_form = form_score(away_team.form)
    total_form = home_form + away_form

    if tally.total_matches > 0:
        h2h_factor = (
            tally.home_team_wins * HOME_ADVANTAGE - tally.away_team_wins
        ) / tally.total_matches
    else:
        h2h_factor = 0.0

    position_diff = abs(home_position - away_position)
    points_diff = abs(
        _points_or(home_team, DEFAULT_POINTS) - _points_or(away_team, DEFAULT_POINTS)
    )
    form_diff = abs(home_form - away_form)

    # Individual terms may go negative; only the upper bound is capped
    draw_factor = min(
        (1 - position_diff / DRAW_POSITION_SPAN) * DRAW_POSITION_WEIGHT
        + (1 - points_diff / DRAW_POINTS_SPAN) * DRAW_POINTS_WEIGHT
        + (1 - form_diff / DRAW_FORM_SPAN) * DRAW_FORM_WEIGHT
        + (tally.draws / max(tally.total_matches, 1)) * DRAW_H2H_WEIGHT,
        DRAW_FACTOR_CAP,
    )

    base_home_chance = (
        position_score * POSITION_WEIGHT * HOME_ADVANTAGE
        + points_score * POINTS_WEIGHT * HOME_ADVANTAGE
        + (home_form / total_form) * FORM_WEIGHT * HOME_ADVANTAGE
        + max(h2h_factor, 0.0) * H2H_WEIGHT
    )
    base_away_chance = (
        (1 / position_score) * POSITION_WEIGHT
        + (1 / points_score) * POINTS_WEIGHT
        + (away_form / total_form) * FORM_WEIGHT
        + max(-h2h_factor, 0.0) * H2H_WEIGHT
    )

    return MatchFactors(
        home_position=home_position,
        away_position=away_position,
        position_score=position_score,
        points_score=points_score,
        home_form=home_form,
        away_form=away_form,
        h2h_factor=h2h_factor,
        position_diff=position_diff,
        points_diff=points_diff,
        draw_factor=draw_factor,
        base_home_chance=base_home_chance,
        base_away_chance=base_away_chance,
    )


def split_percentages(factors: MatchFactors) -> tuple[int, int, int]:
    """
    Turn the factors into (home, draw, away) integer percentages.

    Home and away are rounded first; the draw is then derived by subtraction
    so that the three values sum to exactly 100.
    """
    draw_percent = max(round_half_up(factors.draw_factor * MAX_DRAW_PERCENT), 0)
    remaining = 100 - draw_percent

    total_base = factors.base_home_chance + factors.base_away_chance
    home_chance = round_half_up(remaining * factors.base_home_chance / total_base)
    away_chance = round_half_up(remaining * factors.base_away_chance / total_base)

    # Two .5 roundings can overshoot when there is no draw share left
    away_chance = min(away_chance, 100 - home_chance)
    draw_chance = 100 - home_chance - away_chance

    return home_chance, draw_chance, away_chance


def estimate(
    home_team: TeamMetrics,
    away_team: TeamMetrics,
    tally: HeadToHeadTally,
) -> PredictionResult:
    """
    Estimate win/draw/loss percentages and explain the favourite.

    Never raises for inputs in the documented domain; missing position,
    points or form fall back to their defaults.
    """
    factors = compute_factors(home_team, away_team, tally)
    home_chance, draw_chance, away_chance = split_percentages(factors)

    outcome = pick_outcome(home_chance, draw_chance, away_chance)
    recommendation = build_recommendation(
        outcome, home_team, away_team, tally, factors
    )

    logger.debug(
        "%s vs %s -> home=%d draw=%d away=%d (%s; %s)",
        home_team.name,
        away_team.name,
        home_chance,
        draw_chance,
        away_chance,
        outcome,
        factors,
    )

    return PredictionResult(
        home_chance=home_chance,
        draw_chance=draw_chance,
        away_chance=away_chance,
        recommendation=recommendation,
        h2h=tally,
    )
