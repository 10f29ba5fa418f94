"""
Natural-language recommendation for a prediction.

Each outcome branch owns an ordered table of rules. Rules are evaluated top to
bottom and the first matching rule supplies the explanatory clause, so the
priority of the signals (head-to-head, then league position, then recent form)
is visible in the tables below. The last rule of every table always matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from footycast.config import CLOSE_POINTS_DIFF, CLOSE_POSITION_DIFF
from footycast.engine.types import HeadToHeadTally, MatchFactors, TeamMetrics
from footycast.utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule predicate may look at."""

    home_team: TeamMetrics
    away_team: TeamMetrics
    tally: HeadToHeadTally
    factors: MatchFactors


@dataclass(frozen=True)
class RecommendationRule:
    name: str
    applies: Callable[[RuleContext], bool]
    clause: str


def _always(ctx: RuleContext) -> bool:
    return True


HOME_WIN_TEMPLATE = "{home} has a higher chance to win with home advantage{clause}"
AWAY_WIN_TEMPLATE = "Despite playing away, {away} is likely to win based on their superior {clause}"
DRAW_TEMPLATE = "A draw is likely as both teams are closely matched in {clause}"

HOME_WIN_RULES: Sequence[RecommendationRule] = (
    RecommendationRule(
        "head_to_head",
        lambda ctx: ctx.tally.home_team_wins > ctx.tally.away_team_wins,
        " and better head-to-head record",
    ),
    RecommendationRule(
        "league_position",
        lambda ctx: ctx.factors.home_position < ctx.factors.away_position,
        " and better league position",
    ),
    RecommendationRule("recent_form", _always, " and better recent form"),
)

AWAY_WIN_RULES: Sequence[RecommendationRule] = (
    RecommendationRule(
        "head_to_head",
        lambda ctx: ctx.tally.away_team_wins > ctx.tally.home_team_wins,
        "head-to-head record",
    ),
    RecommendationRule(
        "league_position",
        lambda ctx: ctx.factors.away_position < ctx.factors.home_position,
        "league position",
    ),
    RecommendationRule("recent_form", _always, "recent form"),
)

DRAW_RULES: Sequence[RecommendationRule] = (
    RecommendationRule(
        "previous_encounters",
        lambda ctx: ctx.tally.draws
        > max(ctx.tally.home_team_wins, ctx.tally.away_team_wins),
        "previous encounters",
    ),
    RecommendationRule(
        "league_position",
        lambda ctx: ctx.factors.position_diff < CLOSE_POSITION_DIFF,
        "league position",
    ),
    RecommendationRule(
        "points",
        lambda ctx: ctx.factors.points_diff < CLOSE_POINTS_DIFF,
        "points",
    ),
    RecommendationRule("recent_form", _always, "recent form"),
)


def pick_outcome(home_chance: int, draw_chance: int, away_chance: int) -> str:
    """
    Return the outcome with the strictly greatest percentage.

    Ties fall through to 'draw'.
    """
    if home_chance > max(away_chance, draw_chance):
        return "home_win"
    if away_chance > max(home_chance, draw_chance):
        return "away_win"
    return "draw"


def first_matching_rule(
    rules: Sequence[RecommendationRule],
    ctx: RuleContext,
) -> RecommendationRule:
    for rule in rules:
        if rule.applies(ctx):
            logger.debug("Recommendation rule matched: %s", rule.name)
            return rule
    # Tables end with a catch-all; reaching this means a table was edited badly
    raise ValueError("Recommendation rule table has no catch-all rule")


def build_recommendation(
    outcome: str,
    home_team: TeamMetrics,
    away_team: TeamMetrics,
    tally: HeadToHeadTally,
    factors: MatchFactors,
) -> str:
    """Render the recommendation sentence for the given outcome branch."""
    ctx = RuleContext(home_team, away_team, tally, factors)

    if outcome == "home_win":
        rule = first_matching_rule(HOME_WIN_RULES, ctx)
        return HOME_WIN_TEMPLATE.format(home=home_team.name, clause=rule.clause)
    if outcome == "away_win":
        rule = first_matching_rule(AWAY_WIN_RULES, ctx)
        return AWAY_WIN_TEMPLATE.format(away=away_team.name, clause=rule.clause)

    rule = first_matching_rule(DRAW_RULES, ctx)
    return DRAW_TEMPLATE.format(clause=rule.clause)
