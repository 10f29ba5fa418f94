"""
Head-to-head aggregation.

Filters the historical matches played between two teams (in either home/away
orientation) and reduces them into a tally oriented to the upcoming fixture:
a win is credited to the fixture's home team whenever that team scored more,
regardless of where the historical match was played.
"""

from __future__ import annotations

from typing import Iterable, List

from footycast.engine.types import HeadToHeadTally, HistoricalMatch
from footycast.utils.logging_utils import get_logger

logger = get_logger(__name__)


def is_head_to_head(match: HistoricalMatch, home_team_id: int, away_team_id: int) -> bool:
    """Return True if `match` was played between the two teams, at either venue."""
    return {match.home_team_id, match.away_team_id} == {home_team_id, away_team_id}


def head_to_head_matches(
    home_team_id: int,
    away_team_id: int,
    matches: Iterable[HistoricalMatch],
) -> List[HistoricalMatch]:
    """Return the historical matches between the two teams, in input order."""
    return [m for m in matches if is_head_to_head(m, home_team_id, away_team_id)]


def aggregate(
    home_team_id: int,
    away_team_id: int,
    matches: Iterable[HistoricalMatch],
) -> HeadToHeadTally:
    """
    Tally the head-to-head record of two teams.

    Parameters
    ----------
    home_team_id : int
        Id of the team playing at home in the upcoming fixture.
    away_team_id : int
        Id of the team playing away in the upcoming fixture.
    matches : Iterable[HistoricalMatch]
        All known finished matches. May be empty.

    Returns
    -------
    HeadToHeadTally
        Counts from the upcoming home team's perspective. All zero when the
        two teams never met.
    """
    total = home_wins = away_wins = draws = 0

    for match in head_to_head_matches(home_team_id, away_team_id, matches):
        total += 1
        if match.home_team_id == home_team_id:
            ours, theirs = match.score.home, match.score.away
        else:
            # Teams were swapped relative to the upcoming fixture
            ours, theirs = match.score.away, match.score.home

        if ours > theirs:
            home_wins += 1
        elif ours < theirs:
            away_wins += 1
        else:
            draws += 1

    tally = HeadToHeadTally(
        total_matches=total,
        home_team_wins=home_wins,
        away_team_wins=away_wins,
        draws=draws,
    )
    logger.debug("Head-to-head %d vs %d: %s", home_team_id, away_team_id, tally)
    return tally
