"""
Typed inputs and outputs of the prediction engine.

The data layer produces `TeamMetrics`, `Fixture` and `HistoricalMatch`
instances; the engine consumes them and returns a `PredictionResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True)
class TeamMetrics:
    """Current-season snapshot of one team."""

    id: int
    name: str
    position: Optional[int] = None
    points: Optional[int] = None
    form: Optional[Sequence[str]] = None


@dataclass(frozen=True)
class Score:
    """Full-time score of a finished match."""

    home: int
    away: int


@dataclass(frozen=True)
class HistoricalMatch:
    """A finished match, as recorded (literal home/away labels)."""

    home_team_id: int
    away_team_id: int
    score: Score
    season: int


@dataclass(frozen=True)
class Fixture:
    """An upcoming, not-yet-played match."""

    id: int
    home_team: TeamMetrics
    away_team: TeamMetrics
    utc_date: str
    status: str = "SCHEDULED"


@dataclass(frozen=True)
class HeadToHeadTally:
    """
    Win/draw/loss counts between two teams, from the perspective of the
    upcoming fixture's home team.
    """

    total_matches: int = 0
    home_team_wins: int = 0
    away_team_wins: int = 0
    draws: int = 0

    @classmethod
    def empty(cls) -> "HeadToHeadTally":
        return cls()


@dataclass(frozen=True)
class MatchFactors:
    """Intermediate scores the probabilities are derived from."""

    home_position: int
    away_position: int
    position_score: float
    points_score: float
    home_form: float
    away_form: float
    h2h_factor: float
    position_diff: int
    points_diff: int
    draw_factor: float
    base_home_chance: float
    base_away_chance: float


@dataclass(frozen=True)
class PredictionResult:
    """Integer percentages (summing to 100) plus the explanation."""

    home_chance: int
    draw_chance: int
    away_chance: int
    recommendation: str
    h2h: HeadToHeadTally = field(default_factory=HeadToHeadTally)
