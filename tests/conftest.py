import pytest

from footycast.engine.types import HistoricalMatch, Score, TeamMetrics


def _match(home_id: int, away_id: int, home_goals: int, away_goals: int, season: int = 2023):
    return HistoricalMatch(
        home_team_id=home_id,
        away_team_id=away_id,
        score=Score(home=home_goals, away=away_goals),
        season=season,
    )


@pytest.fixture
def arsenal() -> TeamMetrics:
    return TeamMetrics(id=57, name="Arsenal FC", position=2, points=52, form=["W", "W", "D", "W", "L"])


@pytest.fixture
def chelsea() -> TeamMetrics:
    return TeamMetrics(id=61, name="Chelsea FC", position=9, points=35, form=["L", "D", "W", "L", "D"])


@pytest.fixture
def history():
    """Six meetings of Arsenal (57) and Chelsea (61) plus unrelated matches."""
    return [
        _match(57, 61, 2, 0),
        _match(61, 57, 1, 1),
        _match(61, 57, 0, 3),
        _match(57, 61, 0, 1),
        _match(61, 57, 2, 1, season=2024),
        _match(57, 61, 5, 0, season=2024),
        _match(57, 65, 4, 0),
        _match(65, 61, 1, 1),
    ]


@pytest.fixture
def make_match():
    """Factory for HistoricalMatch records: make_match(home_id, away_id, home_goals, away_goals)."""
    return _match
