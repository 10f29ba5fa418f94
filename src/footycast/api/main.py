# path: src/footycast/api/main.py
"""
FastAPI app exposing FootyCast prediction endpoints.

Endpoints:
- GET  /health                -> simple health check
- GET  /matches               -> upcoming fixtures with team standings
- GET  /predict/{match_id}    -> prediction + recommendation for an upcoming fixture
- POST /predict               -> prediction for two ad-hoc teams
- GET  /head_to_head          -> head-to-head tally of two teams
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from footycast.config import MAX_POINTS, MAX_POSITION
from footycast.data.data_loader import load_history_csv
from footycast.data.football_api import FootballDataClient
from footycast.data.history_store import HistoryStore
from footycast.engine.estimator import estimate
from footycast.engine.head_to_head import aggregate
from footycast.engine.recommendation import pick_outcome
from footycast.engine.types import Fixture, PredictionResult, TeamMetrics
from footycast.prediction import predict_fixture
from footycast.utils.logging_utils import get_logger
from footycast.utils.paths import get_history_csv_path

logger = get_logger(__name__)

app = FastAPI(
    title="FootyCast API",
    version="0.1.0",
    description="Premier League match outcome predictor",
)

# Global state populated at startup
CLIENT: FootballDataClient | None = None
FIXTURES: List[Fixture] | None = None
HISTORY = HistoryStore()


class TeamIn(BaseModel):
    id: int
    name: str
    position: Optional[int] = Field(default=None, ge=0, le=MAX_POSITION)
    points: Optional[int] = Field(default=None, ge=0, le=MAX_POINTS)
    form: Optional[List[Literal["W", "D", "L"]]] = None

    def to_metrics(self) -> TeamMetrics:
        return TeamMetrics(
            id=self.id,
            name=self.name,
            position=self.position,
            points=self.points,
            form=tuple(self.form) if self.form is not None else None,
        )


class PredictRequest(BaseModel):
    home_team: TeamIn
    away_team: TeamIn


def _get_client() -> FootballDataClient:
    global CLIENT
    if CLIENT is None:
        CLIENT = FootballDataClient()
    return CLIENT


def _load_fixtures() -> List[Fixture]:
    """Fetch upcoming fixtures once and keep them for the process lifetime."""
    global FIXTURES
    if FIXTURES is not None:
        return FIXTURES

    FIXTURES = _get_client().get_upcoming_fixtures()
    logger.info("Loaded %d upcoming fixtures.", len(FIXTURES))
    return FIXTURES


def _load_history() -> int:
    """Populate the history cache from the local CSV if present, else the API."""
    csv_path = get_history_csv_path()
    if csv_path.exists():
        return HISTORY.populate(lambda: load_history_csv(csv_path))
    return HISTORY.populate(_get_client().get_finished_matches)


@app.on_event("startup")
def startup_event() -> None:
    """Load history and fixtures at application startup."""
    _load_history()
    _load_fixtures()


def _team_to_dict(team: TeamMetrics) -> Dict[str, Any]:
    data = asdict(team)
    data["form"] = list(team.form) if team.form is not None else None
    return data


def _fixture_to_dict(fixture: Fixture) -> Dict[str, Any]:
    return {
        "match_id": fixture.id,
        "utc_date": fixture.utc_date,
        "status": fixture.status,
        "home_team": _team_to_dict(fixture.home_team),
        "away_team": _team_to_dict(fixture.away_team),
    }


def _prediction_to_dict(
    home_team: TeamMetrics,
    away_team: TeamMetrics,
    result: PredictionResult,
) -> Dict[str, Any]:
    return {
        "home_team": home_team.name,
        "away_team": away_team.name,
        "home_chance": result.home_chance,
        "draw_chance": result.draw_chance,
        "away_chance": result.away_chance,
        "predicted_outcome": pick_outcome(
            result.home_chance, result.draw_chance, result.away_chance
        ),
        "recommendation": result.recommendation,
        "h2h": asdict(result.h2h),
    }


@app.get("/health")
def health() -> Dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "history_matches": len(HISTORY.matches)}


@app.get("/matches")
def list_matches() -> List[Dict[str, Any]]:
    """Return the upcoming fixtures with each team's standing."""
    return [_fixture_to_dict(f) for f in _load_fixtures()]


@app.get("/predict/{match_id}")
def predict_by_match_id(match_id: int) -> Dict[str, Any]:
    """
    Predict an upcoming fixture.

    Response:
        {
          "match_id": ...,
          "utc_date": ...,
          "home_team": ...,
          "away_team": ...,
          "home_chance": 48, "draw_chance": 24, "away_chance": 28,
          "predicted_outcome": "home_win" | "draw" | "away_win",
          "recommendation": "...",
          "h2h": {"total_matches": ..., "home_team_wins": ..., "away_team_wins": ..., "draws": ...}
        }
    """
    fixture = next((f for f in _load_fixtures() if f.id == match_id), None)
    if fixture is None:
        raise HTTPException(
            status_code=404,
            detail=f"No upcoming match found with match_id={match_id}",
        )

    result = predict_fixture(fixture, HISTORY.matches)
    response = {"match_id": fixture.id, "utc_date": fixture.utc_date}
    response.update(_prediction_to_dict(fixture.home_team, fixture.away_team, result))
    return response


@app.post("/predict")
def predict_teams(payload: PredictRequest) -> Dict[str, Any]:
    """Predict a match between two posted teams, using the cached history."""
    home_team = payload.home_team.to_metrics()
    away_team = payload.away_team.to_metrics()

    tally = aggregate(home_team.id, away_team.id, HISTORY.matches)
    result = estimate(home_team, away_team, tally)
    return _prediction_to_dict(home_team, away_team, result)


@app.get("/head_to_head")
def head_to_head(home_team_id: int, away_team_id: int) -> Dict[str, int]:
    """Return the head-to-head tally from `home_team_id`'s perspective."""
    return asdict(aggregate(home_team_id, away_team_id, HISTORY.matches))
