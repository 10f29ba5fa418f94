"""
Match predictions for upcoming fixtures.

Usage (from project root, with the virtualenv activated):

    python -m footycast.prediction

This will:
- Fetch the scheduled fixtures of the next days, with current standings.
- Load the head-to-head history (from a local CSV if given, otherwise from
  football-data.org) into an in-memory cache.
- Print the win/draw/loss percentages and a recommendation per fixture.
"""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from footycast.config import FIXTURE_WINDOW_DAYS, HISTORY_SEASONS
from footycast.data.data_loader import load_history_csv
from footycast.data.football_api import FootballDataClient
from footycast.data.history_store import HistoryStore
from footycast.engine.estimator import estimate
from footycast.engine.head_to_head import aggregate
from footycast.engine.types import Fixture, HistoricalMatch, PredictionResult
from footycast.utils.logging_utils import get_logger

logger = get_logger(__name__)


def predict_fixture(
    fixture: Fixture,
    matches: Iterable[HistoricalMatch],
) -> PredictionResult:
    """Tally the head-to-head record of the fixture's teams, then estimate."""
    tally = aggregate(fixture.home_team.id, fixture.away_team.id, matches)
    return estimate(fixture.home_team, fixture.away_team, tally)


def format_kickoff(utc_date: str) -> str:
    """Render an ISO-8601 UTC timestamp in local time, e.g. '2024-08-17 at 15:00'."""
    try:
        kickoff = datetime.fromisoformat(utc_date.replace("Z", "+00:00"))
    except ValueError:
        return utc_date
    return kickoff.astimezone().strftime("%Y-%m-%d at %H:%M")


def format_prediction(fixture: Fixture, result: PredictionResult) -> str:
    home = fixture.home_team.name
    away = fixture.away_team.name
    lines = [
        f"{home} vs {away} ({format_kickoff(fixture.utc_date)})",
        f"  {home} {result.home_chance}% | Draw {result.draw_chance}% | "
        f"{away} {result.away_chance}%",
    ]
    if result.h2h.total_matches > 0:
        lines.append(
            f"  Head-to-head ({result.h2h.total_matches} matches): "
            f"{result.h2h.home_team_wins} home wins, {result.h2h.draws} draws, "
            f"{result.h2h.away_team_wins} away wins"
        )
    lines.append(f"  {result.recommendation}")
    return "\n".join(lines)


def run_predictions(
    days: int = FIXTURE_WINDOW_DAYS,
    history_csv: Optional[Path | str] = None,
    seasons: Optional[Sequence[int]] = None,
    client: Optional[FootballDataClient] = None,
    store: Optional[HistoryStore] = None,
) -> List[Tuple[Fixture, PredictionResult]]:
    """Fetch fixtures and history, and predict every fixture."""
    if client is None:
        client = FootballDataClient()
    if store is None:
        store = HistoryStore()

    logger.info("Starting predictions...")
    fixtures = client.get_upcoming_fixtures(days=days)

    if history_csv is not None:
        store.populate(lambda: load_history_csv(history_csv))
    else:
        if seasons is None:
            seasons = HISTORY_SEASONS
        store.populate(lambda: client.get_finished_matches(seasons))

    results = [(fixture, predict_fixture(fixture, store.matches)) for fixture in fixtures]
    logger.info("Predicted %d fixtures.", len(results))
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Predict upcoming FootyCast fixtures.")
    parser.add_argument(
        "--days",
        type=int,
        default=FIXTURE_WINDOW_DAYS,
        help="Number of days ahead to look for scheduled fixtures.",
    )
    parser.add_argument(
        "--history-csv",
        type=Path,
        default=None,
        help="Local CSV of finished matches. If not provided, the history is "
        "fetched from football-data.org.",
    )
    parser.add_argument(
        "--seasons",
        type=int,
        nargs="+",
        default=None,
        help="Seasons to fetch the head-to-head history from (e.g. 2023 2024).",
    )
    args = parser.parse_args()

    results = run_predictions(
        days=args.days, history_csv=args.history_csv, seasons=args.seasons
    )
    if not results:
        print("No upcoming fixtures found.")
        return

    for fixture, result in results:
        print(format_prediction(fixture, result))
        print()


if __name__ == "__main__":
    main()
