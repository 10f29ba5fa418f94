"""
Client for the football-data.org v4 REST API.

Fetches upcoming fixtures (merged with the current standings) and finished
matches for the head-to-head history. Every public fetch degrades to an empty
list on network or payload errors, so callers never see an exception from
this layer.

NOTE:
- An API token is read from FOOTBALL_DATA_API_KEY. Without one the API
  answers 403 and every fetch returns an empty list.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from footycast.config import (
    BACKOFF_FACTOR,
    BACKOFF_MAX,
    COMPETITION_CODE,
    FIXTURE_WINDOW_DAYS,
    FOOTBALL_DATA_API_KEY,
    FOOTBALL_DATA_BASE_URL,
    HISTORY_SEASONS,
    MAX_RETRIES,
    REQUEST_TIMEOUT,
    RETRY_STATUS_CODES,
)
from footycast.engine.types import Fixture, HistoricalMatch, Score, TeamMetrics
from footycast.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Errors that mean "this fetch failed", as opposed to programming errors
FETCH_ERRORS = (requests.RequestException, KeyError, IndexError, TypeError, ValueError)


def build_session(
    max_retries: int = MAX_RETRIES,
    backoff_factor: float = BACKOFF_FACTOR,
    backoff_max: float = BACKOFF_MAX,
) -> requests.Session:
    """
    Create a requests session that retries GETs with exponential backoff.

    `max_retries` counts attempts in total, so 3 means one call plus two
    retries, waiting `backoff_factor * 2**n` seconds (capped at `backoff_max`).
    """
    retry = Retry(
        total=max(max_retries - 1, 0),
        backoff_factor=backoff_factor,
        backoff_max=backoff_max,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=frozenset(["GET"]),
        respect_retry_after_header=True,
    )
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def parse_form(raw: Optional[str]) -> List[str]:
    """Split a standings form string like "W,D,L" into result codes."""
    if not raw:
        return []
    return [code.strip().upper() for code in raw.split(",") if code.strip()]


def parse_standings(payload: Dict[str, Any]) -> Dict[int, Dict[str, Any]]:
    """
    Map team id -> {position, points, form} from a standings response.

    Only the first table (the overall standings) is used.
    """
    table = payload["standings"][0]["table"]
    return {
        int(item["team"]["id"]): {
            "position": item.get("position"),
            "points": item.get("points"),
            "form": parse_form(item.get("form")),
        }
        for item in table
    }


def parse_team(raw_team: Dict[str, Any], team_stats: Dict[int, Dict[str, Any]]) -> TeamMetrics:
    team_id = int(raw_team["id"])
    stats = team_stats.get(team_id, {})
    return TeamMetrics(
        id=team_id,
        name=raw_team.get("name") or f"Team {team_id}",
        position=stats.get("position"),
        points=stats.get("points"),
        form=tuple(stats["form"]) if "form" in stats else None,
    )


def parse_fixture(raw: Dict[str, Any], team_stats: Dict[int, Dict[str, Any]]) -> Fixture:
    """Build a Fixture from one entry of a /matches response."""
    return Fixture(
        id=int(raw["id"]),
        home_team=parse_team(raw["homeTeam"], team_stats),
        away_team=parse_team(raw["awayTeam"], team_stats),
        utc_date=raw["utcDate"],
        status=raw.get("status", "SCHEDULED"),
    )


def parse_historical_match(raw: Dict[str, Any]) -> Optional[HistoricalMatch]:
    """
    Build a HistoricalMatch from one finished entry of a /matches response.

    Returns None when the full-time score is not available.
    """
    full_time = (raw.get("score") or {}).get("fullTime") or {}
    home_goals = full_time.get("home")
    away_goals = full_time.get("away")
    if home_goals is None or away_goals is None:
        return None

    return HistoricalMatch(
        home_team_id=int(raw["homeTeam"]["id"]),
        away_team_id=int(raw["awayTeam"]["id"]),
        score=Score(home=int(home_goals), away=int(away_goals)),
        season=int(raw["season"]["id"]),
    )


class FootballDataClient:
    """Thin wrapper around the competition endpoints we need."""

    def __init__(
        self,
        base_url: str = FOOTBALL_DATA_BASE_URL,
        api_key: str = FOOTBALL_DATA_API_KEY,
        competition: str = COMPETITION_CODE,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.competition = competition
        self.timeout = timeout
        self.session = session if session is not None else build_session()
        self.headers = {"X-Auth-Token": api_key} if api_key else {}

        if not api_key:
            logger.warning(
                "FOOTBALL_DATA_API_KEY is not set; football-data.org requests "
                "are likely to be rejected."
            )

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        response = self.session.get(
            url, params=params, headers=self.headers, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def get_standings(self) -> Dict[int, Dict[str, Any]]:
        """Fetch the current standings. Raises on failure."""
        payload = self._get(f"/competitions/{self.competition}/standings")
        return parse_standings(payload)

    def get_upcoming_fixtures(
        self,
        today: Optional[date] = None,
        days: int = FIXTURE_WINDOW_DAYS,
    ) -> List[Fixture]:
        """
        Fetch scheduled fixtures for `today` .. `today + days`, with each
        team's standing merged in.

        Returns an empty list if anything goes wrong.
        """
        if today is None:
            today = datetime.now(timezone.utc).date()
        params = {
            "dateFrom": today.isoformat(),
            "dateTo": (today + timedelta(days=days)).isoformat(),
            "status": "SCHEDULED",
        }

        try:
            payload = self._get(f"/competitions/{self.competition}/matches", params)
            team_stats = self.get_standings()
            fixtures = [parse_fixture(raw, team_stats) for raw in payload["matches"]]
        except FETCH_ERRORS as exc:
            logger.error("Failed to fetch upcoming fixtures: %s", exc)
            return []

        logger.info(
            "Fetched %d upcoming %s fixtures (%s to %s).",
            len(fixtures),
            self.competition,
            params["dateFrom"],
            params["dateTo"],
        )
        return fixtures

    def get_finished_matches(
        self,
        seasons: Optional[Iterable[int]] = None,
    ) -> List[HistoricalMatch]:
        """
        Fetch finished matches for every season in `seasons`.

        All-or-nothing: if any season fails, an empty list is returned.
        """
        if seasons is None:
            seasons = HISTORY_SEASONS

        matches: List[HistoricalMatch] = []
        skipped = 0
        try:
            for season in seasons:
                payload = self._get(
                    f"/competitions/{self.competition}/matches",
                    {"season": season, "status": "FINISHED"},
                )
                for raw in payload["matches"]:
                    match = parse_historical_match(raw)
                    if match is None:
                        skipped += 1
                        continue
                    matches.append(match)
        except FETCH_ERRORS as exc:
            logger.error("Failed to fetch historical matches: %s", exc)
            return []

        if skipped:
            logger.warning("Skipped %d finished matches without a full-time score.", skipped)
        logger.info("Fetched %d historical matches.", len(matches))
        return matches
