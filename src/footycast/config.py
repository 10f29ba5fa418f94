"""
Global configuration for the FootyCast project.

This module centralizes the scoring constants used by the prediction engine
and the settings of the football-data.org collaborator, so you can tweak them
in one place. Data-source settings can be overridden through environment
variables; engine constants are fixed.
"""

import os
from pathlib import Path
from typing import Dict, List

# Project root = folder that contains "src", "data", etc.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

# Data directories (read-only inputs)
DATA_DIR: Path = PROJECT_ROOT / "data"
RAW_DATA_DIR: Path = DATA_DIR / "raw"

# Optional local export of finished matches used to seed the history cache
HISTORY_FILENAME: str = os.getenv("FOOTYCAST_HISTORY_FILENAME", "historical_matches.csv")

# ---------------------------------------------------------------------------
# Engine constants
# ---------------------------------------------------------------------------

# Missing league position is treated as last place inside the formula terms
UNRANKED_POSITION: int = 20
# Missing points: 0 for the team itself, 1 when used as a denominator
DEFAULT_POINTS: int = 0
DEFAULT_OPPONENT_POINTS: int = 1

# Upper bounds for metrics fed into the formula; larger values are clamped
MAX_POSITION: int = 100
MAX_POINTS: int = 1000

# Lower bound for the position and points ratios
MIN_SCORE_RATIO: float = 0.1

# Form scoring: one value per result code plus a floor added once per team
FORM_RESULT_WEIGHTS: Dict[str, float] = {"W": 1.0, "D": 0.5, "L": 0.0}
FORM_FLOOR: float = 0.1

# Multiplier applied to the home side (probability blend and H2H wins)
HOME_ADVANTAGE: float = 1.15

# Weights of the win-probability blend
POSITION_WEIGHT: float = 0.3
POINTS_WEIGHT: float = 0.3
FORM_WEIGHT: float = 0.2
H2H_WEIGHT: float = 0.2

# Draw likelihood: normalizers and weights of the four closeness signals
DRAW_POSITION_SPAN: float = 19.0
DRAW_POINTS_SPAN: float = 30.0
DRAW_FORM_SPAN: float = 5.0
DRAW_POSITION_WEIGHT: float = 0.3
DRAW_POINTS_WEIGHT: float = 0.3
DRAW_FORM_WEIGHT: float = 0.2
DRAW_H2H_WEIGHT: float = 0.2
DRAW_FACTOR_CAP: float = 0.8
MAX_DRAW_PERCENT: int = 30

# Draw recommendation: "closely matched" thresholds
CLOSE_POSITION_DIFF: int = 3
CLOSE_POINTS_DIFF: int = 5

# ---------------------------------------------------------------------------
# football-data.org collaborator
# ---------------------------------------------------------------------------

FOOTBALL_DATA_BASE_URL: str = os.getenv(
    "FOOTBALL_DATA_BASE_URL", "https://api.football-data.org/v4"
)
FOOTBALL_DATA_API_KEY: str = os.getenv("FOOTBALL_DATA_API_KEY", "")
COMPETITION_CODE: str = os.getenv("FOOTYCAST_COMPETITION", "PL")

# Seasons fetched to build the head-to-head history
HISTORY_SEASONS: List[int] = [
    int(season)
    for season in os.getenv("FOOTYCAST_HISTORY_SEASONS", "2023,2024").split(",")
    if season.strip()
]

# Upcoming fixtures are listed for today + N days
FIXTURE_WINDOW_DAYS: int = int(os.getenv("FOOTYCAST_FIXTURE_WINDOW_DAYS", "10"))

# HTTP behaviour: timeout in seconds, attempts in total, exponential backoff
REQUEST_TIMEOUT: float = float(os.getenv("FOOTYCAST_REQUEST_TIMEOUT", "30"))
MAX_RETRIES: int = int(os.getenv("FOOTYCAST_MAX_RETRIES", "3"))
BACKOFF_FACTOR: float = 1.0
BACKOFF_MAX: float = 8.0
RETRY_STATUS_CODES: List[int] = [429, 500, 502, 503, 504]

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL: str = os.getenv("FOOTYCAST_LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
