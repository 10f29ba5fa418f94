"""
Data loading utilities for FootyCast.

Loads a local CSV export of finished matches into `HistoricalMatch` records,
as an offline alternative to fetching them from football-data.org.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pandas as pd

from footycast.data.schema import validate_history_df
from footycast.engine.types import HistoricalMatch, Score
from footycast.utils.logging_utils import get_logger
from footycast.utils.paths import get_history_csv_path

logger = get_logger(__name__)


def history_from_df(df: pd.DataFrame) -> List[HistoricalMatch]:
    """Convert a validated history DataFrame into match records."""
    return [
        HistoricalMatch(
            home_team_id=int(row.home_team_id),
            away_team_id=int(row.away_team_id),
            score=Score(home=int(row.home_goals), away=int(row.away_goals)),
            season=int(row.season),
        )
        for row in df.itertuples(index=False)
    ]


def load_history_csv(path: Optional[Path | str] = None) -> List[HistoricalMatch]:
    """
    Load finished matches from a CSV file and validate them.

    Parameters
    ----------
    path : pathlib.Path | str | None
        Path to the CSV file. If None, uses the default path from config.

    Returns
    -------
    List[HistoricalMatch]
        Validated historical matches.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    csv_path = Path(path) if path is not None else get_history_csv_path()
    if not csv_path.exists():
        raise FileNotFoundError(f"History file not found: {csv_path}")

    logger.info("Loading historical matches from %s", csv_path)
    df = validate_history_df(pd.read_csv(csv_path))
    matches = history_from_df(df)
    logger.info("Loaded %d valid historical matches.", len(matches))
    return matches
