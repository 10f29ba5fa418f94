"""
Schema and validation utilities for finished-match (history) data.
"""

from __future__ import annotations

from typing import List

import pandas as pd

from footycast.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Expected columns in a history CSV
HISTORY_COLUMNS: List[str] = [
    "home_team_id",
    "away_team_id",
    "home_goals",
    "away_goals",
    "season",
]


def validate_history_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate that a DataFrame conforms to the expected history schema.

    Checks:
    - All required columns are present.
    - Rows with a missing or negative score are dropped (warn but don't fail).
    - No duplicate rows (based on the schema columns).
    - Id, goal and season columns are coerced to integers.

    Parameters
    ----------
    df : pandas.DataFrame
        Raw history DataFrame.

    Returns
    -------
    pandas.DataFrame
        A validated DataFrame restricted to HISTORY_COLUMNS.

    Raises
    ------
    ValueError
        If required columns are missing.
    """
    missing = [col for col in HISTORY_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required history columns: {missing}")

    df = df[HISTORY_COLUMNS].copy()
    for col in HISTORY_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    before = len(df)
    df = df.dropna()
    df = df[(df["home_goals"] >= 0) & (df["away_goals"] >= 0)]
    if len(df) < before:
        logger.warning(
            "Dropped %d history rows with missing or invalid values.",
            before - len(df),
        )

    before = len(df)
    df = df.drop_duplicates()
    if len(df) < before:
        logger.info("Dropped %d duplicate history rows.", before - len(df))

    return df.astype(int).reset_index(drop=True)

