"""
Helper functions for file and directory paths used in FootyCast.
"""

from pathlib import Path

from footycast.config import RAW_DATA_DIR, HISTORY_FILENAME


def get_history_csv_path(filename: str | None = None) -> Path:
    """
    Return the path to a local CSV export of finished matches.

    Parameters
    ----------
    filename : str | None
        Specific filename, or None for the default history CSV.

    Returns
    -------
    Path
        Full path to the history file (which may not exist).
    """
    if filename is None:
        filename = HISTORY_FILENAME
    return RAW_DATA_DIR / filename
