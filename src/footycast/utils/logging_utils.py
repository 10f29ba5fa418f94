"""
Logging utilities for FootyCast.

Every module calls `get_logger(__name__)`; the first call configures the root
logger to write "time | logger | level | message" lines to stderr at
LOG_LEVEL (set FOOTYCAST_LOG_LEVEL=DEBUG to see the engine's factor dumps).
"""

import logging
from typing import Optional

from footycast.config import LOG_FORMAT, LOG_LEVEL


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger, configuring the root handler on first use.

    Parameters
    ----------
    name : str | None
        Logger name. If None, the "footycast" logger is returned.

    Returns
    -------
    logging.Logger
        Logger instance.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    return logging.getLogger(name if name is not None else "footycast")
