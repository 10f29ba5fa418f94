"""
In-memory cache of historical matches.

Populated once (at startup or on demand) and read many times. The engine
never touches the store directly: callers pass `store.matches` into
`aggregate`, and an empty store simply means "no history".
"""

from __future__ import annotations

import threading
from typing import Callable, Iterable, Tuple

from footycast.engine.types import HistoricalMatch
from footycast.utils.logging_utils import get_logger

logger = get_logger(__name__)

HistoryLoader = Callable[[], Iterable[HistoricalMatch]]


class HistoryStore:
    def __init__(self) -> None:
        self._matches: Tuple[HistoricalMatch, ...] = ()
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def matches(self) -> Tuple[HistoricalMatch, ...]:
        return self._matches

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def populate(self, loader: HistoryLoader) -> int:
        """
        Replace the cached matches with whatever `loader` returns.

        A failing loader leaves the store empty (but loaded). Returns the
        number of cached matches.
        """
        try:
            matches = tuple(loader())
        except (OSError, ValueError) as exc:
            logger.error("Failed to load historical matches: %s", exc)
            matches = ()

        with self._lock:
            self._matches = matches
            self._loaded = True

        logger.info("History cache holds %d matches.", len(matches))
        return len(matches)

    def clear(self) -> None:
        with self._lock:
            self._matches = ()
            self._loaded = False
