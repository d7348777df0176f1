"""In-memory, time-bounded cache for raw sheet snapshots."""

import logging
import time
from typing import Any, Callable, List, Optional


logger = logging.getLogger(__name__)


class SheetCache:
    """
    Holds the most recent raw grid fetched from the spreadsheet.

    A snapshot is fresh for ``ttl_seconds`` after it was stored. Expired
    snapshots are kept so they can be served when the upstream fetch
    fails.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._rows: Optional[List[List[Any]]] = None
        self._stored_at: Optional[float] = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def put(self, rows: List[List[Any]]) -> None:
        """Store a snapshot and reset its age."""
        self._rows = rows
        self._stored_at = self._clock()
        logger.debug(f"Cached {len(rows)} rows")

    def is_expired(self) -> bool:
        """True when nothing is cached or the snapshot is older than the TTL."""
        if self._rows is None or self._stored_at is None:
            return True
        return self._clock() - self._stored_at >= self._ttl

    def get(self) -> Optional[List[List[Any]]]:
        """Return the cached rows if still fresh, None otherwise."""
        if self.is_expired():
            return None
        return self._rows

    def get_stale(self) -> Optional[List[List[Any]]]:
        """Return the last cached rows regardless of age."""
        return self._rows

    def clear(self) -> None:
        self._rows = None
        self._stored_at = None
