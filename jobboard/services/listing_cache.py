"""
Job Listing Cache

Holds the full job set that the query engine filters on every listing
request, so the collection is fetched once and reused instead of on
every keystroke/page change.

Each refresh is tagged with the write generation current when it began.
invalidate() (called after every create/update/delete) advances the
generation, so a slow load that started before a write is discarded when
it finally completes. Loads that overlap without a write in between all
read equally fresh data, and any of them may install the snapshot.
"""

import threading
import time
from typing import Callable, List, Optional

from jobboard.common.job_posting import JobPosting
from jobboard.common.logger import get_logger

JobLoader = Callable[[], List[JobPosting]]


class JobListingCache:
    """
    Thread-safe snapshot of all job postings.

    Usage:
        cache = JobListingCache(ttl_seconds=60)
        jobs = cache.get_or_refresh(store.list_all)
        ...
        store.create(draft)
        cache.invalidate()
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            ttl_seconds: Snapshot lifetime; 0 keeps it until invalidated
            clock: Time source (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._jobs: Optional[List[JobPosting]] = None
        self._loaded_at: float = 0.0
        self._generation = 0
        self.logger = get_logger(__name__, component="listing_cache")

    def _is_fresh(self) -> bool:
        if self._jobs is None:
            return False
        if self.ttl_seconds <= 0:
            return True
        return (self._clock() - self._loaded_at) < self.ttl_seconds

    @property
    def generation(self) -> int:
        """Current write generation (advanced only by invalidate())."""
        with self._lock:
            return self._generation

    def snapshot(self) -> Optional[List[JobPosting]]:
        """Current snapshot (None when empty), regardless of age."""
        with self._lock:
            return list(self._jobs) if self._jobs is not None else None

    def begin_refresh(self) -> int:
        """Return the token for a refresh starting now: the current generation."""
        with self._lock:
            return self._generation

    def complete_refresh(self, token: int, jobs: List[JobPosting]) -> bool:
        """
        Store the result of a refresh.

        Returns:
            True if the snapshot was replaced, False if a write happened
            after the refresh began
        """
        with self._lock:
            if token != self._generation:
                self.logger.info(
                    f"Discarded stale refresh from generation {token} "
                    f"(current is {self._generation})"
                )
                return False
            self._jobs = list(jobs)
            self._loaded_at = self._clock()

        self.logger.debug(f"Cached {len(jobs)} jobs (generation {token})")
        return True

    def get_or_refresh(self, loader: JobLoader) -> List[JobPosting]:
        """
        Return the cached jobs, loading them when empty or expired.

        The loader runs outside the lock. If it raises, the error
        propagates and the previous snapshot is left as it was.
        """
        with self._lock:
            if self._is_fresh():
                return list(self._jobs)

        token = self.begin_refresh()
        jobs = loader()
        self.complete_refresh(token, jobs)
        return list(jobs)

    def invalidate(self) -> None:
        """Drop the snapshot and make refreshes started before now stale."""
        with self._lock:
            self._jobs = None
            self._loaded_at = 0.0
            self._generation += 1
        self.logger.debug("Listing cache invalidated")
