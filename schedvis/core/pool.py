"""Ordered pool of live jobs.

The pool keeps jobs in insertion order until a policy reorders it. Only
the execution engine mutates the pool while a run is in progress; any
other mutation during that window raises PoolBusyError.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from schedvis.core.errors import DuplicateIdError, PoolBusyError
from schedvis.core.job import Job

if TYPE_CHECKING:
    from schedvis.policies import SchedulingPolicy

logger = logging.getLogger(__name__)


class JobPool:
    """Index-addressable, ordered collection of live jobs.

    Args:
        jobs: Optional initial jobs, added in order.
    """

    def __init__(self, jobs: list[Job] | None = None) -> None:
        self._jobs: list[Job] = []
        self._ids: set[int] = set()
        self._owner: str | None = None
        self._evicted = 0
        for job in jobs or []:
            self.add(job)

    def add(self, job: Job) -> None:
        """Append a job to the end of the pool.

        Raises:
            DuplicateIdError: If a live job already uses ``job.job_id``.
            PoolBusyError: If a run currently holds the pool.
        """
        self._check_writable()
        if job.job_id in self._ids:
            raise DuplicateIdError(job.job_id)
        self._jobs.append(job)
        self._ids.add(job.job_id)

    def remove(self, job: Job) -> None:
        """Remove ``job`` by identity. Does nothing if it is not present."""
        self._check_writable()
        self._discard(job)

    def reorder(self, ordering: SchedulingPolicy | Callable[[Job], Any]) -> None:
        """Stable in-place sort by a policy or a key function.

        Equal-ranked jobs keep their relative order.
        """
        self._check_writable()
        key = getattr(ordering, "sort_key", ordering)
        self._jobs.sort(key=key)

    def clear(self) -> None:
        """Drop every job. Counters held elsewhere are not touched."""
        self._check_writable()
        self._jobs.clear()
        self._ids.clear()

    def get(self, job_id: int) -> Job | None:
        """Return the live job with ``job_id``, or None."""
        for job in self._jobs:
            if job.job_id == job_id:
                return job
        return None

    def not_started_count(self) -> int:
        return sum(1 for job in self._jobs if not job.started)

    @property
    def evicted_count(self) -> int:
        """Finished jobs removed by runs over the lifetime of the pool."""
        return self._evicted

    @property
    def is_locked(self) -> bool:
        return self._owner is not None

    @contextmanager
    def locked(self, owner: str) -> Iterator[JobPool]:
        """Hold the pool for ``owner``. Other writers are rejected meanwhile."""
        if self._owner is not None:
            raise PoolBusyError(f"pool is already held by {self._owner}")
        self._owner = owner
        try:
            yield self
        finally:
            self._owner = None

    def _evict(self, job: Job) -> None:
        """Remove a finished job on behalf of the run holding the pool."""
        self._discard(job)
        self._evicted += 1

    def _discard(self, job: Job) -> None:
        for index, candidate in enumerate(self._jobs):
            if candidate is job:
                del self._jobs[index]
                self._ids.discard(job.job_id)
                return

    def _check_writable(self) -> None:
        if self._owner is not None:
            raise PoolBusyError(f"pool is held by {self._owner} while a run is active")

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(list(self._jobs))

    def __getitem__(self, index: int) -> Job:
        return self._jobs[index]

    def __contains__(self, job: object) -> bool:
        return any(candidate is job for candidate in self._jobs)

    def __repr__(self) -> str:
        return f"JobPool(size={len(self._jobs)}, locked={self.is_locked})"
