"""Statistics derived from the job pool and the event stream."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from schedvis.engine.events import (
    REASON_CANCELLED,
    JobPreempted,
    RunCompleted,
    TickProgress,
)

if TYPE_CHECKING:
    from schedvis.core.pool import JobPool
    from schedvis.engine.events import ExecutionEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulerStats:
    """Frozen snapshot of scheduling statistics.

    Attributes:
        total_active: Jobs currently in the pool.
        not_started: Jobs in the pool that never received service.
        finished: Jobs that ran to completion since the last reset.
        preemptions: Times a job left the CPU unfinished.
        ticks_serviced: Total ticks of service handed out.
        runs_completed: Runs that reached RunCompleted.
        runs_cancelled: Runs that ended because of a cancel request.
    """

    total_active: int = 0
    not_started: int = 0
    finished: int = 0
    preemptions: int = 0
    ticks_serviced: int = 0
    runs_completed: int = 0
    runs_cancelled: int = 0

    @property
    def started(self) -> int:
        """Live jobs that have received some service."""
        return self.total_active - self.not_started

    def __str__(self) -> str:
        return "\n".join([
            f"Number of tasks: {self.total_active}",
            f"Number of not started tasks: {self.not_started}",
            f"Number of finished tasks: {self.finished}",
        ])


class StatisticsAggregator:
    """Keeps the event counters and derives pool counts on demand.

    ``total_active`` and ``not_started`` are always read from the pool, so
    they reflect jobs added between runs. ``finished`` counts the pool's
    evictions since the last ``reset()``, so it moves in the same step that
    shrinks ``total_active``. The counters only move forward until ``reset()``.

    Args:
        pool: The pool whose contents are reported.
    """

    def __init__(self, pool: JobPool) -> None:
        self._pool = pool
        self._finished_base = pool.evicted_count
        self._preemptions = 0
        self._ticks_serviced = 0
        self._runs_completed = 0
        self._runs_cancelled = 0

    @property
    def finished(self) -> int:
        return self._pool.evicted_count - self._finished_base

    @property
    def total_active(self) -> int:
        return len(self._pool)

    @property
    def not_started(self) -> int:
        return self._pool.not_started_count()

    def observe(self, event: ExecutionEvent) -> SchedulerStats:
        """Fold one engine event into the counters and return a fresh snapshot."""
        if isinstance(event, TickProgress):
            self._ticks_serviced += 1
        elif isinstance(event, JobPreempted):
            self._preemptions += 1
        elif isinstance(event, RunCompleted):
            self._runs_completed += 1
            if event.reason == REASON_CANCELLED:
                self._runs_cancelled += 1
        return self.snapshot()

    def snapshot(self) -> SchedulerStats:
        return SchedulerStats(
            total_active=self.total_active,
            not_started=self.not_started,
            finished=self.finished,
            preemptions=self._preemptions,
            ticks_serviced=self._ticks_serviced,
            runs_completed=self._runs_completed,
            runs_cancelled=self._runs_cancelled,
        )

    def reset(self) -> None:
        """Zero every event counter."""
        logger.debug("Statistics reset")
        self._finished_base = self._pool.evicted_count
        self._preemptions = 0
        self._ticks_serviced = 0
        self._runs_completed = 0
        self._runs_cancelled = 0

    def __repr__(self) -> str:
        return (
            f"StatisticsAggregator(active={self.total_active}, "
            f"not_started={self.not_started}, finished={self.finished})"
        )
