"""Time-budgeted execution loop.

The engine walks the pool with a cyclic cursor and services one job per
iteration. Finished jobs are evicted and the cursor stays where it is, so
the next job slides into the same slot; unfinished jobs advance the
cursor. The same loop body therefore drives both the run-to-completion
policies and round-robin.

Budget convention: a job never receives more service than the budget has
left, so ``budget_remaining`` bottoms out at zero. A run-to-completion job
that needs more than the budget is left unfinished in PREEMPTED state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from schedvis.core.cancellation import CancellationToken
from schedvis.core.errors import InvalidBudgetError, InvalidQuantumError
from schedvis.core.job import Job, JobState
from schedvis.engine.events import (
    REASON_BUDGET_EXHAUSTED,
    REASON_CANCELLED,
    REASON_POOL_EMPTY,
    ExecutionEvent,
    JobFinished,
    JobPreempted,
    JobStarted,
    RunCompleted,
    TickProgress,
)

if TYPE_CHECKING:
    from collections.abc import Generator

    from schedvis.core.pool import JobPool

logger = logging.getLogger(__name__)


def validate_run_arguments(budget: int, quantum: int | None) -> None:
    """Reject a run request before anything is mutated.

    Raises:
        InvalidBudgetError: If ``budget`` is not positive.
        InvalidQuantumError: If ``quantum`` is given and not positive.
    """
    if budget is None or budget <= 0:
        raise InvalidBudgetError(budget)
    if quantum is not None and quantum <= 0:
        raise InvalidQuantumError(quantum)


class ExecutionEngine:
    """Drains a job pool under a tick budget, emitting execution events.

    Args:
        name: Owner label used when holding the pool and in log lines.

    Example::

        engine = ExecutionEngine()
        for event in engine.run(pool, budget=20, quantum=3):
            render(event)
    """

    def __init__(self, name: str = "engine") -> None:
        self.name = name

    def run(
        self,
        pool: JobPool,
        budget: int,
        quantum: int | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Generator[ExecutionEvent, None, None]:
        """Validate the request, then return a lazy stream of events.

        Validation happens at call time; the pool is not touched until the
        returned generator is first advanced.

        Args:
            pool: Jobs to service, already ordered by a policy.
            budget: Ticks available for this run.
            quantum: Round-robin slice, or None to run each job to completion.
            cancellation: Token checked before each service step.

        Raises:
            InvalidBudgetError: If ``budget`` is not positive.
            InvalidQuantumError: If ``quantum`` is given and not positive.
        """
        validate_run_arguments(budget, quantum)
        token = cancellation if cancellation is not None else CancellationToken()
        return self._execute(pool, budget, quantum, token)

    def _execute(
        self,
        pool: JobPool,
        budget: int,
        quantum: int | None,
        token: CancellationToken,
    ) -> Generator[ExecutionEvent, None, None]:
        logger.info(
            "[%s] Run started: jobs=%d budget=%d quantum=%s",
            self.name, len(pool), budget, quantum,
        )
        elapsed = 0
        cursor = 0

        with pool.locked(self.name):
            while len(pool) > 0 and budget > 0 and not token.is_cancelled:
                cursor %= len(pool)
                job = pool[cursor]

                amount = min(job.remaining_time, budget)
                if quantum is not None:
                    amount = min(amount, quantum)

                start_remaining = job.remaining_time
                start_time = elapsed
                first = job.begin_service()
                job.service(amount)
                budget -= amount
                elapsed += amount

                if job.remaining_time == 0:
                    job.transition(JobState.FINISHED)
                    pool._evict(job)
                    closing: ExecutionEvent = JobFinished(time=elapsed, job_id=job.job_id)
                else:
                    job.transition(JobState.PREEMPTED)
                    cursor = (cursor + 1) % len(pool)
                    closing = JobPreempted(
                        time=elapsed, job_id=job.job_id, remaining_time=job.remaining_time,
                    )

                logger.debug(
                    "[%s] Serviced %s for %d ticks (%d -> %d), budget left %d",
                    self.name, job.name, amount, start_remaining, job.remaining_time, budget,
                )

                if first:
                    yield JobStarted(time=start_time, job_id=job.job_id)
                yield from _countdown(job, start_remaining, start_time)
                yield closing

            if len(pool) == 0:
                reason = REASON_POOL_EMPTY
            elif budget <= 0:
                reason = REASON_BUDGET_EXHAUSTED
            else:
                reason = REASON_CANCELLED

        logger.info(
            "[%s] Run completed: reason=%s budget_remaining=%d jobs_left=%d",
            self.name, reason, budget, len(pool),
        )
        yield RunCompleted(time=elapsed, budget_remaining=budget, reason=reason)

    def __repr__(self) -> str:
        return f"ExecutionEngine('{self.name}')"


def _countdown(job: Job, start_remaining: int, start_time: int) -> Generator[TickProgress, None, None]:
    """One TickProgress per serviced tick, from the start value down to the current one."""
    for tick, remaining in enumerate(range(start_remaining - 1, job.remaining_time - 1, -1), start=1):
        yield TickProgress(time=start_time + tick, job_id=job.job_id, remaining_time=remaining)
