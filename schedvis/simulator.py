"""Scheduling session: pool, generator, engine and statistics wired together.

Scheduler is the non-visual core of an interactive scheduling demo. The
caller generates jobs, picks a policy and runs it for a tick budget; every
engine event is folded into the statistics and handed to listeners (a
renderer, a recorder) in order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from schedvis.core.cancellation import CancellationToken
from schedvis.core.pool import JobPool
from schedvis.engine.events import JobFinished, RunCompleted
from schedvis.engine.executor import ExecutionEngine
from schedvis.generator import GeneratorConfig, JobGenerator
from schedvis.instrumentation.recorder import EventRecorder
from schedvis.policies import PolicyName, SchedulingPolicy, get_policy
from schedvis.stats import SchedulerStats, StatisticsAggregator

if TYPE_CHECKING:
    from collections.abc import Generator

    from schedvis.core.job import Job
    from schedvis.engine.events import ExecutionEvent

logger = logging.getLogger(__name__)

EventListener = Callable[["ExecutionEvent", SchedulerStats], None]
"""Callback receiving each event together with the stats snapshot taken after it."""


@dataclass
class RunResult:
    """Outcome of a run driven to the end.

    Attributes:
        policy: Policy the pool was ordered by.
        events: Every event emitted, in order.
        stats: Statistics snapshot after the final event.
        reason: Why the run stopped.
        budget_remaining: Unused ticks.
    """

    policy: SchedulingPolicy
    events: list[ExecutionEvent] = field(default_factory=list)
    stats: SchedulerStats = field(default_factory=SchedulerStats)
    reason: str = ""
    budget_remaining: int = 0

    @property
    def finished_job_ids(self) -> list[int]:
        return [e.job_id for e in self.events if isinstance(e, JobFinished)]

    @property
    def ticks_used(self) -> int:
        return self.events[-1].time if self.events else 0


class Scheduler:
    """Interactive scheduling session.

    Args:
        config: Job generation settings.
        seed: Seed for the job generator.
        clock: Arrival timestamp source for generated jobs.

    Example::

        scheduler = Scheduler(seed=7)
        scheduler.generate_jobs(10)
        result = scheduler.run_to_completion("rr", budget=40, quantum=3)
        print(result.stats)
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        seed: int | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        generator_kwargs = {"seed": seed}
        if clock is not None:
            generator_kwargs["clock"] = clock
        self.pool = JobPool()
        self.generator = JobGenerator(config, **generator_kwargs)
        self.engine = ExecutionEngine("scheduler")
        self.cancellation = CancellationToken()
        self._stats = StatisticsAggregator(self.pool)
        self._listeners: list[EventListener] = []

    @property
    def stats(self) -> SchedulerStats:
        return self._stats.snapshot()

    @property
    def is_running(self) -> bool:
        return self.pool.is_locked

    def add_listener(self, listener: EventListener) -> None:
        """Register a callback for every event of every subsequent run."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Job creation
    # ------------------------------------------------------------------

    def add_job(self, priority: int, service_time: int) -> Job:
        """Create a job with explicit parameters and append it to the pool."""
        job = self.generator.new_job(priority, service_time)
        self.pool.add(job)
        return job

    def generate_jobs(self, count: int | None = None, *, continuous: bool = False) -> list[Job]:
        """Append random jobs to the pool.

        Args:
            count: Jobs to create; a random batch when omitted.
            continuous: Behave like a periodic feeder and add nothing while
                the pool already exceeds ``max_pool_size``.
        """
        if continuous and len(self.pool) > self.generator.config.max_pool_size:
            logger.debug("Pool holds %d jobs, skipping continuous generation", len(self.pool))
            return []
        jobs = self.generator.generate(count)
        for job in jobs:
            self.pool.add(job)
        logger.info("Added %d jobs, pool size %d", len(jobs), len(self.pool))
        return jobs

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(
        self,
        policy: str | PolicyName | SchedulingPolicy,
        budget: int,
        quantum: int | None = None,
    ) -> Generator[ExecutionEvent, None, None]:
        """Order the pool by ``policy`` and return the run's event stream.

        All validation happens before the pool is reordered, so a rejected
        call leaves every job exactly as it was.

        Args:
            policy: Policy instance or identifier (``fcfs``, ``sjf``, ``prio``, ``rr``).
            budget: Ticks available for the run.
            quantum: Round-robin slice; ignored by the other policies. For a
                round-robin instance it must match the instance's quantum.

        Raises:
            UnknownPolicyError: For an unrecognised identifier.
            InvalidQuantumError: For round-robin without a positive quantum
                or with one that conflicts with a round-robin instance.
            InvalidBudgetError: For a non-positive budget.
            PoolBusyError: If another run still holds the pool.
        """
        resolved = get_policy(policy, quantum)
        events = self.engine.run(self.pool, budget, resolved.quantum, self.cancellation)
        self.pool.reorder(resolved)
        self.cancellation.reset()
        logger.info("Pool ordered by %r", resolved)
        return self._drive(events)

    def run_to_completion(
        self,
        policy: str | PolicyName | SchedulingPolicy,
        budget: int,
        quantum: int | None = None,
    ) -> RunResult:
        """Run ``policy`` and collect every event into a RunResult."""
        resolved = get_policy(policy, quantum)
        result = RunResult(policy=resolved)
        for event in self.run(resolved, budget):
            result.events.append(event)
            if isinstance(event, RunCompleted):
                result.reason = event.reason
                result.budget_remaining = event.budget_remaining
        result.stats = self.stats
        return result

    def cancel(self) -> None:
        """Stop the active run at its next iteration boundary."""
        self.cancellation.cancel()

    def reset(self) -> None:
        """Forget every job and counter and restart id assignment.

        Attached EventRecorders are cleared too, since restarted ids would
        otherwise merge old and new jobs into one timeline row.

        Raises:
            PoolBusyError: If a run still holds the pool.
        """
        self.pool.clear()
        self._stats.reset()
        self.generator.reset()
        self.cancellation.reset()
        for listener in self._listeners:
            if isinstance(listener, EventRecorder):
                listener.clear()
        logger.info("Scheduler reset")

    def _drive(self, events: Generator[ExecutionEvent, None, None]) -> Generator[ExecutionEvent, None, None]:
        for event in events:
            snapshot = self._stats.observe(event)
            for listener in list(self._listeners):
                listener(event, snapshot)
            yield event

    def __repr__(self) -> str:
        return f"Scheduler(pool={len(self.pool)}, finished={self._stats.finished})"
