"""Job entity and its lifecycle state machine.

A Job is one unit of schedulable work. Its service demand is fixed at
creation (``total_time_required``); ``remaining_time`` counts down as the
execution engine services it and reaches zero exactly once.

State machine::

    NOT_STARTED -> RUNNING -> FINISHED
                   RUNNING <-> PREEMPTED -> FINISHED

FINISHED is terminal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from schedvis.core.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class JobState(Enum):
    """Lifecycle state of a job."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PREEMPTED = "preempted"
    FINISHED = "finished"


_TRANSITIONS: dict[JobState, frozenset[JobState]] = {
    JobState.NOT_STARTED: frozenset({JobState.RUNNING}),
    JobState.RUNNING: frozenset({JobState.PREEMPTED, JobState.FINISHED}),
    JobState.PREEMPTED: frozenset({JobState.RUNNING}),
    JobState.FINISHED: frozenset(),
}


@dataclass(eq=False)
class Job:
    """A schedulable unit of simulated work.

    Jobs compare by identity: two jobs with equal fields are still two
    different jobs.

    Attributes:
        job_id: Unique, monotonically assigned identifier.
        arrival_time: Creation timestamp. FCFS key and priority tie-breaker.
        priority: Higher value means higher precedence.
        total_time_required: Original service demand in ticks.
        remaining_time: Ticks still owed. Defaults to total_time_required.
        started: False until the job first receives service.
        state: Current lifecycle state.
        name: Display label, ``"Job <id>"`` unless given.
    """

    job_id: int
    arrival_time: float
    priority: int
    total_time_required: int
    remaining_time: int | None = None
    started: bool = False
    state: JobState = JobState.NOT_STARTED
    name: str = field(default="")

    def __post_init__(self) -> None:
        if self.total_time_required <= 0:
            raise ValueError(
                f"total_time_required must be > 0, got {self.total_time_required}"
            )
        if self.remaining_time is None:
            self.remaining_time = self.total_time_required
        if not 0 <= self.remaining_time <= self.total_time_required:
            raise ValueError(
                f"remaining_time must be in [0, {self.total_time_required}], "
                f"got {self.remaining_time}"
            )
        if not self.name:
            self.name = f"Job {self.job_id}"

    @property
    def is_finished(self) -> bool:
        return self.state is JobState.FINISHED

    @property
    def time_serviced(self) -> int:
        """Ticks of service received so far."""
        return self.total_time_required - self.remaining_time

    def transition(self, new_state: JobState) -> None:
        """Move to ``new_state``, enforcing the lifecycle graph.

        Raises:
            InvalidTransitionError: If the move is not an edge of the graph.
        """
        if new_state not in _TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"{self.name}: cannot move from {self.state.value} to {new_state.value}"
            )
        logger.debug("[%s] %s -> %s", self.name, self.state.value, new_state.value)
        self.state = new_state

    def begin_service(self) -> bool:
        """Enter RUNNING. Returns True if this is the job's first service."""
        first = not self.started
        self.started = True
        self.transition(JobState.RUNNING)
        return first

    def service(self, amount: int) -> int:
        """Consume ``amount`` ticks of remaining time. Returns the new remaining time."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount > self.remaining_time:
            raise ValueError(
                f"{self.name}: cannot service {amount} ticks, only {self.remaining_time} remain"
            )
        self.remaining_time -= amount
        return self.remaining_time

    def __repr__(self) -> str:
        return (
            f"Job(id={self.job_id}, priority={self.priority}, "
            f"remaining={self.remaining_time}/{self.total_time_required}, "
            f"state={self.state.value})"
        )
