"""Events emitted by the execution engine.

Every event is an immutable record stamped with ``time``, the number of
ticks the run had consumed when the event was produced.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ExecutionEvent:
    """Base class for engine events."""

    time: int

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["event"] = self.kind
        return data


@dataclass(frozen=True)
class JobStarted(ExecutionEvent):
    """A job received service for the first time."""

    job_id: int


@dataclass(frozen=True)
class TickProgress(ExecutionEvent):
    """One tick of service was consumed by ``job_id``."""

    job_id: int
    remaining_time: int


@dataclass(frozen=True)
class JobPreempted(ExecutionEvent):
    """A job left the CPU unfinished."""

    job_id: int
    remaining_time: int


@dataclass(frozen=True)
class JobFinished(ExecutionEvent):
    """A job's remaining time reached zero and it left the pool."""

    job_id: int


@dataclass(frozen=True)
class RunCompleted(ExecutionEvent):
    """The run ended.

    Attributes:
        budget_remaining: Unused ticks of the run budget.
        reason: One of ``pool_empty``, ``budget_exhausted``, ``cancelled``.
    """

    budget_remaining: int
    reason: str


REASON_POOL_EMPTY = "pool_empty"
REASON_BUDGET_EXHAUSTED = "budget_exhausted"
REASON_CANCELLED = "cancelled"
