"""Execution engine and the events it emits."""

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
from schedvis.engine.executor import ExecutionEngine, validate_run_arguments

__all__ = [
    "REASON_BUDGET_EXHAUSTED",
    "REASON_CANCELLED",
    "REASON_POOL_EMPTY",
    "ExecutionEngine",
    "ExecutionEvent",
    "JobFinished",
    "JobPreempted",
    "JobStarted",
    "RunCompleted",
    "TickProgress",
    "validate_run_arguments",
]
