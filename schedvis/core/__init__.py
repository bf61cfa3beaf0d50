"""Core data model: jobs, the job pool, cancellation and errors."""

from schedvis.core.cancellation import CancellationToken
from schedvis.core.errors import (
    DuplicateIdError,
    InvalidBudgetError,
    InvalidQuantumError,
    InvalidTransitionError,
    PoolBusyError,
    SchedulingError,
    UnknownPolicyError,
)
from schedvis.core.job import Job, JobState
from schedvis.core.pool import JobPool

__all__ = [
    "CancellationToken",
    "DuplicateIdError",
    "InvalidBudgetError",
    "InvalidQuantumError",
    "InvalidTransitionError",
    "Job",
    "JobPool",
    "JobState",
    "PoolBusyError",
    "SchedulingError",
    "UnknownPolicyError",
]
