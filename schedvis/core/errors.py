"""Exceptions raised by the scheduling engine.

All argument errors derive from SchedulingError, which is itself a
ValueError so callers that already guard on ValueError keep working.
Every error is raised before any job or pool state is touched.
"""

from __future__ import annotations


class SchedulingError(ValueError):
    """Base class for invalid scheduling requests."""


class InvalidBudgetError(SchedulingError):
    """Run-time budget is not strictly positive."""

    def __init__(self, budget: int) -> None:
        super().__init__(f"budget must be > 0, got {budget}")
        self.budget = budget


class InvalidQuantumError(SchedulingError):
    """Round-robin quantum is missing, not strictly positive, or conflicting."""

    def __init__(self, quantum: int | None, detail: str | None = None) -> None:
        super().__init__(detail or f"quantum must be > 0, got {quantum}")
        self.quantum = quantum


class DuplicateIdError(SchedulingError):
    """A job with the same id is already live in the pool."""

    def __init__(self, job_id: int) -> None:
        super().__init__(f"job id {job_id} is already in the pool")
        self.job_id = job_id


class UnknownPolicyError(SchedulingError):
    """Policy identifier does not name a known scheduling policy."""

    def __init__(self, name: object) -> None:
        super().__init__(f"unknown scheduling policy: {name!r}")
        self.name = name


class InvalidTransitionError(SchedulingError):
    """A job was asked to move between two states that are not connected."""


class PoolBusyError(RuntimeError):
    """The pool was mutated while a run holds it."""
