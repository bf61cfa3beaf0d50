"""Ordering policies applied to the job pool before a run.

Each policy defines a total order over jobs through ``sort_key``; the pool
applies it with a stable sort, so jobs that rank equal keep their prior
relative order. Policies never modify job fields.

Policies:
- FirstComeFirstServed: earliest arrival first.
- ShortestJobFirst: least remaining time first, evaluated at sort time.
- PriorityOrder: highest priority first, earliest arrival breaks ties.
- RoundRobin: earliest arrival first; preemption comes from the quantum
  the execution engine enforces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from schedvis.core.errors import InvalidQuantumError, UnknownPolicyError
from schedvis.core.job import Job


class PolicyName(Enum):
    """Identifiers accepted by ``get_policy``."""

    FCFS = "fcfs"
    SJF = "sjf"
    PRIORITY = "prio"
    ROUND_ROBIN = "rr"


class SchedulingPolicy(ABC):
    """Strategy for ordering the job pool."""

    name: PolicyName

    @abstractmethod
    def sort_key(self, job: Job) -> Any:
        """Return the key the pool sorts ascending by."""
        ...

    @property
    def quantum(self) -> int | None:
        """Service slice per turn, or None for run-to-completion policies."""
        return None

    @property
    def is_preemptive(self) -> bool:
        return self.quantum is not None

    def compare(self, a: Job, b: Job) -> int:
        """Three-way comparison consistent with ``sort_key``."""
        ka, kb = self.sort_key(a), self.sort_key(b)
        return (ka > kb) - (ka < kb)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FirstComeFirstServed(SchedulingPolicy):
    """Non-preemptive, earliest arrival first."""

    name = PolicyName.FCFS

    def sort_key(self, job: Job) -> Any:
        return job.arrival_time


class ShortestJobFirst(SchedulingPolicy):
    """Non-preemptive, least remaining time first.

    Uses ``remaining_time`` rather than the original demand, so a job cut
    short by an earlier run is ranked by what it still needs.
    """

    name = PolicyName.SJF

    def sort_key(self, job: Job) -> Any:
        return job.remaining_time


class PriorityOrder(SchedulingPolicy):
    """Non-preemptive, highest priority first; earlier arrival wins ties."""

    name = PolicyName.PRIORITY

    def sort_key(self, job: Job) -> Any:
        return (-job.priority, job.arrival_time)


class RoundRobin(SchedulingPolicy):
    """Cyclic service in arrival order, ``quantum`` ticks per turn.

    Args:
        quantum: Maximum ticks a job is serviced per turn.

    Raises:
        InvalidQuantumError: If ``quantum`` is missing or not positive.
    """

    name = PolicyName.ROUND_ROBIN

    def __init__(self, quantum: int) -> None:
        if quantum is None or quantum <= 0:
            raise InvalidQuantumError(quantum)
        self._quantum = quantum

    @property
    def quantum(self) -> int:
        return self._quantum

    def sort_key(self, job: Job) -> Any:
        return job.arrival_time

    def __repr__(self) -> str:
        return f"RoundRobin(quantum={self._quantum})"


_ALIASES: dict[str, PolicyName] = {
    "fcfs": PolicyName.FCFS,
    "sjf": PolicyName.SJF,
    "prio": PolicyName.PRIORITY,
    "priority": PolicyName.PRIORITY,
    "rr": PolicyName.ROUND_ROBIN,
    "round_robin": PolicyName.ROUND_ROBIN,
    "roundrobin": PolicyName.ROUND_ROBIN,
}


def get_policy(
    name: str | PolicyName | SchedulingPolicy,
    quantum: int | None = None,
) -> SchedulingPolicy:
    """Resolve a policy identifier to a policy instance.

    ``quantum`` is only consulted for round-robin; other policies ignore it.
    A round-robin instance is returned as is, and an explicit ``quantum``
    must then match the one it was built with.

    Raises:
        UnknownPolicyError: If ``name`` is not a known identifier.
        InvalidQuantumError: If round-robin is requested without a positive
            quantum, or with one that differs from the instance's.
    """
    if isinstance(name, SchedulingPolicy):
        if quantum is not None and name.quantum is not None and quantum != name.quantum:
            raise InvalidQuantumError(quantum, f"{name!r} already has quantum {name.quantum}")
        return name
    if isinstance(name, PolicyName):
        policy_name = name
    else:
        policy_name = _ALIASES.get(str(name).strip().lower().replace("-", "_"))
        if policy_name is None:
            raise UnknownPolicyError(name)

    if policy_name is PolicyName.FCFS:
        return FirstComeFirstServed()
    if policy_name is PolicyName.SJF:
        return ShortestJobFirst()
    if policy_name is PolicyName.PRIORITY:
        return PriorityOrder()
    return RoundRobin(quantum)
