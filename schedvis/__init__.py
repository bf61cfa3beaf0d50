"""schedvis: CPU scheduling simulation over synthetic jobs.

Four ordering policies (FCFS, SJF, priority, round-robin) feed one
time-budgeted execution engine that emits a stream of events for
renderers and statistics.
"""

import logging

from schedvis.core import (
    CancellationToken,
    DuplicateIdError,
    InvalidBudgetError,
    InvalidQuantumError,
    InvalidTransitionError,
    Job,
    JobPool,
    JobState,
    PoolBusyError,
    SchedulingError,
    UnknownPolicyError,
)
from schedvis.engine import (
    ExecutionEngine,
    ExecutionEvent,
    JobFinished,
    JobPreempted,
    JobStarted,
    RunCompleted,
    TickProgress,
)
from schedvis.generator import GeneratorConfig, JobGenerator
from schedvis.instrumentation import EventRecorder, ServiceSlice
from schedvis.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from schedvis.policies import (
    FirstComeFirstServed,
    PolicyName,
    PriorityOrder,
    RoundRobin,
    SchedulingPolicy,
    ShortestJobFirst,
    get_policy,
)
from schedvis.simulator import RunResult, Scheduler
from schedvis.stats import SchedulerStats, StatisticsAggregator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "DuplicateIdError",
    "EventRecorder",
    "ExecutionEngine",
    "ExecutionEvent",
    "FirstComeFirstServed",
    "GeneratorConfig",
    "InvalidBudgetError",
    "InvalidQuantumError",
    "InvalidTransitionError",
    "Job",
    "JobFinished",
    "JobGenerator",
    "JobPool",
    "JobPreempted",
    "JobStarted",
    "JobState",
    "PolicyName",
    "PoolBusyError",
    "PriorityOrder",
    "RoundRobin",
    "RunCompleted",
    "RunResult",
    "Scheduler",
    "SchedulerStats",
    "SchedulingError",
    "SchedulingPolicy",
    "ServiceSlice",
    "ShortestJobFirst",
    "StatisticsAggregator",
    "TickProgress",
    "UnknownPolicyError",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "get_policy",
    "set_level",
    "set_module_level",
]
