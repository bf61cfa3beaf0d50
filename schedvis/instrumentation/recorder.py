"""In-memory recording of engine events for later analysis.

EventRecorder can be registered as a Scheduler listener or fed directly
from an engine stream. Events from consecutive runs are kept together;
``to_dataframe`` and ``slices`` place them on one continuous timeline by
offsetting each run by the ticks the previous runs used.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pandas as pd

from schedvis.engine.events import (
    ExecutionEvent,
    JobFinished,
    JobPreempted,
    RunCompleted,
    TickProgress,
)

if TYPE_CHECKING:
    from schedvis.stats import SchedulerStats

COLUMNS = ["run", "time", "event", "job_id", "remaining_time", "budget_remaining", "reason"]


@dataclass(frozen=True)
class ServiceSlice:
    """A contiguous stretch of CPU time given to one job.

    Attributes:
        job_id: Job that was serviced.
        start: Absolute tick the slice began at.
        end: Absolute tick the slice ended at.
        finished: True if the job completed at the end of the slice.
    """

    job_id: int
    start: int
    end: int
    finished: bool

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class EventRecorder:
    """Stores execution events in arrival order.

    Slices and per-job lookups key on ``job_id``, so the recorded events
    must come from one id space. ``Scheduler.reset`` clears attached
    recorders for that reason.
    """

    events: list[ExecutionEvent] = field(default_factory=list)

    def __call__(self, event: ExecutionEvent, stats: SchedulerStats | None = None) -> None:
        self.record(event)

    def record(self, event: ExecutionEvent) -> None:
        self.events.append(event)

    def extend(self, events: Iterable[ExecutionEvent]) -> None:
        for event in events:
            self.record(event)

    def clear(self) -> None:
        """Drop all recorded events."""
        self.events.clear()

    def filter_by_type(self, event_type: type[ExecutionEvent]) -> list[ExecutionEvent]:
        """Return events that are instances of ``event_type``."""
        return [e for e in self.events if isinstance(e, event_type)]

    def for_job(self, job_id: int) -> list[ExecutionEvent]:
        """Return events that mention ``job_id``."""
        return [e for e in self.events if getattr(e, "job_id", None) == job_id]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per event.

        Columns: ``run``, ``time`` (absolute tick), ``event``, ``job_id``,
        ``remaining_time``, ``budget_remaining``, ``reason``. Fields an
        event does not carry are left empty.
        """
        rows: list[dict[str, Any]] = []
        for run, offset, event in self._with_offsets():
            row = event.to_dict()
            row["time"] = offset + event.time
            row["run"] = run
            rows.append(row)
        frame = pd.DataFrame(rows, columns=COLUMNS)
        for column in ("job_id", "remaining_time", "budget_remaining"):
            frame[column] = frame[column].astype("Int64")
        return frame

    def slices(self) -> list[ServiceSlice]:
        """Service intervals reconstructed from the tick countdown."""
        result: list[ServiceSlice] = []
        open_starts: dict[int, int] = {}
        for _run, offset, event in self._with_offsets():
            if isinstance(event, TickProgress):
                open_starts.setdefault(event.job_id, offset + event.time - 1)
            elif isinstance(event, (JobFinished, JobPreempted)):
                start = open_starts.pop(event.job_id, offset + event.time)
                result.append(ServiceSlice(
                    job_id=event.job_id,
                    start=start,
                    end=offset + event.time,
                    finished=isinstance(event, JobFinished),
                ))
        return result

    def _with_offsets(self) -> Iterable[tuple[int, int, ExecutionEvent]]:
        run = 0
        offset = 0
        for event in self.events:
            yield run, offset, event
            if isinstance(event, RunCompleted):
                run += 1
                offset += event.time

    def __len__(self) -> int:
        return len(self.events)
