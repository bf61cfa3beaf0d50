"""Unit tests for EventRecorder."""

import pandas as pd

from schedvis.core.pool import JobPool
from schedvis.engine.events import JobFinished, JobPreempted, RunCompleted, TickProgress
from schedvis.engine.executor import ExecutionEngine
from schedvis.instrumentation.recorder import COLUMNS, EventRecorder, ServiceSlice
from schedvis.simulator import Scheduler


def _record(pool, budget, quantum=None) -> EventRecorder:
    recorder = EventRecorder()
    recorder.extend(ExecutionEngine().run(pool, budget, quantum=quantum))
    return recorder


class TestEventRecorder:
    def test_records_in_order(self, make_pool):
        recorder = _record(make_pool([2]), 5)
        assert len(recorder) == 5
        assert isinstance(recorder.events[-1], RunCompleted)

    def test_filters(self, make_pool):
        pool = make_pool([2, 1])
        a, b = list(pool)
        recorder = _record(pool, 5)
        assert len(recorder.filter_by_type(TickProgress)) == 3
        assert all(getattr(e, "job_id") == b.job_id for e in recorder.for_job(b.job_id))
        assert len(recorder.for_job(a.job_id)) == 4

    def test_clear(self, make_pool):
        recorder = _record(make_pool([2]), 5)
        recorder.clear()
        assert len(recorder) == 0

    def test_works_as_listener(self):
        scheduler = Scheduler(seed=1)
        recorder = EventRecorder()
        scheduler.add_listener(recorder)
        scheduler.generate_jobs(3)
        result = scheduler.run_to_completion("fcfs", budget=100)
        assert recorder.events == result.events


class TestSlices:
    def test_round_robin_slices(self, make_pool):
        pool = make_pool([3, 2])
        a, b = list(pool)
        recorder = _record(pool, 100, quantum=2)
        assert recorder.slices() == [
            ServiceSlice(job_id=a.job_id, start=0, end=2, finished=False),
            ServiceSlice(job_id=b.job_id, start=2, end=4, finished=True),
            ServiceSlice(job_id=a.job_id, start=4, end=5, finished=True),
        ]

    def test_slices_continue_across_runs(self, make_pool):
        pool = make_pool([6])
        recorder = EventRecorder()
        engine = ExecutionEngine()
        recorder.extend(engine.run(pool, 4))
        recorder.extend(engine.run(pool, 4))
        slices = recorder.slices()
        assert [(s.start, s.end, s.finished) for s in slices] == [(0, 4, False), (4, 6, True)]
        assert sum(s.duration for s in slices) == 6


class TestDataFrame:
    def test_columns_and_rows(self, make_pool):
        recorder = _record(make_pool([2, 1]), 10)
        frame = recorder.to_dataframe()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == COLUMNS
        assert len(frame) == len(recorder)
        assert frame["event"].iloc[-1] == "RunCompleted"
        assert frame["budget_remaining"].iloc[-1] == 7
        assert frame["reason"].iloc[-1] == "pool_empty"

    def test_tick_rows_carry_remaining_time(self, make_pool):
        frame = _record(make_pool([3]), 10).to_dataframe()
        ticks = frame[frame["event"] == "TickProgress"]
        assert ticks["remaining_time"].tolist() == [2, 1, 0]
        assert ticks["time"].tolist() == [1, 2, 3]

    def test_run_index_and_absolute_time(self, make_pool):
        pool = make_pool([6])
        recorder = EventRecorder()
        engine = ExecutionEngine()
        recorder.extend(engine.run(pool, 4))
        recorder.extend(engine.run(pool, 4))
        frame = recorder.to_dataframe()
        assert sorted(frame["run"].unique().tolist()) == [0, 1]
        finished = frame[frame["event"] == "JobFinished"]
        assert finished["time"].tolist() == [6]
        assert finished["run"].tolist() == [1]

    def test_empty(self):
        frame = EventRecorder().to_dataframe()
        assert frame.empty
        assert list(frame.columns) == COLUMNS

    def test_event_to_dict(self):
        data = JobPreempted(time=3, job_id=2, remaining_time=1).to_dict()
        assert data == {"time": 3, "job_id": 2, "remaining_time": 1, "event": "JobPreempted"}
        assert JobFinished(time=1, job_id=0).kind == "JobFinished"
