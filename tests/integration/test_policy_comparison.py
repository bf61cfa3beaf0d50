"""End-to-end comparison of the four policies on the same workload."""

import pytest

from schedvis.engine.events import JobFinished, JobPreempted, TickProgress
from schedvis.generator import GeneratorConfig
from schedvis.simulator import Scheduler

POLICIES = [("fcfs", None), ("sjf", None), ("prio", None), ("rr", 3)]


def _scheduler(seed: int) -> Scheduler:
    scheduler = Scheduler(GeneratorConfig(), seed=seed, clock=iter(range(10_000)).__next__)
    scheduler.generate_jobs(15)
    return scheduler


def _mean_completion(events) -> float:
    finish_times = [e.time for e in events if isinstance(e, JobFinished)]
    return sum(finish_times) / len(finish_times)


@pytest.mark.parametrize("policy,quantum", POLICIES)
def test_all_jobs_finish_with_ample_budget(policy, quantum):
    scheduler = _scheduler(seed=7)
    total_work = sum(j.total_time_required for j in scheduler.pool)
    result = scheduler.run_to_completion(policy, budget=total_work + 10, quantum=quantum)

    assert result.stats.finished == 15
    assert result.stats.total_active == 0
    assert result.budget_remaining == 10
    assert sum(isinstance(e, TickProgress) for e in result.events) == total_work


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_sjf_minimises_mean_completion_time(seed):
    means = {}
    for policy, quantum in POLICIES:
        scheduler = _scheduler(seed)
        result = scheduler.run_to_completion(policy, budget=10_000, quantum=quantum)
        means[policy] = _mean_completion(result.events)
    assert means["sjf"] == min(means.values())


def test_only_round_robin_preempts_with_ample_budget():
    for policy, quantum in POLICIES:
        scheduler = _scheduler(seed=11)
        result = scheduler.run_to_completion(policy, budget=10_000, quantum=quantum)
        preemptions = [e for e in result.events if isinstance(e, JobPreempted)]
        if policy == "rr":
            assert preemptions
        else:
            assert preemptions == []


@pytest.mark.parametrize("policy,quantum", POLICIES)
def test_repeated_small_budgets_drain_the_pool(policy, quantum):
    scheduler = _scheduler(seed=5)
    total_work = sum(j.total_time_required for j in scheduler.pool)
    runs = 0
    while len(scheduler.pool) > 0:
        scheduler.run_to_completion(policy, budget=4, quantum=quantum)
        runs += 1
        assert runs <= total_work
    assert scheduler.stats.finished == 15
    assert scheduler.stats.ticks_serviced == total_work


def test_priority_serves_high_priority_first():
    scheduler = _scheduler(seed=3)
    priorities = {j.job_id: j.priority for j in scheduler.pool}
    result = scheduler.run_to_completion("prio", budget=10_000)
    finished = [priorities[job_id] for job_id in result.finished_job_ids]
    assert finished == sorted(finished, reverse=True)
