"""CPU scheduling: FCFS vs SJF vs Priority vs Round-Robin on one workload.

Every policy gets an identical copy of the same randomly generated job
set and a generous budget. The key insight: SJF minimizes mean
completion time, Priority serves urgent work first at the expense of
everyone else, and Round-Robin trades completion time for a fast first
response from every job.

## Architecture Diagram

```
    JobGenerator ──> JobPool ──> policy.reorder ──> ExecutionEngine
                                                        │
                                   EventRecorder <──────┤
                                   StatisticsAggregator <┘
```

## Key Metrics

- Mean completion time (tick at which each job finished)
- Mean response time (tick at which each job first ran)
- Preemptions
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schedvis import EventRecorder, GeneratorConfig, JobFinished, JobStarted, Scheduler, SchedulerStats


# =============================================================================
# Simulation
# =============================================================================


@dataclass
class PolicyResult:
    policy_name: str
    stats: SchedulerStats
    recorder: EventRecorder
    mean_completion: float
    mean_response: float


@dataclass
class ComparisonResult:
    results: dict[str, PolicyResult]
    num_jobs: int
    total_work: int


POLICIES = [("fcfs", None), ("sjf", None), ("prio", None), ("rr", 2)]


def _mean(values: list[int]) -> float:
    return sum(values) / len(values) if values else 0.0


def _run_policy(policy: str, quantum: int | None, *, num_jobs: int, seed: int | None) -> tuple[PolicyResult, int]:
    # Integer arrival stamps keep FCFS deterministic across policies.
    arrivals = iter(range(num_jobs))
    scheduler = Scheduler(GeneratorConfig(), seed=seed, clock=lambda: float(next(arrivals)))
    recorder = EventRecorder()
    scheduler.add_listener(recorder)
    scheduler.generate_jobs(num_jobs)
    total_work = sum(job.total_time_required for job in scheduler.pool)

    result = scheduler.run_to_completion(policy, budget=total_work, quantum=quantum)

    return PolicyResult(
        policy_name=policy,
        stats=result.stats,
        recorder=recorder,
        mean_completion=_mean([e.time for e in recorder.filter_by_type(JobFinished)]),
        mean_response=_mean([e.time for e in recorder.filter_by_type(JobStarted)]),
    ), total_work


def run_comparison(*, num_jobs: int = 12, seed: int | None = 42) -> ComparisonResult:
    """Run all four policies on identical workloads."""
    results: dict[str, PolicyResult] = {}
    total_work = 0
    for policy, quantum in POLICIES:
        results[policy], total_work = _run_policy(policy, quantum, num_jobs=num_jobs, seed=seed)
    return ComparisonResult(results=results, num_jobs=num_jobs, total_work=total_work)


# =============================================================================
# Summary
# =============================================================================


def print_summary(comparison: ComparisonResult) -> None:
    print("\n" + "=" * 72)
    print(f"CPU SCHEDULING: {comparison.num_jobs} jobs, {comparison.total_work} ticks of work")
    print("=" * 72)

    header = f"{'Metric':<28}" + "".join(f"{name.upper():>11}" for name in comparison.results)
    print(f"\n{header}")
    print("-" * len(header))
    rows = [
        ("Jobs finished", lambda r: f"{r.stats.finished:>11}"),
        ("Mean completion (ticks)", lambda r: f"{r.mean_completion:>11.2f}"),
        ("Mean response (ticks)", lambda r: f"{r.mean_response:>11.2f}"),
        ("Preemptions", lambda r: f"{r.stats.preemptions:>11}"),
    ]
    for label, fmt in rows:
        print(f"{label:<28}" + "".join(fmt(r) for r in comparison.results.values()))

    print("\n" + "=" * 72)
    print("INTERPRETATION:")
    print("-" * 72)
    print("\n  SJF has the lowest mean completion time on a batch that is all")
    print("  present at t=0. Round-Robin starts every job early but finishes")
    print("  most of them late; Priority only helps the jobs marked urgent.")
    print("\n" + "=" * 72)


def save_timelines(comparison: ComparisonResult, output_dir: Path) -> None:
    """Write one timeline chart per policy."""
    from schedvis.visual import save_timeline

    for name, result in comparison.results.items():
        path = save_timeline(result.recorder, output_dir / f"{name}_timeline.png", title=name.upper())
        print(f"Saved: {path}")


# =============================================================================
# Entry Point
# =============================================================================


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="CPU scheduling policy comparison")
    parser.add_argument("--jobs", type=int, default=12)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--output", type=str, default="output/policy_comparison")
    parser.add_argument("--no-viz", action="store_true", help="Skip timeline charts")
    args = parser.parse_args()

    seed = None if args.seed == -1 else args.seed
    print("Running scheduling policy comparison...")
    comparison = run_comparison(num_jobs=args.jobs, seed=seed)
    print_summary(comparison)

    if not args.no_viz:
        try:
            import matplotlib
            matplotlib.use("Agg")
            save_timelines(comparison, Path(args.output))
        except ImportError:
            print("\nSkipping visualization (matplotlib not installed)")
