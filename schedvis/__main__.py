"""Console runner for the scheduling simulator.

Usage:
    python -m schedvis --policy rr --quantum 3 --budget 40 --jobs 8
    python -m schedvis --policy sjf --runs 3 --timeline out/schedule.png
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from schedvis.core.errors import SchedulingError
from schedvis.engine.events import (
    ExecutionEvent,
    JobFinished,
    JobPreempted,
    JobStarted,
    RunCompleted,
    TickProgress,
)
from schedvis.instrumentation.recorder import EventRecorder
from schedvis.logging_config import configure_from_env, enable_console_logging
from schedvis.simulator import Scheduler
from schedvis.stats import SchedulerStats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedvis",
        description="Simulate CPU scheduling policies over synthetic jobs",
    )
    parser.add_argument(
        "--policy", default="fcfs",
        help="fcfs, sjf, prio or rr (default: fcfs)",
    )
    parser.add_argument("--budget", type=int, default=50, help="ticks per run")
    parser.add_argument("--quantum", type=int, default=None, help="round-robin slice")
    parser.add_argument(
        "--jobs", type=int, default=None,
        help="jobs to generate (default: random batch of 1-20)",
    )
    parser.add_argument("--runs", type=int, default=1, help="consecutive runs")
    parser.add_argument("--seed", type=int, default=42, help="-1 for unseeded")
    parser.add_argument("--verbose", action="store_true", help="print every tick")
    parser.add_argument("--timeline", default=None, help="write a PNG timeline here")
    return parser


class ConsoleRenderer:
    """Prints one line per service step, optionally every tick."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def __call__(self, event: ExecutionEvent, stats: SchedulerStats) -> None:
        if isinstance(event, JobStarted):
            print(f"  t={event.time:>4}  Job {event.job_id} started")
        elif isinstance(event, TickProgress) and self.verbose:
            print(f"  t={event.time:>4}  Job {event.job_id} time left: {event.remaining_time}TU")
        elif isinstance(event, JobPreempted):
            print(f"  t={event.time:>4}  Job {event.job_id} preempted, {event.remaining_time}TU left")
        elif isinstance(event, JobFinished):
            print(f"  t={event.time:>4}  Job {event.job_id} finished")
        elif isinstance(event, RunCompleted):
            print(f"  run ended ({event.reason}), budget left: {event.budget_remaining}TU")


def print_stats(stats: SchedulerStats) -> None:
    print("-" * 40)
    print(stats)
    print(f"Preemptions: {stats.preemptions}")
    print(f"Ticks serviced: {stats.ticks_serviced}")
    print("-" * 40)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_from_env()
    if args.verbose:
        enable_console_logging(level="DEBUG")

    seed = None if args.seed == -1 else args.seed
    scheduler = Scheduler(seed=seed)
    recorder = EventRecorder()
    scheduler.add_listener(ConsoleRenderer(verbose=args.verbose))
    scheduler.add_listener(recorder)

    scheduler.generate_jobs(args.jobs)
    print(f"Generated {len(scheduler.pool)} jobs")
    print_stats(scheduler.stats)

    try:
        for run in range(1, args.runs + 1):
            print(f"Run {run}: policy={args.policy} budget={args.budget}")
            scheduler.run_to_completion(args.policy, args.budget, args.quantum)
            print_stats(scheduler.stats)
    except SchedulingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.timeline:
        from schedvis.visual.timeline import save_timeline

        path = save_timeline(recorder, args.timeline, title=f"{args.policy.upper()} schedule")
        print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
