"""Synthetic job generation.

Jobs get monotonically increasing ids and a wall-clock arrival stamp.
Random jobs draw priority and service time uniformly from inclusive
ranges; by default both are 1..10 and a random batch holds 1..20 jobs.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass

from schedvis.core.job import Job

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Distribution settings for random jobs.

    Attributes:
        priority_range: Inclusive (low, high) bounds for priority.
        service_time_range: Inclusive (low, high) bounds for service time.
        max_batch: Upper bound of a random batch size.
        max_pool_size: Continuous generation pauses once the pool exceeds this.
    """

    priority_range: tuple[int, int] = (1, 10)
    service_time_range: tuple[int, int] = (1, 10)
    max_batch: int = 20
    max_pool_size: int = 50

    def __post_init__(self) -> None:
        low, high = self.priority_range
        if low > high:
            raise ValueError(f"priority_range is empty: {self.priority_range}")
        low, high = self.service_time_range
        if low <= 0 or low > high:
            raise ValueError(
                f"service_time_range must be positive and non-empty, got {self.service_time_range}"
            )
        if self.max_batch <= 0:
            raise ValueError(f"max_batch must be > 0, got {self.max_batch}")
        if self.max_pool_size <= 0:
            raise ValueError(f"max_pool_size must be > 0, got {self.max_pool_size}")


class JobGenerator:
    """Creates jobs with unique ids.

    Args:
        config: Distribution settings. Defaults to GeneratorConfig().
        seed: Seed for the private random source.
        clock: Returns the arrival timestamp for a new job.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        seed: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or GeneratorConfig()
        self._rng = random.Random(seed)
        self._clock = clock
        self._next_id = 0

    @property
    def next_id(self) -> int:
        return self._next_id

    def new_job(self, priority: int, service_time: int) -> Job:
        """Create a job with the next id and the current clock as arrival time."""
        job = Job(
            job_id=self._next_id,
            arrival_time=self._clock(),
            priority=priority,
            total_time_required=service_time,
        )
        self._next_id += 1
        return job

    def random_job(self) -> Job:
        """Create a job with priority and service time drawn from the config ranges."""
        priority = self._rng.randint(*self.config.priority_range)
        service_time = self._rng.randint(*self.config.service_time_range)
        return self.new_job(priority, service_time)

    def generate(self, count: int | None = None) -> list[Job]:
        """Create ``count`` random jobs, or a random batch of 1..max_batch.

        Raises:
            ValueError: If ``count`` is given and negative.
        """
        if count is None:
            count = self._rng.randint(1, self.config.max_batch)
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        jobs = [self.random_job() for _ in range(count)]
        logger.debug("Generated %d jobs, next id %d", len(jobs), self._next_id)
        return jobs

    def reset(self) -> None:
        """Restart id assignment at zero."""
        self._next_id = 0

    def __repr__(self) -> str:
        return f"JobGenerator(next_id={self._next_id})"
