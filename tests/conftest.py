"""
Shared pytest fixtures for schedvis tests.
"""

import logging
from pathlib import Path

import pytest

from schedvis.core.job import Job
from schedvis.core.pool import JobPool


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_name = request.node.name

    test_dir = test_output_root / module_name / test_name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_schedvis_logging():
    """Start every test with only the library's NullHandler attached."""
    logger = logging.getLogger("schedvis")

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)

    yield

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_job():
    """Factory for jobs with explicit fields; ids default to a running counter."""
    counter = {"next": 0}

    def _make(service_time=5, priority=1, arrival_time=None, job_id=None):
        if job_id is None:
            job_id = counter["next"]
        counter["next"] = max(counter["next"], job_id) + 1
        if arrival_time is None:
            arrival_time = float(job_id)
        return Job(
            job_id=job_id,
            arrival_time=arrival_time,
            priority=priority,
            total_time_required=service_time,
        )

    return _make


@pytest.fixture
def make_pool(make_job):
    """Build a pool from a list of service times."""

    def _make(service_times):
        return JobPool([make_job(service_time=t) for t in service_times])

    return _make
