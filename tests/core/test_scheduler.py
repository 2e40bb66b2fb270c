# tests/core/test_scheduler.py

import asyncio
from unittest.mock import MagicMock

import pytest

from clusterinfo.core.scheduler import Scheduler


@pytest.mark.asyncio
async def test_add_job_schedules_correctly():
    """
    Tests that add_job adds a running task to the asyncio loop.
    """
    scheduler = Scheduler()
    mock_job = MagicMock()

    async def async_job():
        mock_job()

    scheduler.add_job(async_job, interval_seconds=3600)

    assert len(scheduler.tasks) == 1
    task = scheduler.tasks[0]
    assert not task.done()

    await scheduler.stop()
    assert task.cancelled() or task.done()
    assert scheduler.tasks == []


@pytest.mark.asyncio
async def test_add_job_from_string_schedules_correctly():
    scheduler = Scheduler()

    async def async_job():
        pass

    scheduler.add_job_from_string(async_job, "1h")

    assert len(scheduler.tasks) == 1
    await scheduler.stop()


def test_add_job_from_string_rejects_bad_interval():
    scheduler = Scheduler()

    async def async_job():
        pass

    with pytest.raises(ValueError):
        scheduler.add_job_from_string(async_job, "every hour")


@pytest.mark.asyncio
async def test_job_runs_again_after_failure():
    """A failing tick is logged and the job keeps being scheduled."""
    scheduler = Scheduler()
    calls = []

    async def flaky_job():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("tick failed")

    scheduler.add_job(flaky_job, interval_seconds=1)
    # First run is immediate; give the loop a moment for it to fail.
    await asyncio.sleep(0.05)
    assert len(calls) == 1
    assert not scheduler.tasks[0].done()

    await scheduler.stop()


@pytest.mark.asyncio
async def test_run_immediately_false_waits_for_first_interval():
    scheduler = Scheduler()
    mock_job = MagicMock()

    async def async_job():
        mock_job()

    scheduler.add_job(async_job, interval_seconds=3600, run_immediately=False)
    await asyncio.sleep(0.01)

    mock_job.assert_not_called()
    await scheduler.stop()
