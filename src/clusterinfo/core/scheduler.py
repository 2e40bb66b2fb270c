import asyncio
import logging
from typing import Callable, Coroutine, List

from ..utils.date_utils import parse_interval_seconds

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Runs async jobs periodically. A job that raises is logged and run again
    at its next interval; runs of the same job never overlap.
    """

    def __init__(self):
        self.tasks: List[asyncio.Task] = []
        logger.info("AsyncScheduler initialized.")

    async def _run_periodically(
        self, interval_seconds: int, job_func: Callable[[], Coroutine], run_immediately: bool
    ):
        """Internal loop to run a job periodically."""
        try:
            if not run_immediately:
                await asyncio.sleep(interval_seconds)
            while True:
                try:
                    await job_func()
                except Exception as e:
                    logger.error(f"Error in scheduled job '{job_func.__name__}': {e}", exc_info=True)

                await asyncio.sleep(interval_seconds)
        except asyncio.CancelledError:
            logger.info(f"Job '{job_func.__name__}' cancelled.")
            raise

    def add_job(self, job_func: Callable[[], Coroutine], interval_seconds: int, run_immediately: bool = True):
        """
        Adds a new async job to the schedule.
        """
        if interval_seconds <= 0:
            raise ValueError(f"Interval for job '{job_func.__name__}' must be positive, got {interval_seconds}.")

        task = asyncio.create_task(self._run_periodically(interval_seconds, job_func, run_immediately))
        self.tasks.append(task)
        logger.info(f"Scheduled job '{job_func.__name__}' to run every {interval_seconds} second(s).")
        return task

    def add_job_from_string(
        self, job_func: Callable[[], Coroutine], interval_str: str, run_immediately: bool = True
    ):
        """
        Adds a job based on a Prometheus-style duration string like '5m' or '1h'.
        """
        return self.add_job(job_func, parse_interval_seconds(interval_str), run_immediately=run_immediately)

    async def stop(self):
        """Cancels all scheduled tasks."""
        logger.info("Stopping scheduler...")
        for task in self.tasks:
            task.cancel()
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        self.tasks.clear()
