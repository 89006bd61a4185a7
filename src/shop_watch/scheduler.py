"""Recurring trigger for monitoring runs.

One run fires immediately on start, then once per cron tick. A run that is
still going when the next tick fires makes the scheduler skip that tick, so
runs never overlap inside one process. Any failed run stops the scheduler
and the process exits non-zero; the next process start resumes from the
last persisted baseline.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

import sentry_sdk
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger


logger = logging.getLogger(__name__)

JOB_ID = "shop-scraper"


async def run_guarded(run: Callable[[], Awaitable[object]]) -> bool:
    """Run once, logging and reporting any failure.

    Returns:
        True if the run succeeded.
    """
    try:
        await run()
    except Exception as e:
        logger.exception("Fatal error during run: %s", e)
        sentry_sdk.capture_exception(e)
        return False
    return True


class RunScheduler:
    """Drive runs from a cron expression until one of them fails."""

    def __init__(
        self,
        run: Callable[[], Awaitable[object]],
        cron: str = "* * * * *",
        run_on_start: bool = True,
    ) -> None:
        self.run = run
        self.cron = cron
        self.run_on_start = run_on_start
        self.exit_code = 0
        self._stopped: Optional[asyncio.Event] = None

    async def _job(self) -> None:
        if not await run_guarded(self.run):
            self.exit_code = 1
            assert self._stopped is not None
            self._stopped.set()

    async def serve(self) -> int:
        """Schedule runs and block until a run fails.

        Returns:
            Process exit code.
        """
        self._stopped = asyncio.Event()
        scheduler = AsyncIOScheduler()
        job_options = {"id": JOB_ID, "max_instances": 1, "coalesce": True}
        if self.run_on_start:
            # Omitting next_run_time lets the trigger pick it; None would pause the job
            job_options["next_run_time"] = datetime.now()
        scheduler.add_job(self._job, CronTrigger.from_crontab(self.cron), **job_options)
        scheduler.start()
        logger.info("⏰ Scheduled shop checks with cron `%s`", self.cron)

        try:
            await self._stopped.wait()
        finally:
            scheduler.shutdown(wait=False)

        return self.exit_code
