"""In-process weekly scheduler for the rejected-entity cleanup.

Runs inside the FastAPI lifespan when CLEANUP_SCHEDULE_ENABLED is set.
Deployments with several workers should leave it off and run
scripts/run_cleanup_rejected.py from an external cron instead.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from smartcampus.shared.utils.datetime import resolve_zone, utc_now

logger = logging.getLogger(__name__)


def next_weekly_run(
    now: datetime,
    weekday: int,
    hour: int,
    minute: int,
    tz: ZoneInfo,
) -> datetime:
    """Return the next weekday/hour/minute wall-clock time in tz strictly after now.

    Args:
        now: Aware datetime (any zone).
        weekday: 0 = Monday ... 6 = Sunday.
        hour: 0-23.
        minute: 0-59.
        tz: Zone the schedule is expressed in.

    Returns:
        Aware datetime in tz.
    """
    local = now.astimezone(tz)
    candidate = local.replace(hour=hour, minute=minute, second=0, microsecond=0)
    candidate += timedelta(days=(weekday - local.weekday()) % 7)
    if candidate <= local:
        candidate += timedelta(days=7)
    return candidate


class WeeklyScheduler:
    """Sleeps until the next slot, runs the job, repeats. A failing run is logged and the loop goes on."""

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        *,
        weekday: int,
        hour: int,
        minute: int,
        timezone: str,
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._job = job
        self._weekday = weekday
        self._hour = hour
        self._minute = minute
        self._tz = resolve_zone(timezone)
        self._clock = clock
        self._sleep = sleep
        self._task: asyncio.Task | None = None

    def next_run(self) -> datetime:
        return next_weekly_run(
            self._clock(), self._weekday, self._hour, self._minute, self._tz
        )

    async def run_once(self) -> None:
        """Wait for the next slot and run the job once."""
        now = self._clock()
        target = next_weekly_run(now, self._weekday, self._hour, self._minute, self._tz)
        delay = (target - now).total_seconds()
        logger.info("Next scheduled cleanup at %s (in %.0fs)", target.isoformat(), delay)
        await self._sleep(delay)
        try:
            result = await self._job()
            logger.info("[Scheduled] cleanup finished: %s", result)
        except Exception:
            logger.exception("[Scheduled] cleanup failed")

    async def run_forever(self) -> None:
        while True:
            await self.run_once()

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run_forever())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
