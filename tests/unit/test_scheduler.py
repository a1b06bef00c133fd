"""Unit tests for next_weekly_run and WeeklyScheduler."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from smartcampus.core.scheduler import WeeklyScheduler, next_weekly_run

JERUSALEM = ZoneInfo("Asia/Jerusalem")
SUNDAY = 6


def test_next_run_is_coming_sunday_midnight_local() -> None:
    now = datetime(2024, 6, 5, 12, 0, tzinfo=timezone.utc)  # Wednesday
    run = next_weekly_run(now, SUNDAY, 0, 0, JERUSALEM)
    assert run == datetime(2024, 6, 9, 0, 0, tzinfo=JERUSALEM)
    assert run.astimezone(timezone.utc) == datetime(2024, 6, 8, 21, 0, tzinfo=timezone.utc)


def test_next_run_is_strictly_after_now() -> None:
    now = datetime(2024, 6, 9, 0, 0, tzinfo=JERUSALEM)
    assert next_weekly_run(now, SUNDAY, 0, 0, JERUSALEM) == datetime(
        2024, 6, 16, 0, 0, tzinfo=JERUSALEM
    )
    just_after = now + timedelta(seconds=1)
    assert next_weekly_run(just_after, SUNDAY, 0, 0, JERUSALEM) == datetime(
        2024, 6, 16, 0, 0, tzinfo=JERUSALEM
    )


def test_next_run_late_saturday_is_next_day() -> None:
    now = datetime(2024, 6, 8, 23, 59, tzinfo=JERUSALEM)
    assert next_weekly_run(now, SUNDAY, 0, 0, JERUSALEM) == datetime(
        2024, 6, 9, 0, 0, tzinfo=JERUSALEM
    )


def test_next_run_other_weekday_and_time() -> None:
    now = datetime(2024, 6, 5, 12, 0, tzinfo=timezone.utc)
    run = next_weekly_run(now, 0, 3, 30, ZoneInfo("UTC"))
    assert run == datetime(2024, 6, 10, 3, 30, tzinfo=ZoneInfo("UTC"))


async def test_run_once_sleeps_until_slot_then_runs_job() -> None:
    now = datetime(2024, 6, 8, 20, 0, tzinfo=timezone.utc)
    delays: list[float] = []
    calls: list[str] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    async def job() -> str:
        calls.append("ran")
        return "done"

    scheduler = WeeklyScheduler(
        job,
        weekday=SUNDAY,
        hour=0,
        minute=0,
        timezone="Asia/Jerusalem",
        clock=lambda: now,
        sleep=fake_sleep,
    )
    await scheduler.run_once()

    assert delays == [3600.0]
    assert calls == ["ran"]


async def test_run_once_swallows_job_failure() -> None:
    async def fake_sleep(seconds: float) -> None:
        return None

    async def job() -> None:
        raise RuntimeError("boom")

    scheduler = WeeklyScheduler(
        job, weekday=SUNDAY, hour=0, minute=0, timezone="UTC", sleep=fake_sleep
    )
    await scheduler.run_once()


async def test_start_and_stop() -> None:
    async def job() -> None:
        return None

    scheduler = WeeklyScheduler(job, weekday=SUNDAY, hour=0, minute=0, timezone="UTC")
    task = scheduler.start()
    assert scheduler.start() is task
    await scheduler.stop()
    assert task.cancelled()


def test_unknown_timezone_is_rejected() -> None:
    async def job() -> None:
        return None

    with pytest.raises(ValueError):
        WeeklyScheduler(job, weekday=SUNDAY, hour=0, minute=0, timezone="Mars/Olympus")
