"""Tests for the run scheduler."""

from unittest.mock import AsyncMock, patch

import pytest

from shop_watch.scheduler import RunScheduler, run_guarded


@pytest.mark.asyncio
async def test_run_guarded_success() -> None:
    """Successful runs report True and nothing to the tracker."""
    run = AsyncMock()

    with patch("shop_watch.scheduler.sentry_sdk.capture_exception") as capture:
        assert await run_guarded(run) is True

    capture.assert_not_called()


@pytest.mark.asyncio
async def test_run_guarded_reports_failure() -> None:
    """Failures are reported to the tracker and swallowed into False."""
    error = RuntimeError("boom")
    run = AsyncMock(side_effect=error)

    with patch("shop_watch.scheduler.sentry_sdk.capture_exception") as capture:
        assert await run_guarded(run) is False

    capture.assert_called_once_with(error)


@pytest.mark.asyncio
async def test_serve_stops_on_first_failure() -> None:
    """The immediate run fails, so serving ends with exit code 1."""
    run = AsyncMock(side_effect=RuntimeError("boom"))
    scheduler = RunScheduler(run, cron="0 0 1 1 *", run_on_start=True)

    with patch("shop_watch.scheduler.sentry_sdk.capture_exception"):
        exit_code = await scheduler.serve()

    assert exit_code == 1
    run.assert_awaited_once()
