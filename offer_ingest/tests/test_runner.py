"""Test the run entry point and the ingestion schedule."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from offer_ingest.models.offer import PipelineSummary
from offer_ingest.pipeline.ingest_pipeline import IngestPipeline
from offer_ingest.pipeline.runner import run_ingest
from offer_ingest.scheduler import INGEST_JOB_ID, create_scheduler, scheduled_ingest


@pytest.fixture(autouse=True)
def run_lock():
    """Give each test its own run lock, as every test runs on a fresh event loop."""
    lock = asyncio.Lock()
    with patch("offer_ingest.pipeline.runner._run_lock", lock):
        yield lock


@pytest.fixture
def mock_pipeline():
    pipeline = MagicMock(spec=IngestPipeline)
    pipeline.run = AsyncMock(return_value=PipelineSummary(products=1, offers=1))
    return pipeline


@pytest.mark.asyncio
async def test_run_ingest_uses_configured_queries(mock_pipeline):
    with patch("offer_ingest.pipeline.runner.INGEST_QUERIES", ["golf", "golf bags"]):
        summary = await run_ingest(mock_pipeline)

    assert summary.products == 1
    mock_pipeline.run.assert_awaited_once_with(["golf", "golf bags"])


@pytest.mark.asyncio
async def test_run_ingest_times_out(mock_pipeline):
    """Test a run exceeding the wall-clock limit is abandoned."""

    async def slow_run(queries):
        await asyncio.sleep(1)

    mock_pipeline.run.side_effect = slow_run

    with pytest.raises(asyncio.TimeoutError):
        await run_ingest(mock_pipeline, ["golf"], timeout=0.01)


@pytest.mark.asyncio
async def test_runs_do_not_overlap(mock_pipeline):
    """Test a second trigger waits for the run in progress."""
    active = 0
    peak = 0

    async def tracked_run(queries):
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1
        return PipelineSummary()

    mock_pipeline.run.side_effect = tracked_run

    await asyncio.gather(run_ingest(mock_pipeline, ["golf"]), run_ingest(mock_pipeline, ["golf"]))

    assert peak == 1
    assert mock_pipeline.run.await_count == 2


@pytest.mark.asyncio
async def test_waiting_for_a_run_counts_toward_timeout(mock_pipeline, run_lock):
    """Test a trigger blocked behind a run in progress times out on its own clock."""
    async with run_lock:
        with pytest.raises(asyncio.TimeoutError):
            await run_ingest(mock_pipeline, ["golf"], timeout=0.01)

    mock_pipeline.run.assert_not_called()
    assert not run_lock.locked()


def test_create_scheduler_registers_interval_job():
    scheduler = create_scheduler(interval_minutes=60)

    job = scheduler.get_job(INGEST_JOB_ID)

    assert job is not None
    assert job.trigger.interval == timedelta(minutes=60)
    assert job.max_instances == 1


@pytest.mark.asyncio
async def test_scheduled_ingest_logs_failures(mock_pipeline):
    """Test a failed scheduled run is logged rather than raised."""
    failing_run = AsyncMock(side_effect=RuntimeError("redis down"))
    with patch("offer_ingest.scheduler.get_ingest_pipeline", return_value=mock_pipeline), patch("offer_ingest.scheduler.run_ingest", failing_run):
        with patch("offer_ingest.scheduler.logger") as mock_logger:
            await scheduled_ingest()

    mock_logger.exception.assert_called_once()


@pytest.mark.asyncio
async def test_scheduled_ingest_runs_pipeline(mock_pipeline):
    with patch("offer_ingest.scheduler.get_ingest_pipeline", return_value=mock_pipeline):
        await scheduled_ingest()

    mock_pipeline.run.assert_awaited_once()
