"""Interval schedule that triggers ingestion runs."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from offer_ingest.dependencies import get_ingest_pipeline
from offer_ingest.pipeline.runner import run_ingest
from offer_ingest.utils import logger
from offer_ingest.utils.config import SCHEDULE_INTERVAL_MINUTES

INGEST_JOB_ID = "scheduled-ingest"


async def scheduled_ingest() -> None:
    """Run one ingestion; failures are logged, never raised into the scheduler."""
    try:
        summary = await run_ingest(get_ingest_pipeline())
        logger.info("📅 Scheduled run finished: %s", summary.message())
    except Exception as e:
        logger.exception("💥 Scheduled ingestion failed: %s", e)


def create_scheduler(interval_minutes: int = SCHEDULE_INTERVAL_MINUTES) -> AsyncIOScheduler:
    """Build a scheduler with the ingestion job registered."""
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        scheduled_ingest,
        IntervalTrigger(minutes=interval_minutes),
        id=INGEST_JOB_ID,
        max_instances=1,
        coalesce=True,
    )
    logger.info("Scheduler: ingestion every %d min", interval_minutes)
    return scheduler
