"""Entry point shared by the HTTP trigger and the schedule."""

import asyncio
from typing import List, Optional, Sequence

from offer_ingest.models.offer import PipelineSummary
from offer_ingest.pipeline.ingest_pipeline import IngestPipeline
from offer_ingest.utils import logger
from offer_ingest.utils.config import INGEST_QUERIES, RUN_TIMEOUT_SECONDS

# One run per process at a time; the HTTP trigger and the schedule share it.
_run_lock = asyncio.Lock()


async def run_ingest(
    pipeline: IngestPipeline,
    queries: Optional[Sequence[str]] = None,
    timeout: float = RUN_TIMEOUT_SECONDS,
) -> PipelineSummary:
    """
    Run the pipeline under the overall wall-clock timeout.

    Args:
        pipeline: Pipeline to run
        queries: Queries to ingest, defaults to INGEST_QUERIES
        timeout: Seconds before the run is abandoned (no rollback), time spent
            waiting for a run in progress included

    Returns:
        PipelineSummary: Totals of the run

    Raises:
        asyncio.TimeoutError: If the run exceeds the timeout
    """
    run_queries = list(queries) if queries else list(INGEST_QUERIES)
    return await asyncio.wait_for(_run_exclusive(pipeline, run_queries), timeout=timeout)


async def _run_exclusive(pipeline: IngestPipeline, queries: List[str]) -> PipelineSummary:
    if _run_lock.locked():
        logger.info("⏳ Another ingestion run is in progress, waiting for it to finish")

    async with _run_lock:
        logger.info("🚀 Starting ingestion for queries: %s", queries)
        return await pipeline.run(queries)
