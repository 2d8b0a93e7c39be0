"""API routes that trigger offer ingestion runs."""

import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from offer_ingest.dependencies import get_ingest_pipeline
from offer_ingest.pipeline.ingest_pipeline import IngestPipeline
from offer_ingest.pipeline.runner import run_ingest
from offer_ingest.utils import ConfigurationError, StorageError, logger

router = APIRouter()


@router.get("/")
async def health_check():
    """
    Health check endpoint to verify API status.

    Returns:
        dict: Status message indicating API is running
    """
    return {"message": "Offer ingestion API is running!"}


@router.api_route("/scrape", methods=["GET", "POST"], response_class=PlainTextResponse)
async def scrape(
    q: Optional[List[str]] = Query(default=None, description="Queries to ingest instead of the configured list"),
    pipeline: IngestPipeline = Depends(get_ingest_pipeline),
):
    """
    Replace the offers collection with fresh results.

    Args:
        q: Optional query overrides (repeatable)

    Returns:
        str: Human-readable summary of products and offers saved

    Raises:
        HTTPException: 500 (configuration or storage failure), 504 (run timed out)
    """
    queries = [query.strip() for query in q or [] if query.strip()]

    try:
        summary = await run_ingest(pipeline, queries or None)
    except ConfigurationError as e:
        logger.error("❌ %s", e.message)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    except StorageError as e:
        logger.error("❌ Storage failure during ingestion: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except asyncio.TimeoutError:
        logger.error("⌛ Ingestion run timed out")
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Ingestion run timed out")
    except Exception as e:
        logger.exception("💥 Unexpected error during ingestion: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An internal server error occurred during ingestion.")

    logger.info("✅ %s", summary.message())
    return summary.message()
