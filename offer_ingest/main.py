"""Main module for the offer ingestion API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from offer_ingest.api import routes
from offer_ingest.dependencies import close_dependencies
from offer_ingest.scheduler import create_scheduler
from offer_ingest.utils import logger
from offer_ingest.utils.config import SCHEDULE_ENABLED


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Lifespan manager for the application.
    Starts the ingestion schedule when enabled and releases clients on shutdown.
    """
    logger.info("Application startup...")
    scheduler = None
    if SCHEDULE_ENABLED:
        scheduler = create_scheduler()
        scheduler.start()
        logger.info("Ingestion scheduler started.")
    application.state.scheduler = scheduler

    yield

    logger.info("Application shutdown...")
    if scheduler is not None:
        scheduler.shutdown(wait=False)
    await close_dependencies()


# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title="Offer Ingestion API",
    description="Periodic ingestion of Google Shopping offers into grouped product records.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(routes.router, tags=["ingest"])
