"""Test the ingestion trigger endpoints."""

import asyncio
from unittest.mock import AsyncMock, patch

from fastapi import status
from httpx import ASGITransport, AsyncClient
import pytest
import pytest_asyncio

from offer_ingest.dependencies import get_ingest_pipeline
from offer_ingest.main import app
from offer_ingest.models.offer import PipelineSummary
from offer_ingest.pipeline.ingest_pipeline import IngestPipeline
from offer_ingest.utils import ConfigurationError, StorageError


@pytest.fixture
def mock_pipeline(mocker):
    """Provides a MagicMock for the IngestPipeline, overriding the app dependency."""
    pipeline = mocker.MagicMock(spec=IngestPipeline)
    pipeline.run = AsyncMock(return_value=PipelineSummary(products=2, offers=3))
    app.dependency_overrides[get_ingest_pipeline] = lambda: pipeline
    yield pipeline
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Offer ingestion API is running!"}


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_scrape_returns_summary(client, mock_pipeline, method):
    """Test a successful run returns the plain-text summary."""
    with patch("offer_ingest.pipeline.runner.INGEST_QUERIES", ["golf"]):
        response = await client.request(method, "/scrape")

    assert response.status_code == status.HTTP_200_OK
    assert response.text == "Scraping complete. Saved 2 products containing 3 offers."
    mock_pipeline.run.assert_awaited_once_with(["golf"])


@pytest.mark.asyncio
async def test_scrape_with_query_overrides(client, mock_pipeline):
    response = await client.post("/scrape", params=[("q", "golf bags"), ("q", " "), ("q", "putters")])

    assert response.status_code == status.HTTP_200_OK
    mock_pipeline.run.assert_awaited_once_with(["golf bags", "putters"])


@pytest.mark.asyncio
async def test_scrape_missing_api_key(client, mock_pipeline):
    """Test a configuration error surfaces as a 500 with its message."""
    mock_pipeline.run.side_effect = ConfigurationError("Missing SERP_API_KEY")

    response = await client.post("/scrape")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Missing SERP_API_KEY"


@pytest.mark.asyncio
async def test_scrape_storage_failure(client, mock_pipeline):
    mock_pipeline.run.side_effect = StorageError("connection lost", "delete_batch")

    response = await client.post("/scrape")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "delete_batch" in response.json()["detail"]


@pytest.mark.asyncio
async def test_scrape_timeout(client, mock_pipeline):
    """Test an overrun surfaces as a gateway timeout."""
    with patch("offer_ingest.api.routes.run_ingest", AsyncMock(side_effect=asyncio.TimeoutError())):
        response = await client.post("/scrape")

    assert response.status_code == status.HTTP_504_GATEWAY_TIMEOUT


@pytest.mark.asyncio
async def test_scrape_unexpected_error(client, mock_pipeline):
    mock_pipeline.run.side_effect = RuntimeError("boom")

    response = await client.post("/scrape")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "boom" not in response.text
