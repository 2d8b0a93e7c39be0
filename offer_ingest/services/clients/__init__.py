"""API clients for external services."""

from offer_ingest.services.clients.serp_api_client import SerpAPIClient

__all__ = ["SerpAPIClient"]
