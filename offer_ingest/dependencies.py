"""Shared application dependencies."""

from offer_ingest.pipeline.ingest_pipeline import IngestPipeline
from offer_ingest.services.clients.serp_api_client import SerpAPIClient
from offer_ingest.services.collection_replacer import CollectionReplacer
from offer_ingest.services.document_store import DocumentStore, RedisDocumentStore
from offer_ingest.services.normalizers.offer_extractor import OfferExtractor
from offer_ingest.services.paged_fetcher import PagedFetcher
from offer_ingest.services.product_aggregator import ProductAggregator
from offer_ingest.utils.config import OFFERS_COLLECTION, STORAGE_BATCH_LIMIT

# --- Cached Singleton Instances ---
# One storage client and one pipeline per process, passed explicitly to the services.
_cache = {}


def get_document_store() -> DocumentStore:
    """Dependency function to get the process-wide document store."""
    if "store" not in _cache:
        _cache["store"] = RedisDocumentStore()
    return _cache["store"]


def get_serp_client() -> SerpAPIClient:
    """Dependency function to get a SerpAPIClient instance."""
    # Loads key and URL from config/env internally
    if "serp" not in _cache:
        _cache["serp"] = SerpAPIClient()
    return _cache["serp"]


def get_ingest_pipeline() -> IngestPipeline:
    """Dependency function to get the IngestPipeline wired to the shared services."""
    if "pipeline" not in _cache:
        _cache["pipeline"] = IngestPipeline(
            fetcher=PagedFetcher(get_serp_client()),
            aggregator=ProductAggregator(OfferExtractor()),
            replacer=CollectionReplacer(get_document_store(), batch_limit=STORAGE_BATCH_LIMIT),
            collection=OFFERS_COLLECTION,
        )
    return _cache["pipeline"]


async def close_dependencies() -> None:
    """Release cached clients on shutdown."""
    store = _cache.pop("store", None)
    if isinstance(store, RedisDocumentStore):
        await store.close()
    _cache.clear()
