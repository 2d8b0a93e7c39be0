"""
Service layer for fetching, normalizing, grouping and storing offers.
"""

from .collection_replacer import BatchWriter, CollectionReplacer
from .document_store import DocumentStore, RedisDocumentStore
from .paged_fetcher import PagedFetcher
from .product_aggregator import ProductAggregator

__all__ = ["BatchWriter", "CollectionReplacer", "DocumentStore", "RedisDocumentStore", "PagedFetcher", "ProductAggregator"]
