"""Ingest pipeline that replaces the offers collection with a fresh snapshot."""

import time
from typing import List, Sequence

from offer_ingest.models.offer import GroupedProduct, PipelineSummary
from offer_ingest.services.collection_replacer import CollectionReplacer
from offer_ingest.services.paged_fetcher import PagedFetcher
from offer_ingest.services.product_aggregator import ProductAggregator
from offer_ingest.utils import logger
from offer_ingest.utils.config import OFFERS_COLLECTION


class IngestPipeline:
    """
    Coordinates one ingestion run.

    The run follows these steps:
    1. Check the SerpAPI key is configured
    2. Clear the target collection in bounded batches
    3. For each query, fetch all pages and aggregate them into grouped products
    4. Buffer the products and commit them in bounded batches

    A query whose fetch or aggregation fails contributes nothing and the run moves
    on. Configuration and storage errors abort the run.

    Attributes:
        fetcher: Paged fetcher for the search API
        aggregator: Product aggregator
        replacer: Collection replacer for the storage backend
        collection: Name of the collection being replaced
    """

    def __init__(
        self,
        fetcher: PagedFetcher,
        aggregator: ProductAggregator,
        replacer: CollectionReplacer,
        collection: str = OFFERS_COLLECTION,
    ):
        self.fetcher = fetcher
        self.aggregator = aggregator
        self.replacer = replacer
        self.collection = collection

    async def fetch_and_group(self, query: str) -> List[GroupedProduct]:
        """Fetch every page for a query and aggregate the results."""
        raw_results = await self.fetcher.fetch_all(query)
        products = self.aggregator.aggregate(raw_results, query)
        logger.info("🧩 Grouped %d raw results into %d products for query '%s'", len(raw_results), len(products), query)
        return products

    async def run(self, queries: Sequence[str]) -> PipelineSummary:
        """
        Replace the collection with products for the given queries.

        Args:
            queries: Search queries, processed one after another

        Returns:
            PipelineSummary: Products and offers saved, plus queries that failed

        Raises:
            ConfigurationError: If the SerpAPI key is missing (nothing is touched)
            StorageError: If clearing or writing the collection fails
        """
        start_time = time.time()
        self.fetcher.client.ensure_configured()

        logger.info("🗑️ Deleting existing documents in '%s'...", self.collection)
        await self.replacer.clear(self.collection)

        summary = PipelineSummary()
        writer = self.replacer.writer(self.collection)

        for query in queries:
            try:
                products = await self.fetch_and_group(query)
            except Exception as e:
                logger.error("❌ Failed to scrape query '%s': %s", query, e)
                summary.failed_queries.append(query)
                continue

            for product in products:
                await writer.add(product)
                summary.products += 1
                summary.offers += len(product.offers)

        await writer.flush()

        elapsed_time = time.time() - start_time
        logger.info("✅ Saved %d products with %d offers in %.2f seconds", summary.products, summary.offers, elapsed_time)
        if summary.failed_queries:
            logger.warning("⚠️ %d queries failed: %s", len(summary.failed_queries), ", ".join(summary.failed_queries))

        return summary
