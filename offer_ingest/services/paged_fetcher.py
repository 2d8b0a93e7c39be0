"""Concurrent multi-page fetching of shopping results."""

import asyncio
from typing import List, Optional, Sequence

from offer_ingest.models.offer import RawResult
from offer_ingest.services.clients.serp_api_client import SerpAPIClient
from offer_ingest.utils import logger
from offer_ingest.utils.config import SERP_PAGE_OFFSETS


class PagedFetcher:
    """
    Fetches a fixed set of result pages for a query concurrently.

    Attributes:
        client: SerpAPI client used for each page
        offsets: Page start offsets, requested together
    """

    def __init__(self, client: SerpAPIClient, offsets: Optional[Sequence[int]] = None):
        self.client = client
        self.offsets = tuple(offsets if offsets is not None else SERP_PAGE_OFFSETS)

    async def fetch_all(self, query: str) -> List[RawResult]:
        """
        Fetch every page for a query and concatenate them in page order.

        Args:
            query: Search query

        Returns:
            List[RawResult]: Results of all pages, page by page

        Raises:
            SerpAPIException: If any page fails; partial pages are not returned
        """
        pages = await asyncio.gather(*(self.client.fetch_page(query, start) for start in self.offsets))

        results = [RawResult.from_payload(item) for page in pages for item in page]
        logger.info("📦 Fetched %d raw results over %d pages for query '%s'", len(results), len(pages), query)
        return results
