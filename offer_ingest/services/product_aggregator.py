"""Groups shopping results that share a product id into canonical products."""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from offer_ingest.models.offer import GroupedProduct, RawResult
from offer_ingest.services.normalizers.offer_extractor import OfferExtractor


class ProductAggregator:
    """
    Merges offers for the same external product id into one GroupedProduct.

    Results without a product id are kept as standalone products and never merged,
    even when their titles match.
    """

    def __init__(self, extractor: Optional[OfferExtractor] = None):
        self.extractor = extractor or OfferExtractor()

    def aggregate(self, raw_results: Sequence[RawResult], query: str, now: Optional[datetime] = None) -> List[GroupedProduct]:
        """
        Aggregate raw results into grouped products.

        Args:
            raw_results: Raw results in the order they were fetched
            query: Query the results belong to
            now: Collection timestamp, defaults to the current UTC time

        Returns:
            List[GroupedProduct]: Products grouped by id (first-seen order),
            followed by products without an id (input order)
        """
        collected_at = now or datetime.now(timezone.utc)
        grouped: Dict[str, GroupedProduct] = {}
        ungrouped: List[GroupedProduct] = []

        for raw in raw_results:
            extracted = self.extractor.extract(raw, query, collected_at)
            if extracted is None:
                continue
            offer, metadata = extracted

            product_id = raw.product_id
            if not product_id:
                ungrouped.append(GroupedProduct.from_offer(None, offer, metadata))
                continue

            existing = grouped.get(product_id)
            if existing is None:
                grouped[product_id] = GroupedProduct.from_offer(product_id, offer, metadata)
            else:
                existing.add_offer(offer)
                existing.backfill(metadata)

        return [*grouped.values(), *ungrouped]
