"""Normalizer turning raw shopping results into offers and product metadata."""

from datetime import datetime
from typing import Optional, Tuple

from offer_ingest.models.offer import Offer, ProductMetadata, RawResult
from offer_ingest.services.category_classifier import classify
from offer_ingest.utils.config import OFFER_CURRENCY, OFFER_SOURCE

UNKNOWN_RETAILER = "Unknown"


class OfferExtractor:
    """
    Extracts a normalized Offer and its ProductMetadata from one RawResult.

    Attributes:
        currency: Currency code stamped on every offer
        source: Channel tag stamped on every offer
    """

    def __init__(self, currency: str = OFFER_CURRENCY, source: str = OFFER_SOURCE):
        self.currency = currency
        self.source = source

    def extract(self, raw: RawResult, query: str, now: datetime) -> Optional[Tuple[Offer, ProductMetadata]]:
        """
        Normalize a single raw result.

        Args:
            raw: Raw shopping result
            query: Query the result was collected for
            now: Collection timestamp shared by the whole run

        Returns:
            Optional[Tuple[Offer, ProductMetadata]]: The offer and its product data,
            or None when the result is not viable
        """
        title, link, price = raw.title, raw.link, raw.extracted_price
        if not title or not link or price is None or price <= 0:
            return None

        offer = Offer(
            price=price,
            currency=self.currency,
            retailer=raw.source or raw.store or UNKNOWN_RETAILER,
            url=link,
            availability_text=f"{raw.delivery or ''} {raw.availability or ''}".strip(),
            source=self.source,
            source_icon=raw.source_icon,
            delivery=raw.delivery,
            old_price=raw.extracted_old_price or None,
            second_hand_condition=raw.second_hand_condition,
        )

        metadata = ProductMetadata(
            title=title,
            image_url=raw.thumbnail,
            rating=raw.rating,
            reviews=raw.reviews,
            snippet=raw.snippet,
            extensions=raw.extensions,
            product_query=query,
            category=classify(title, raw.snippet),
            collected_at=now,
        )

        return offer, metadata
