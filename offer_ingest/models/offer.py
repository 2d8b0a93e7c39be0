"""Offer and grouped-product models for the shopping ingestion pipeline."""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

# Largest review count kept; anything above is treated as malformed
MAX_REVIEW_COUNT = 2**63 - 1


class Category(str, Enum):
    """Product categories inferred from listing text."""

    COMPLETE_SETS = "Complete Sets"
    GOLF_BAGS = "Golf Bags"
    CARTS = "Carts"
    DRIVERS = "Drivers"
    WOODS = "Woods"
    WEDGES = "Wedges"
    PUTTERS = "Putters"
    IRONS = "Irons"
    RANGEFINDERS = "Rangefinders"
    APPAREL = "Apparel"


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a loosely-typed numeric value, returning None when it is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, str):
            value = value.replace(",", "").strip()
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return parsed if parsed.is_finite() else None


class RawResult(BaseModel):
    """
    One shopping result as returned by the search API.

    Every field is optional. Values with the wrong shape are narrowed to None
    instead of rejecting the whole record.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    extracted_price: Optional[Decimal] = None
    link: Optional[str] = None
    source: Optional[str] = None
    store: Optional[str] = None
    thumbnail: Optional[str] = None
    delivery: Optional[str] = None
    availability: Optional[str] = None
    product_id: Optional[str] = None
    source_icon: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    extracted_old_price: Optional[Decimal] = None
    second_hand_condition: Optional[str] = None
    snippet: Optional[str] = None
    extensions: Optional[List[str]] = None

    @field_validator(
        "title",
        "link",
        "source",
        "store",
        "thumbnail",
        "delivery",
        "availability",
        "source_icon",
        "second_hand_condition",
        "snippet",
        mode="before",
    )
    @classmethod
    def narrow_text(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator("product_id", mode="before")
    @classmethod
    def narrow_product_id(cls, v: Any) -> Optional[str]:
        """SerpAPI ids are strings, but numeric ids are accepted and stringified."""
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return str(v)
        return v if isinstance(v, str) else None

    @field_validator("extracted_price", "extracted_old_price", mode="before")
    @classmethod
    def narrow_price(cls, v: Any) -> Optional[Decimal]:
        return _to_decimal(v)

    @field_validator("rating", mode="before")
    @classmethod
    def narrow_rating(cls, v: Any) -> Optional[float]:
        parsed = _to_decimal(v)
        if parsed is None:
            return None
        rating = float(parsed)
        return rating if math.isfinite(rating) else None

    @field_validator("reviews", mode="before")
    @classmethod
    def narrow_reviews(cls, v: Any) -> Optional[int]:
        # Counts arrive as 1234, "1,234" or "1,234 reviews"
        if isinstance(v, str):
            tokens = v.split()
            v = tokens[0] if tokens else None
        parsed = _to_decimal(v)
        if parsed is None or parsed < 0 or parsed > MAX_REVIEW_COUNT:
            return None
        if parsed != parsed.to_integral_value():
            return None
        return int(parsed)

    @field_validator("extensions", mode="before")
    @classmethod
    def narrow_extensions(cls, v: Any) -> Optional[List[str]]:
        if not isinstance(v, list):
            return None
        return [item for item in v if isinstance(item, str)]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RawResult":
        """Build a RawResult from one entry of the API's result array."""
        return cls.model_validate(payload)


class Offer(BaseModel):
    """
    One retailer's purchase option for a product.

    Attributes:
        price: Positive price in the configured currency
        currency: Currency code (e.g., "CAD")
        retailer: Retailer name, "Unknown" when the source gave none
        url: Listing URL
        availability_text: Delivery and availability text joined together
        source: Channel the offer was collected from
        source_icon: Optional retailer icon URL
        delivery: Optional delivery text
        old_price: Optional previous price
        second_hand_condition: Optional condition (e.g., "refurbished")
    """

    price: Decimal = Field(..., description="Offer price", gt=0)
    currency: str = Field(..., description="Currency code")
    retailer: str = Field(..., description="Retailer name")
    url: str = Field(..., description="Listing URL", min_length=1)
    availability_text: str = Field(default="", description="Delivery and availability text")
    source: str = Field(..., description="Source channel tag")
    source_icon: Optional[str] = Field(default=None, description="Retailer icon URL")
    delivery: Optional[str] = Field(default=None, description="Delivery text")
    old_price: Optional[Decimal] = Field(default=None, description="Previous price")
    second_hand_condition: Optional[str] = Field(default=None, description="Condition of a second-hand offer")


class ProductMetadata(BaseModel):
    """Product-level fields extracted alongside an offer."""

    title: str
    image_url: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    snippet: Optional[str] = None
    extensions: Optional[List[str]] = None
    product_query: str
    category: Optional[Category] = None
    collected_at: datetime


class GroupedProduct(ProductMetadata):
    """
    Canonical product aggregating one or more offers.

    lowest_price is derived from the offers, so it always equals the minimum
    offer price.
    """

    product_id: Optional[str] = None
    offers: List[Offer] = Field(..., min_length=1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def lowest_price(self) -> Decimal:
        return min(offer.price for offer in self.offers)

    @classmethod
    def from_offer(cls, product_id: Optional[str], offer: Offer, metadata: ProductMetadata) -> "GroupedProduct":
        """Create a product seeded from its first offer."""
        return cls(product_id=product_id, offers=[offer], **metadata.model_dump())

    def add_offer(self, offer: Offer) -> None:
        self.offers.append(offer)

    def backfill(self, metadata: ProductMetadata) -> None:
        """Fill rating and reviews when missing; present values are never replaced."""
        if self.rating is None and metadata.rating is not None:
            self.rating = metadata.rating
        if self.reviews is None and metadata.reviews is not None:
            self.reviews = metadata.reviews

    def to_document(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict for storage."""
        return self.model_dump(mode="json")


class PipelineSummary(BaseModel):
    """Totals reported after an ingestion run."""

    products: int = 0
    offers: int = 0
    failed_queries: List[str] = Field(default_factory=list)

    def message(self) -> str:
        return f"Scraping complete. Saved {self.products} products containing {self.offers} offers."
