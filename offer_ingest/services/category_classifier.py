"""Keyword-based category inference for shopping listings."""

from typing import Optional, Sequence, Tuple

from offer_ingest.models.offer import Category

# Evaluated in order; the first rule with a matching keyword wins.
# Bundles come first so "complete set ... driver" is not filed under Drivers.
CATEGORY_RULES: Sequence[Tuple[Category, Tuple[str, ...]]] = (
    (Category.COMPLETE_SETS, ("complete set", "package set", "box set")),
    (Category.GOLF_BAGS, ("bag",)),  # "stand bag", "cart bag"
    (Category.CARTS, ("push cart", "pull cart", "electric cart")),
    (Category.DRIVERS, ("driver",)),
    (Category.WOODS, ("fairway", "wood", "hybrid")),
    (Category.WEDGES, ("wedge", "sand", "lob", "gap")),
    (Category.PUTTERS, ("putter",)),
    (Category.IRONS, ("iron",)),
    (Category.RANGEFINDERS, ("rangefinder", "gps", "laser")),
    (Category.APPAREL, ("shirt", "pant", "shoe", "hat", "cap", "glove", "jacket")),
)


def classify(title: str, snippet: Optional[str] = None) -> Optional[Category]:
    """
    Infer a category from a listing's title and snippet.

    Args:
        title: Listing title
        snippet: Optional listing snippet

    Returns:
        Optional[Category]: First matching category, or None if no rule matches
    """
    text = f"{title} {snippet or ''}".lower()

    for category, keywords in CATEGORY_RULES:
        if any(keyword in text for keyword in keywords):
            return category

    return None
