"""
Categorization of receipts by vendor keyword.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


FALLBACK_CATEGORY = "Other"


@dataclass(frozen=True)
class CategoryRule:
    """A category and the lowercase substrings that select it."""
    name: str
    keywords: Tuple[str, ...]

    def matches(self, vendor_lower: str) -> bool:
        return any(keyword in vendor_lower for keyword in self.keywords)


# Checked top to bottom; the first rule with a matching keyword wins.
# Keep the order stable: "Shell Gas Bar" is Food & Dining, not Gas & Fuel.
CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule("Food & Dining", (
        "restaurant", "cafe", "coffee", "pizza", "burger", "food", "dining",
        "kitchen", "bar", "pub", "starbucks", "mcdonald", "dunkin",
    )),
    CategoryRule("Groceries", (
        "grocery", "market", "supermarket", "walmart", "target", "costco", "safeway",
    )),
    CategoryRule("Gas & Fuel", (
        "gas", "fuel", "shell", "chevron", "exxon", "bp", "mobil",
    )),
    CategoryRule("Shopping", (
        "store", "shop", "mall", "amazon", "ebay", "retail",
    )),
    CategoryRule("Transportation", (
        "uber", "lyft", "taxi", "bus", "train", "metro", "parking",
    )),
    CategoryRule("Healthcare", (
        "pharmacy", "hospital", "clinic", "medical", "doctor", "cvs", "walgreens",
    )),
    CategoryRule("Entertainment", (
        "movie", "theater", "cinema", "game", "entertainment", "netflix",
    )),
)


def suggest_category(vendor: Optional[str],
                     rules: Tuple[CategoryRule, ...] = CATEGORY_RULES) -> str:
    """
    Suggest an expense category from the vendor name.

    Args:
        vendor: Extracted vendor name, or None
        rules: Ordered category table

    Returns:
        Category name, or "Other" when the vendor is absent or matches nothing
    """
    if not vendor:
        return FALLBACK_CATEGORY

    vendor_lower = vendor.lower()
    for rule in rules:
        if rule.matches(vendor_lower):
            return rule.name

    return FALLBACK_CATEGORY
