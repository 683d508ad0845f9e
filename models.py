"""
Shared result types passed between the pipeline stages and the HTTP layer.

Python attributes are snake_case; to_dict() produces the camelCase wire shape
the UI consumes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# ── Intents ───────────────────────────────────────────────────────────────────

PRODUCT = "product"
TRAVEL  = "travel"
SERVICE = "service"

INTENTS = (PRODUCT, TRAVEL, SERVICE)

# Display label used when a result carries no category of its own
DEFAULT_CATEGORIES = {
    PRODUCT: "Products",
    TRAVEL:  "Travel & Accommodation",
    SERVICE: "Local Services",
}

MAX_RECOMMENDATIONS = 5


@dataclass
class RecommendationItem:
    """One suggested purchase, booking or service."""
    name: str
    description: str = ""
    estimated_price: str = ""       # human-readable price or range, never numeric
    retailer: str = ""
    affiliate_network: str = ""     # key into affiliate.REGISTRY
    product_id: str = ""            # ASIN, search term or synthetic slug
    image_url: Optional[str] = None
    product_url: Optional[str] = None
    reason: str = ""

    def to_dict(self) -> dict:
        data = {
            "name":             self.name,
            "description":      self.description,
            "estimatedPrice":   self.estimated_price,
            "retailer":         self.retailer,
            "affiliateNetwork": self.affiliate_network,
            "productId":        self.product_id,
            "imageUrl":         self.image_url,
            "reason":           self.reason,
        }
        if self.product_url:
            data["productUrl"] = self.product_url
        return data


@dataclass
class SearchResult:
    """Top-level response. recommendations are ordered best-first."""
    intent: str
    category: str
    recommendations: list[RecommendationItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "intent":          self.intent,
            "category":        self.category,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
