"""
Post-validation backfill: every item leaves here with an absolute image URL.

Image choice is a small ordered keyword table over the item name — first match
wins, so "headphones" is audio even though it also contains "phone".
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional
from urllib.parse import urlparse

from models import RecommendationItem, SearchResult

logger = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/{}?w=400&h=400&fit=crop"

# Also quoted in the model prompt so well-behaved replies need no backfill
CATEGORY_IMAGES = {
    "audio":     _IMG.format("photo-1505740420928-5e560c06d30e"),
    "computing": _IMG.format("photo-1517336714731-489689fd1ca8"),
    "mobile":    _IMG.format("photo-1511707171634-5f897ff02aa9"),
    "display":   _IMG.format("photo-1593359677879-a4bb92f829d1"),
    "furniture": _IMG.format("photo-1592078615290-033ee584e267"),
    "kitchen":   _IMG.format("photo-1556909172-54557c7e4fb7"),
    "generic":   _IMG.format("photo-1505751172876-fa1923c5c528"),
}

_NAME_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("headphone", "earbud"), "audio"),
    (("laptop", "computer"),  "computing"),
    (("phone",),              "mobile"),
    (("chair",),              "furniture"),
)


def is_absolute_url(value: Optional[str]) -> bool:
    if not value:
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def image_for_name(name: str) -> str:
    """Pick a category image from the product name."""
    lowered = (name or "").lower()
    for keywords, category in _NAME_RULES:
        if any(k in lowered for k in keywords):
            return CATEGORY_IMAGES[category]
    return CATEGORY_IMAGES["generic"]


def backfill_item(item: RecommendationItem) -> RecommendationItem:
    if is_absolute_url(item.image_url):
        return item
    image = image_for_name(item.name)
    logger.info("No valid imageUrl for %r (%r) — using %s", item.name, item.image_url, image)
    return replace(item, image_url=image)


def backfill(result: SearchResult) -> SearchResult:
    """Return a copy of result with per-item gaps filled. Never fails."""
    return replace(
        result,
        recommendations=[backfill_item(item) for item in result.recommendations],
    )
