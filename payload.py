"""
Strict parse → one mechanical repair → give up.

parse_payload() turns an extracted candidate into a validated SearchResult or
raises PayloadError. The only repair attempted is dropping trailing commas
before a closing brace/bracket; anything broader risks inventing data that
parses but means something else.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from backfill import is_absolute_url
from models import (
    DEFAULT_CATEGORIES,
    INTENTS,
    MAX_RECOMMENDATIONS,
    RecommendationItem,
    SearchResult,
)

logger = logging.getLogger(__name__)

_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")

# wire key → RecommendationItem attribute (text fields only)
_TEXT_FIELDS = {
    "description":      "description",
    "estimatedPrice":   "estimated_price",
    "retailer":         "retailer",
    "affiliateNetwork": "affiliate_network",
    "productId":        "product_id",
    "reason":           "reason",
}


class PayloadError(ValueError):
    """The candidate could not be turned into a SearchResult."""

    def __init__(self, reason: str, candidate: str):
        super().__init__(reason)
        self.reason = reason
        self.candidate = candidate


def strip_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def parse_payload(candidate: str) -> SearchResult:
    """
    Parse and validate a candidate payload.

    Raises PayloadError when neither the strict parse nor the repaired parse
    produces a valid result.
    """
    # json.loads also raises plain ValueError (oversized int literals) and
    # RecursionError (deeply nested arrays); both count as parse failures.
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        logger.info("Strict parse failed (%s) — retrying without trailing commas", exc)
    else:
        return _validate(data, candidate)

    repaired = strip_trailing_commas(candidate)
    try:
        data = json.loads(repaired)
    except (ValueError, RecursionError) as exc:
        raise PayloadError(f"JSON parse error after repair: {exc}", candidate) from exc
    return _validate(data, candidate)


# ── Validation ────────────────────────────────────────────────────────────────

def _validate(data: Any, candidate: str) -> SearchResult:
    if not isinstance(data, dict):
        raise PayloadError(f"Top level is {type(data).__name__}, not an object", candidate)

    intent = data.get("intent")
    if intent not in INTENTS:
        raise PayloadError(f"Unknown intent {intent!r}", candidate)

    raw_items = data.get("recommendations")
    if not isinstance(raw_items, list):
        if raw_items is not None:
            logger.info("recommendations is %s — treating as empty", type(raw_items).__name__)
        raw_items = []

    items: list[RecommendationItem] = []
    for idx, raw in enumerate(raw_items):
        item = _coerce_item(raw)
        if item is None:
            logger.info("Dropping recommendation #%d: no usable name", idx + 1)
            continue
        items.append(item)

    if len(items) > MAX_RECOMMENDATIONS:
        logger.info("Keeping first %d of %d recommendations", MAX_RECOMMENDATIONS, len(items))
        items = items[:MAX_RECOMMENDATIONS]

    category = _text(data.get("category")) or DEFAULT_CATEGORIES[intent]
    return SearchResult(intent=intent, category=category, recommendations=items)


def _coerce_item(raw: Any) -> Optional[RecommendationItem]:
    if not isinstance(raw, dict):
        return None
    name = _text(raw.get("name"))
    if not name:
        return None

    kwargs = {attr: _text(raw.get(key)) for key, attr in _TEXT_FIELDS.items()}
    image = _text(raw.get("imageUrl")) or _text(raw.get("imageReference"))
    # placeholders like "ONE OF THE SEARCH URLS ABOVE" count as no URL
    product_url = _text(raw.get("productUrl"))
    if product_url and not is_absolute_url(product_url):
        logger.info("Ignoring non-URL productUrl for %r: %r", name, product_url[:80])
        product_url = ""
    return RecommendationItem(
        name=name,
        image_url=image or None,
        product_url=product_url or None,
        **kwargs,
    )


def _text(value: Any) -> str:
    """Scalars become stripped text; containers and null become ""."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value).strip()
