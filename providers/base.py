"""
Shared prompt and base class for all completion providers.

A provider does one thing: send a prompt (plus an optional image) to a
generative model and return the reply text untouched. Parsing that text is
the pipeline's job, never the provider's.
"""
from __future__ import annotations

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import Optional

from backfill import CATEGORY_IMAGES

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """The provider answered but produced nothing usable (empty / blocked)."""


# ── Prompt (shared across all providers) ──────────────────────────────────────

SEARCH_PROMPT = """You are a product search API. User query: "{query}"
Detected intent hint: {intent}
{image_note}
Return ONLY raw JSON. NO markdown. NO code blocks. Start with {{ and end with }}.

Requirements:

1. IMAGES: use ONLY these exact URLs based on product category:
   - Headphones/Earbuds: {img_audio}
   - Laptops/Computers: {img_computing}
   - Phones: {img_mobile}
   - Monitors/TVs: {img_display}
   - Chairs/Furniture: {img_furniture}
   - Kitchen/Appliances: {img_kitchen}
   - Other products: {img_generic}

2. PRICES: realistic current market prices as text, e.g. "$49.99" or "$80-300/night".

3. RETAILERS: pick from Amazon, Walmart, Target, Best Buy (use different ones).
   For travel use Skyscanner or Booking.com; for local services use HomeAdvisor or Home Depot.

4. PRODUCT URLs:
   - Amazon: https://www.amazon.com/s?k=PRODUCT_NAME_HERE
   - Walmart: https://www.walmart.com/search?q=PRODUCT_NAME_HERE
   - Target: https://www.target.com/s?searchTerm=PRODUCT_NAME_HERE
   - Best Buy: https://www.bestbuy.com/site/searchpage.jsp?st=PRODUCT_NAME_HERE

5. PRODUCT NAMES: real, specific models that exist (e.g. "Sony WH-1000XM5").

6. affiliateNetwork: one of amazon, shareasale, cj, rakuten, booking, skyscanner, homedepot, wayfair.

Return 3 to 5 recommendations in exactly this structure:
{{
  "intent": "product|travel|service",
  "category": "Product Category",
  "recommendations": [
    {{
      "name": "Real Brand Name + Model",
      "description": "Brief specs",
      "estimatedPrice": "$XX.XX",
      "retailer": "Amazon",
      "affiliateNetwork": "amazon",
      "productId": "ASIN or search-query",
      "imageUrl": "ONE OF THE IMAGE URLS ABOVE",
      "productUrl": "ONE OF THE SEARCH URLS ABOVE",
      "reason": "Why relevant"
    }}
  ]
}}

NO trailing commas. Return ONLY valid JSON."""

_IMAGE_NOTE = "An image of what the user is looking for is attached; identify the product in it first."
_NO_QUERY   = "What product is shown in this image?"


def build_search_prompt(query: str, intent: str, has_image: bool = False) -> str:
    safe_query = (query or "").strip() or (_NO_QUERY if has_image else "")
    return SEARCH_PROMPT.format(
        # Quotes would close the prompt's quoted query early
        query=safe_query.replace('"', "'"),
        intent=intent,
        image_note=_IMAGE_NOTE if has_image else "",
        **{f"img_{k}": v for k, v in CATEGORY_IMAGES.items()},
    )


def detect_media_type(image_bytes: bytes) -> str:
    """Sniff the image type from magic bytes (default jpeg)."""
    if image_bytes[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if image_bytes[:4] == b"GIF8":
        return "image/gif"
    if image_bytes[:4] == b"RIFF":
        return "image/webp"
    return "image/jpeg"


def decode_image(image_data: str) -> tuple[bytes, str]:
    """
    Decode the base64 payload sent by the UI.
    Accepts both bare base64 and a data: URI. Raises ValueError when it isn't base64.
    """
    data = image_data.strip()
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"imageData is not valid base64: {exc}") from exc
    return raw, detect_media_type(raw)


# ── Abstract base ──────────────────────────────────────────────────────────────

class CompletionProvider(ABC):
    """Base class all completion providers must implement."""

    name: str           # e.g. "gemini"
    model_id: str       # e.g. "gemini-2.5-flash"

    @abstractmethod
    async def complete(self, prompt: str, image_data: Optional[str] = None) -> str:
        """Send prompt (and optional base64 image) to the model; return its raw text."""
        ...

    @property
    def full_name(self) -> str:
        return f"{self.name}/{self.model_id}"
