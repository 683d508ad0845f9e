"""
Affiliate network registry and outbound link construction.

Links are built fresh from the item at render time, so changing
AMAZON_ASSOCIATE_TAG only needs a restart, never a data migration.
Only Amazon links carry a tracking tag; other networks' URLs pass through.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import parse_qsl, quote_plus, urlencode, urlsplit, urlunsplit

import config
from backfill import is_absolute_url
from models import RecommendationItem

MARKETPLACE = "amazon"

_DP_URL     = "https://www.amazon.com/dp/{asin}?{query}"
_SEARCH_URL = "https://www.amazon.com/s?{query}"

# Real ASINs: 10 upper-case alphanumerics (B0XXXXXXXX or an ISBN-10)
_ASIN_RE = re.compile(r"^[A-Z0-9]{10}$")


@dataclass(frozen=True)
class AffiliateNetwork:
    key: str
    name: str
    commission: str     # display text, e.g. "1-10%" or "CPA"
    partner_id: str


def _build_registry() -> Mapping[str, AffiliateNetwork]:
    entries = [
        AffiliateNetwork("amazon",     "Amazon Associates",   "1-10%",  config.AMAZON_ASSOCIATE_TAG),
        AffiliateNetwork("shareasale", "ShareASale",          "5-20%",  "YOUR_SHAREASALE_ID"),
        AffiliateNetwork("cj",         "CJ Affiliate",        "3-15%",  "YOUR_CJ_ID"),
        AffiliateNetwork("rakuten",    "Rakuten Advertising", "2-10%",  "YOUR_RAKUTEN_ID"),
        AffiliateNetwork("booking",    "Booking.com",         "25-40%", "YOUR_BOOKING_ID"),
        AffiliateNetwork("skyscanner", "Skyscanner",          "CPA",    "YOUR_SKYSCANNER_ID"),
        AffiliateNetwork("homedepot",  "Home Depot",          "3-8%",   "YOUR_HOMEDEPOT_ID"),
        AffiliateNetwork("wayfair",    "Wayfair",             "5-7%",   "YOUR_WAYFAIR_ID"),
    ]
    return MappingProxyType({n.key: n for n in entries})


# Read-only for the life of the process
REGISTRY: Mapping[str, AffiliateNetwork] = _build_registry()


def get_network(key: Optional[str]) -> Optional[AffiliateNetwork]:
    return REGISTRY.get((key or "").strip().lower())


def commission_for(key: Optional[str]) -> Optional[str]:
    """Commission text for display, or None for networks we don't know."""
    network = get_network(key)
    return network.commission if network else None


def looks_like_asin(product_id: Optional[str]) -> bool:
    return bool(product_id) and bool(_ASIN_RE.match(product_id.strip()))


def with_partner_tag(url: str, tag: str) -> str:
    """Set tag=<tag> on url, replacing any existing tag parameter."""
    parts = urlsplit(url)
    params = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "tag"]
    params.append(("tag", tag))
    return urlunsplit(parts._replace(query=urlencode(params)))


def build_link(item: RecommendationItem) -> str:
    """
    Outbound URL for one recommendation.

      1. absolute product_url + Amazon        → product_url with our tag
      2. absolute product_url + other network → product_url unchanged
      3. Amazon + ASIN-like id                → /dp/<ASIN> with our tag
      4. anything else                        → Amazon search for the item name
    """
    is_marketplace = (item.affiliate_network or "").strip().lower() == MARKETPLACE
    tag = REGISTRY[MARKETPLACE].partner_id
    product_url = (item.product_url or "").strip()

    if is_absolute_url(product_url):
        if is_marketplace:
            return with_partner_tag(product_url, tag)
        return product_url

    if is_marketplace and looks_like_asin(item.product_id):
        return _DP_URL.format(asin=item.product_id.strip(), query=urlencode({"tag": tag}))

    return _SEARCH_URL.format(query=urlencode({"k": item.name, "tag": tag}, quote_via=quote_plus))
