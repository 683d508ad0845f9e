"""
Built-in catalog — the answer of last resort.

fallback() is pure: no network, no randomness. It is used whenever no model
is configured, the model call fails, or its reply cannot be salvaged, so it
must always return a non-empty result with every field populated.
"""
from __future__ import annotations

from intent import classify
from models import PRODUCT, SERVICE, TRAVEL, RecommendationItem, SearchResult

_IMG = "https://images.unsplash.com/{}?w=400&h=400&fit=crop"

# (category, items) — items are kwargs for RecommendationItem
_TRAVEL_SET = ("Travel & Accommodation", (
    dict(
        name="Round-trip Economy Flight",
        description="Compare prices across major airlines",
        estimated_price="$200-800",
        retailer="Skyscanner",
        affiliate_network="skyscanner",
        product_id="flight-search",
        image_url=_IMG.format("photo-1436491865332-7a61a109cc05"),
        reason="Best for comparing flight prices",
    ),
    dict(
        name="Hotel Booking",
        description="Find accommodations at your destination",
        estimated_price="$80-300/night",
        retailer="Booking.com",
        affiliate_network="booking",
        product_id="hotel-search",
        image_url=_IMG.format("photo-1566073771259-6a8506099945"),
        reason="Wide selection with competitive rates",
    ),
))

_SERVICE_SET = ("Local Services", (
    dict(
        name="HomeAdvisor Pro Matching",
        description="Connect with verified local professionals",
        estimated_price="Free quotes",
        retailer="HomeAdvisor",
        affiliate_network="shareasale",
        product_id="homeadvisor-service",
        image_url=_IMG.format("photo-1581578731548-c64695cc6952"),
        reason="Pre-screened professionals with reviews",
    ),
))

_ELECTRONICS_SET = ("Electronics", (
    dict(
        name="Dell XPS 13 Laptop",
        description='13.3" FHD, Intel Core i7, 16GB RAM, 512GB SSD',
        estimated_price="$1,199.99",
        retailer="Amazon",
        affiliate_network="amazon",
        product_id="B09LAPTOP1",
        image_url=_IMG.format("photo-1593642632823-8f785ba67e45"),
        reason="Best balance of performance and portability",
    ),
    dict(
        name="MacBook Air M2",
        description='13.6" Liquid Retina, 8GB RAM, 256GB SSD',
        estimated_price="$1,099.00",
        retailer="Amazon",
        affiliate_network="amazon",
        product_id="B0MACBOOK1",
        image_url=_IMG.format("photo-1517336714731-489689fd1ca8"),
        reason="Excellent for creative work with long battery life",
    ),
))

_FURNITURE_SET = ("Furniture", (
    dict(
        name="Herman Miller Aeron Chair",
        description="Ergonomic office chair with adjustable lumbar support",
        estimated_price="$1,395.00",
        retailer="Wayfair",
        affiliate_network="wayfair",
        product_id="W1234AERON",
        image_url=_IMG.format("photo-1580480055273-228ff5388ef8"),
        reason="Industry-leading ergonomics",
    ),
    dict(
        name="Branch Ergonomic Chair",
        description="Adjustable office chair with breathable mesh",
        estimated_price="$349.00",
        retailer="Amazon",
        affiliate_network="amazon",
        product_id="B08BRANCH1",
        image_url=_IMG.format("photo-1592078615290-033ee584e267"),
        reason="Best value ergonomic chair",
    ),
))

_GENERIC_SET = ("Products", (
    dict(
        name="Top Rated Product",
        description="High-quality option matching your needs",
        estimated_price="$49.99",
        retailer="Amazon",
        affiliate_network="amazon",
        product_id="B08SAMPLE1",
        image_url=_IMG.format("photo-1523275335684-37898b6baf30"),
        reason="Highly rated with fast shipping",
    ),
))


def _product_set(query_lower: str) -> tuple:
    if "laptop" in query_lower or "computer" in query_lower:
        return _ELECTRONICS_SET
    if "chair" in query_lower or "office" in query_lower:
        return _FURNITURE_SET
    return _GENERIC_SET


def fallback(query: str) -> SearchResult:
    """Return the canned recommendation set for this query's intent and keywords."""
    intent = classify(query)
    if intent == TRAVEL:
        category, items = _TRAVEL_SET
    elif intent == SERVICE:
        category, items = _SERVICE_SET
    else:
        intent = PRODUCT
        category, items = _product_set((query or "").lower())

    # Fresh objects every call — callers own what they get back
    return SearchResult(
        intent=intent,
        category=category,
        recommendations=[RecommendationItem(**kw) for kw in items],
    )
