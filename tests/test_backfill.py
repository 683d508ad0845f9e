"""
Tests for backfill.py — image URL backfill.
"""
from __future__ import annotations

import pytest

from backfill import CATEGORY_IMAGES, backfill, image_for_name, is_absolute_url
from models import RecommendationItem, SearchResult


def make_item(name: str = "Thing", image_url=None, product_url=None) -> RecommendationItem:
    return RecommendationItem(name=name, image_url=image_url, product_url=product_url)


class TestIsAbsoluteUrl:
    @pytest.mark.parametrize("value", [
        "https://images.unsplash.com/photo-1?w=400",
        "http://example.com/a.jpg",
    ])
    def test_absolute(self, value):
        assert is_absolute_url(value)

    @pytest.mark.parametrize("value", [
        None, "", "   ", "/images/a.jpg", "example.com/a.jpg",
        "USE ONE OF THE IMAGE URLS ABOVE", "ftp://example.com/a.jpg", "https://",
    ])
    def test_not_absolute(self, value):
        assert not is_absolute_url(value)


class TestImageForName:
    @pytest.mark.parametrize("name, category", [
        ("Sony WH-1000XM5 Headphones", "audio"),
        ("Apple AirPods Pro Earbuds", "audio"),
        ("Dell XPS 13 Laptop", "computing"),
        ("Mac Mini Desktop Computer", "computing"),
        ("Google Pixel 8 Phone", "mobile"),
        ("Herman Miller Aeron Chair", "furniture"),
        ("Instant Pot Duo", "generic"),
        ("", "generic"),
    ])
    def test_table(self, name, category):
        assert image_for_name(name) == CATEGORY_IMAGES[category]

    def test_headphone_wins_over_phone(self):
        # "headphone" contains "phone"; the earlier rule must win
        assert image_for_name("headphone stand") == CATEGORY_IMAGES["audio"]

    def test_case_insensitive(self):
        assert image_for_name("GAMING LAPTOP") == CATEGORY_IMAGES["computing"]


class TestBackfill:
    def test_missing_image_filled(self):
        result = backfill(SearchResult("product", "X", [make_item("Gaming Laptop")]))
        assert result.recommendations[0].image_url == CATEGORY_IMAGES["computing"]

    def test_relative_image_replaced(self):
        result = backfill(SearchResult("product", "X", [make_item("Chair", image_url="chair.jpg")]))
        assert result.recommendations[0].image_url == CATEGORY_IMAGES["furniture"]

    def test_valid_image_kept(self):
        url = "https://cdn.example.com/p.png"
        result = backfill(SearchResult("product", "X", [make_item("Chair", image_url=url)]))
        assert result.recommendations[0].image_url == url

    def test_product_url_untouched(self):
        result = backfill(SearchResult("product", "X", [make_item("A"), make_item("B", product_url="https://x.test/b")]))
        assert result.recommendations[0].product_url is None
        assert result.recommendations[1].product_url == "https://x.test/b"

    def test_does_not_mutate_input(self):
        original = SearchResult("product", "X", [make_item("Phone")])
        backfill(original)
        assert original.recommendations[0].image_url is None

    def test_order_and_metadata_preserved(self):
        items = [make_item(n) for n in ("C", "A", "B")]
        result = backfill(SearchResult("service", "Local Services", items))
        assert [r.name for r in result.recommendations] == ["C", "A", "B"]
        assert result.intent == "service"
        assert result.category == "Local Services"

    def test_empty_result(self):
        assert backfill(SearchResult("product", "X", [])).recommendations == []
