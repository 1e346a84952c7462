"""Unit tests for listing data models."""

import pytest
from pydantic import ValidationError

from shelfscan.scraper.models import Price, PriceRange, Product, Rating, SearchResults


def _product(**kwargs) -> Product:
    data = {
        "asin": "B08N5WRWNW",
        "title": "Test Product",
        "url": "https://www.amazon.com/dp/B08N5WRWNW",
    }
    data.update(kwargs)
    return Product(**data)


class TestRating:
    """Test rating clamping."""

    def test_above_scale_clamps_to_five(self):
        assert Rating(stars=7.3).stars == 5.0

    def test_below_scale_clamps_to_zero(self):
        assert Rating(stars=-1.0).stars == 0.0

    def test_in_range_unchanged(self):
        rating = Rating(stars=4.5, review_count=10)
        assert rating.stars == 4.5
        assert rating.review_count == 10

    def test_negative_review_count_rejected(self):
        with pytest.raises(ValidationError):
            Rating(stars=4.0, review_count=-1)


class TestPrice:
    """Test price constructors."""

    def test_simple(self):
        price = Price.simple(19.99, "USD")
        assert price.current == 19.99
        assert price.original is None
        assert not price.is_hidden

    def test_with_discount(self):
        price = Price.with_discount(80.0, 100.0, "EUR")
        assert price.original == 100.0
        assert price.currency == "EUR"

    def test_hidden(self):
        price = Price.hidden("GBP")
        assert price.is_hidden
        assert price.current == 0.0

    def test_with_range(self):
        price = Price.with_range(10.0, 20.0, "USD")
        assert price.current == 10.0
        assert price.range == PriceRange(min=10.0, max=20.0)

    def test_open_range(self):
        price = Price.with_range(10.0, None, "USD")
        assert price.range.max is None


class TestProduct:
    """Test product helpers."""

    def test_defaults(self):
        product = _product()
        assert product.price is None
        assert product.rating is None
        assert not product.is_sponsored
        assert not product.in_stock

    def test_current_price(self):
        assert _product(price=Price.simple(5.0, "USD")).current_price() == 5.0

    def test_hidden_price_has_no_current_price(self):
        assert _product(price=Price.hidden("USD")).current_price() is None

    def test_stars(self):
        assert _product(rating=Rating(stars=4.0)).stars() == 4.0
        assert _product().stars() is None

    def test_discount_percent(self):
        product = _product(price=Price.with_discount(75.0, 100.0, "USD"))
        assert product.discount_percent() == 25

    def test_discount_rounds(self):
        product = _product(price=Price.with_discount(99.99, 129.99, "USD"))
        assert product.discount_percent() == 23

    def test_discount_half_rounds_up(self):
        """Test an exact half percent rounds up rather than to the even number."""
        product = _product(price=Price.with_discount(87.5, 100.0, "USD"))
        assert product.discount_percent() == 13

    def test_discount_caps_at_99(self):
        product = _product(price=Price.with_discount(1.0, 1000.0, "USD"))
        assert product.discount_percent() == 99

    def test_discount_without_original(self):
        assert _product(price=Price.simple(10.0, "USD")).discount_percent() is None
        assert _product().discount_percent() is None

    def test_original_below_current_is_not_an_error(self):
        """Test a nonsensical original price yields zero instead of raising."""
        product = _product(price=Price.with_discount(120.0, 100.0, "USD"))
        assert product.discount_percent() == 0

    def test_zero_original(self):
        product = _product(price=Price.with_discount(10.0, 0.0, "USD"))
        assert product.discount_percent() == 0


class TestSearchResults:
    """Test result page container."""

    def test_empty(self):
        results = SearchResults(query="mouse", region="us")
        assert results.is_empty()
        assert results.count() == 0
        assert results.page == 1
        assert not results.has_more

    def test_count(self):
        results = SearchResults(query="mouse", region="us", products=[_product(), _product(asin="B000000002")])
        assert results.count() == 2
        assert not results.is_empty()

    def test_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            SearchResults(query="mouse", region="us", page=0)
