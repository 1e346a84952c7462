"""Pytest fixtures and configuration for shelfscan tests."""

from pathlib import Path

import pytest

from shelfscan.scraper.models import Price, Product, Rating
from shelfscan.scraper.parsers import MarketplaceParser
from shelfscan.scraper.regions import Region
from shelfscan.utils.config import CONFIG_ENV, reset_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep the cached configuration and SHELFSCAN_CONFIG out of every test."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def us_parser() -> MarketplaceParser:
    """Parser for the US storefront."""
    return MarketplaceParser(Region.US)


@pytest.fixture
def de_parser() -> MarketplaceParser:
    """Parser for the German storefront (comma decimals, EUR)."""
    return MarketplaceParser(Region.DE)


@pytest.fixture
def search_page_html() -> str:
    """Saved search results page with three cards, one of them an ad slot."""
    return (FIXTURES_DIR / "search_result.html").read_text(encoding="utf-8")


@pytest.fixture
def product_page_html() -> str:
    """Saved product detail page."""
    return (FIXTURES_DIR / "product_page.html").read_text(encoding="utf-8")


@pytest.fixture
def captcha_page_html() -> str:
    """Anti-automation challenge page, with a result card planted inside."""
    return (FIXTURES_DIR / "captcha.html").read_text(encoding="utf-8")


@pytest.fixture
def sample_products() -> list[Product]:
    """Products covering the fields the filters look at."""
    return [
        Product(
            asin="B000000001",
            title="Wireless Mouse Silent",
            url="https://www.amazon.com/dp/B000000001",
            price=Price.simple(19.99, "USD"),
            rating=Rating(stars=4.6, review_count=1200),
            is_prime=True,
            in_stock=True,
        ),
        Product(
            asin="B000000002",
            title="Gaming Mouse RGB",
            url="https://www.amazon.com/dp/B000000002",
            price=Price.with_discount(59.0, 79.0, "USD"),
            rating=Rating(stars=4.1, review_count=300),
            is_sponsored=True,
            in_stock=True,
        ),
        Product(
            asin="B000000003",
            title="Mouse Pad XXL",
            url="https://www.amazon.com/dp/B000000003",
            price=Price.hidden("USD"),
            in_stock=True,
        ),
        Product(
            asin="B000000004",
            title="Wireless Keyboard",
            url="https://www.amazon.com/dp/B000000004",
            rating=Rating(stars=3.2, review_count=15),
        ),
    ]
