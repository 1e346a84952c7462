"""Extraction components for marketplace pages.

This module provides the extraction pipeline:
- MarketplaceParser: Search result and product page extractor
- Region: Storefront locale table
- SelectorCatalog: Ordered fallback selectors per field
- FilterChain: Order-preserving product filters
- Data models: Pydantic models for products, prices and ratings

Usage:
    from shelfscan.scraper import MarketplaceParser, Region

    parser = MarketplaceParser(Region.DE)
    results = parser.parse_search_page(html, "kopfhörer", page=1)
"""

from .blocking import BlockStatus, detect_block
from .filters import FilterChain
from .models import Price, PriceRange, Product, Rating, SearchResults
from .parsers import MarketplaceParser
from .regions import Region
from .selectors import SelectorCatalog, default_catalog
from .storage import export_products_to_csv, load_results, save_results

__all__ = [
    "BlockStatus",
    "detect_block",
    "FilterChain",
    "Price",
    "PriceRange",
    "Product",
    "Rating",
    "SearchResults",
    "MarketplaceParser",
    "Region",
    "SelectorCatalog",
    "default_catalog",
    "save_results",
    "load_results",
    "export_products_to_csv",
]
