"""Persistence helpers for extracted results.

Search results are saved as one JSON document; products can also be
exported as CSV rows for spreadsheets.
"""

import csv
import json
from pathlib import Path
from typing import Iterable

from shelfscan.utils.logger import get_logger

from .models import Product, SearchResults

logger = get_logger(__name__)

CSV_COLUMNS = [
    'asin', 'title', 'price', 'currency', 'original_price', 'discount_percent',
    'stars', 'review_count', 'is_prime', 'is_sponsored', 'is_amazon_choice',
    'in_stock', 'brand', 'url',
]


def save_results(results: SearchResults, path: Path) -> Path:
    """Save search results as a JSON document.

    Args:
        results: SearchResults to save
        path: Output file path; parent directories are created

    Returns:
        Path written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(results.model_dump(mode='json'), f, indent=2, ensure_ascii=False)

    logger.info(f"Saved {results.count()} products to {path}")
    return path


def load_results(path: Path) -> SearchResults:
    """Load search results saved by ``save_results``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If the data is not a valid result set
    """
    if not path.exists():
        raise FileNotFoundError(f"Results file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    results = SearchResults.model_validate(data)
    logger.debug(f"Loaded {results.count()} products from {path}")
    return results


def _csv_row(product: Product) -> dict:
    price = product.price
    rating = product.rating
    return {
        'asin': product.asin,
        'title': product.title,
        'price': product.current_price() if product.current_price() is not None else '',
        'currency': price.currency if price else '',
        'original_price': price.original if price and price.original is not None else '',
        'discount_percent': product.discount_percent() if product.discount_percent() is not None else '',
        'stars': rating.stars if rating else '',
        'review_count': rating.review_count if rating else '',
        'is_prime': product.is_prime,
        'is_sponsored': product.is_sponsored,
        'is_amazon_choice': product.is_amazon_choice,
        'in_stock': product.in_stock,
        'brand': product.brand or '',
        'url': product.url,
    }


def export_products_to_csv(products: Iterable[Product], path: Path) -> Path:
    """Export products to a CSV file, one row per product in the given order.

    Args:
        products: Products to export
        path: Output CSV path

    Returns:
        Path written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for product in products:
            writer.writerow(_csv_row(product))
            count += 1

    logger.info(f"Exported {count} products to CSV: {path}")
    return path
