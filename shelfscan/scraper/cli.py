"""Command-line interface for offline page extraction.

Runs the extractors over HTML files saved to disk; fetching pages is
left to whatever transport produced the files.

Usage:
    shelfscan search page.html --query "wireless mouse" --region us
    shelfscan product dp.html --asin B08N5WRWNW --region de
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from shelfscan.utils import (
    AppException,
    ContentBlockedError,
    FilterConfig,
    PageParsingError,
    get_config,
    load_config,
    get_logger,
    log_execution_time,
    set_package_log_level,
)

from .filters import FilterChain
from .models import Product
from .parsers import MarketplaceParser
from .regions import Region
from .storage import export_products_to_csv, save_results
from .utils import extract_asin_from_url, normalize_asin

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_BLOCKED = 2


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="shelfscan",
        description="Extract products, prices and ratings from saved marketplace pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract a saved US search page
  shelfscan search results.html --query "wireless mouse"

  # German storefront, keep well-rated non-sponsored listings, write JSON
  shelfscan search seite.html --query maus --region de --min-rating 4.5 --no-sponsored --output out.json

  # Product detail page (ASIN or product URL)
  shelfscan product dp.html --asin https://www.amazon.com/dp/B08N5WRWNW
        """
    )

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', type=Path, default=None,
                        help='Path to configuration file (default: auto-detect)')
    common.add_argument('--region', type=str, default=None,
                        help='Storefront region code, e.g. us, de, uk (overrides config)')
    common.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default=None, help='Override log level')

    subparsers = parser.add_subparsers(dest='command', required=True)

    search = subparsers.add_parser('search', parents=[common], help='Extract a search results page')
    search.add_argument('html_file', type=Path, help='Saved search results HTML')
    search.add_argument('--query', type=str, required=True, help='Query the page was fetched for')
    search.add_argument('--page', type=int, default=1, help='Page number (default: 1)')
    search.add_argument('--output', type=Path, default=None, help='Write results as JSON')
    search.add_argument('--csv', type=Path, default=None, help='Write products as CSV')
    search.add_argument('--min-price', type=float, default=None)
    search.add_argument('--max-price', type=float, default=None)
    search.add_argument('--min-rating', type=float, default=None)
    search.add_argument('--prime-only', action='store_true')
    search.add_argument('--no-sponsored', action='store_true')
    search.add_argument('--keyword', action='append', default=[],
                        help='Word that must appear in the title (repeatable)')
    search.add_argument('--exclude', action='append', default=[],
                        help='Word that must not appear in the title (repeatable)')

    product = subparsers.add_parser('product', parents=[common], help='Extract a product detail page')
    product.add_argument('html_file', type=Path, help='Saved product page HTML')
    product.add_argument('--asin', type=str, default='',
                         help='ASIN or product URL (default: read from the page)')
    product.add_argument('--output', type=Path, default=None, help='Write product as JSON')

    return parser.parse_args(argv)


def _resolve_asin(value: str) -> str:
    asin = normalize_asin(value)
    if asin:
        return asin
    try:
        return extract_asin_from_url(value)
    except ValueError:
        return value


def _print_product(index: int, product: Product) -> None:
    price = product.current_price()
    if product.price is not None and product.price.is_hidden:
        price_text = "price in cart"
    elif price is not None:
        price_text = f"{price:.2f} {product.price.currency}"
    else:
        price_text = "no price"

    stars = product.stars()
    rating_text = f"{stars:.1f}* ({product.rating.review_count})" if stars is not None else "unrated"

    flags = [name for name, on in (
        ("prime", product.is_prime),
        ("sponsored", product.is_sponsored),
        ("choice", product.is_amazon_choice),
    ) if on]
    flag_text = f" [{', '.join(flags)}]" if flags else ""

    print(f"  {index}. {product.asin}  {product.title}")
    print(f"     {price_text} | {rating_text}{flag_text}")


def _read_page(path: Path) -> str:
    html = path.read_text(encoding='utf-8')
    if not html.strip():
        raise PageParsingError("Empty document", context={"path": str(path)})
    return html


def run_search(args: argparse.Namespace, parser: MarketplaceParser, chain: FilterChain) -> int:
    html = _read_page(args.html_file)

    with log_execution_time(logger, f"search page extraction ({args.html_file})"):
        results = parser.parse_search_page(html, args.query, args.page)

    if not chain.is_empty():
        results.products = chain.apply(results.products)
        logger.info(f"Filters: {'; '.join(chain.descriptions())}")

    if args.output:
        save_results(results, args.output)
    if args.csv:
        export_products_to_csv(results.products, args.csv)

    print("\n" + "=" * 60)
    print(f"Query: {results.query} | Region: {results.region} | Page: {results.page}")
    if results.total_results is not None:
        print(f"Total results reported: {results.total_results:,}")
    print(f"Products: {results.count()} | More pages: {results.has_more}")
    print("=" * 60)
    for i, product in enumerate(results.products, 1):
        _print_product(i, product)

    return EXIT_OK


def run_product(args: argparse.Namespace, parser: MarketplaceParser) -> int:
    html = _read_page(args.html_file)

    with log_execution_time(logger, f"product page extraction ({args.html_file})"):
        product = parser.parse_product_page(html, _resolve_asin(args.asin))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(product.model_dump_json(indent=2), encoding='utf-8')
        logger.info(f"Saved product to {args.output}")

    print("\n" + "=" * 60)
    _print_product(1, product)
    if product.brand:
        print(f"     Brand: {product.brand}")
    print(f"     In stock: {product.in_stock}")
    discount = product.discount_percent()
    if discount:
        print(f"     Discount: {discount}%")
    print(f"     URL: {product.url}")
    print("=" * 60)

    return EXIT_OK


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 success, 1 error, 2 page blocked)
    """
    args = parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_config()

        set_package_log_level(args.log_level or config.log_level)

        region = Region.parse(args.region or config.region)
        parser = MarketplaceParser(region, config=config.extraction)

        if args.command == 'search':
            overrides = {
                'min_price': args.min_price,
                'max_price': args.max_price,
                'min_rating': args.min_rating,
            }
            filter_config = FilterConfig.model_validate({
                **config.filters.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
                'prime_only': args.prime_only or config.filters.prime_only,
                'no_sponsored': args.no_sponsored or config.filters.no_sponsored,
                'keywords': config.filters.keywords + args.keyword,
                'exclude_keywords': config.filters.exclude_keywords + args.exclude,
            })
            return run_search(args, parser, FilterChain.from_config(filter_config))

        return run_product(args, parser)

    except ContentBlockedError as e:
        logger.error(str(e))
        print(f"\n✗ Page blocked: {e.message}")
        return EXIT_BLOCKED

    except (AppException, ValidationError, OSError) as e:
        logger.error(f"Extraction failed: {e}")
        print(f"\n✗ Extraction failed: {e}")
        return EXIT_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
