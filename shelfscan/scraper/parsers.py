"""HTML extraction for marketplace search result and product pages.

Both page types go through the same steps:
1. Parse the document with lxml
2. Reject block pages (captcha / service error) before reading any field
3. Read each field through the selector catalog's ordered alternatives
4. Normalize numbers with the region's decimal convention

A single broken result card never aborts a search page: cards without an
identifier are skipped and unexpected card errors are logged and passed
over. Detail pages must at least have a title.
"""

from typing import Optional, Union

from bs4 import BeautifulSoup, Tag

from shelfscan.utils.config import ExtractionConfig
from shelfscan.utils.exceptions import MissingRequiredFieldError
from shelfscan.utils.logger import get_logger

from .blocking import ensure_not_blocked
from .models import Price, PriceRange, Product, Rating, SearchResults
from .numbers import parse_price_value, parse_review_count, parse_stars, parse_total_results
from .regions import Region
from .selectors import FieldRule, SelectorCatalog, default_catalog
from .utils import absolute_url, clean_brand, contains_any, normalize_asin, product_url

logger = get_logger(__name__)

_CHOICE_PHRASES = ("Amazon's Choice", "Amazon Choice")


class MarketplaceParser:
    """
    Parser for extracting structured listings from marketplace HTML.

    Holds only read-only state (region, catalog, config), so one instance
    can be shared between threads.

    Attributes:
        region: Storefront whose currency and number format apply.
        catalog: Selector catalog. Defaults to the shared catalog.
        config: Extraction phrase lists and placeholders.

    Example:
        >>> parser = MarketplaceParser(Region.DE)
        >>> results = parser.parse_search_page(html, "kopfhörer")
        >>> for product in results.products:
        ...     print(product.asin, product.current_price())
    """

    def __init__(
        self,
        region: Union[Region, str] = Region.US,
        catalog: Optional[SelectorCatalog] = None,
        config: Optional[ExtractionConfig] = None,
    ):
        self.region = Region.parse(region)
        self.catalog = catalog or default_catalog()
        self.config = config or ExtractionConfig()

    # ============================================
    # Search results
    # ============================================

    def parse_search_page(self, html: str, query: str, page: int = 1) -> SearchResults:
        """Extract all listings from a search results page.

        Args:
            html: Page HTML as returned by the transport layer
            query: Search text the page was fetched for
            page: Page number

        Returns:
            SearchResults with products in display order

        Raises:
            ContentBlockedError: If the page is a captcha or service error page
        """
        soup = BeautifulSoup(html, 'lxml')
        ensure_not_blocked(soup, self.catalog, region=self.region.value, query=query, page=page)

        selectors = self.catalog.search
        products = []

        for index, card in enumerate(selectors.result.all(soup)):
            try:
                product = self.parse_card(card)
            except Exception as e:
                logger.warning(f"Failed to parse result card {index}: {e}")
                continue

            if product is None:
                logger.debug(f"Skipping result card {index} without identifier")
                continue
            products.append(product)

        total_text = selectors.total_results.text(soup)
        total_results = parse_total_results(total_text) if total_text else None

        if not products and self.catalog.blocks.no_results.matches(soup):
            logger.debug(f"No results page for query '{query}'")

        results = SearchResults(
            query=query,
            region=self.region.value,
            total_results=total_results,
            products=products,
            page=page,
            has_more=selectors.next_page.matches(soup),
        )

        logger.debug(
            f"Parsed {results.count()} products from page {page} "
            f"(has_more: {results.has_more})"
        )
        return results

    def parse_card(self, card: Tag) -> Optional[Product]:
        """Extract one listing from a search result card.

        Returns:
            Product, or None when the card has no identifier (ad slots,
            layout fillers)
        """
        selectors = self.catalog.search

        asin = (card.get(selectors.asin_attr) or "").strip()
        if not asin:
            return None

        title = selectors.title.text(card) or self.config.unknown_title

        link = selectors.title_link.first(card)
        href = link.get("href") if link is not None else None
        url = absolute_url(href, self.region) if href else product_url(self.region, asin)

        image = selectors.image.first(card)
        image_url = image.get("src") if image is not None else None

        price = self._parse_card_price(card)
        rating = self._parse_rating(card, selectors.rating_stars, selectors.rating_count)

        brand_text = selectors.brand.text(card)
        brand = clean_brand(brand_text) if brand_text else None

        return Product(
            asin=asin,
            title=title,
            url=url,
            image_url=image_url or None,
            price=price,
            rating=rating,
            is_sponsored=self._is_sponsored(card),
            is_prime=selectors.prime_badge.matches(card),
            is_amazon_choice=self._is_amazon_choice(card),
            # Listed with a price is the best stock signal a card gives
            in_stock=price is not None,
            brand=brand or None,
        )

    def _parse_card_price(self, card: Tag) -> Optional[Price]:
        selectors = self.catalog.search
        currency = self.region.currency

        if selectors.price_hidden.matches(card):
            return Price.hidden(currency)

        current_text = selectors.price_current.text(card)
        if current_text is None:
            return None
        if contains_any(current_text, self.config.hidden_price_phrases):
            return Price.hidden(currency)

        current = parse_price_value(current_text, self.region)
        if current is None:
            return None

        original = self._parse_optional_price(card, selectors.price_original)

        return Price(
            current=current,
            original=original,
            currency=currency,
            range=self._detect_price_range(card, current),
        )

    def _detect_price_range(self, card: Tag, low: float) -> Optional[PriceRange]:
        """Range only when a range container exists and a second, higher price parses."""
        selectors = self.catalog.search
        if not selectors.price_range.matches(card):
            return None

        prices = selectors.price_current.all(card)
        if len(prices) < 2:
            return None

        high = parse_price_value(prices[1].get_text(), self.region)
        if high is not None and high > low:
            return PriceRange(min=low, max=high)
        return None

    def _is_sponsored(self, card: Tag) -> bool:
        if self.catalog.search.sponsored.matches(card):
            return True
        return "sponsored" in card.get_text().lower()

    def _is_amazon_choice(self, card: Tag) -> bool:
        if self.catalog.search.amazon_choice.matches(card):
            return True
        text = card.get_text()
        return any(phrase in text for phrase in _CHOICE_PHRASES)

    # ============================================
    # Product detail page
    # ============================================

    def parse_product_page(self, html: str, asin: str) -> Product:
        """Extract a single product from its detail page.

        Args:
            html: Page HTML as returned by the transport layer
            asin: Listing identifier the page was fetched for. When it is
                  not a valid identifier the page's own ASIN field is used.

        Returns:
            Product with all fields the page provides

        Raises:
            ContentBlockedError: If the page is a captcha or service error page
            MissingRequiredFieldError: If the page has no title or no usable identifier
        """
        soup = BeautifulSoup(html, 'lxml')
        ensure_not_blocked(soup, self.catalog, region=self.region.value, asin=asin)

        selectors = self.catalog.product

        title = selectors.title.text(soup)
        if not title:
            raise MissingRequiredFieldError(
                "Could not find product title",
                field="title",
                context={"asin": asin, "region": self.region.value},
            )

        listing_id = normalize_asin(asin) or self._page_asin(soup)
        if listing_id is None:
            raise MissingRequiredFieldError(
                f"No valid ASIN given or found on page: {asin!r}",
                field="asin",
                context={"region": self.region.value},
            )

        image = selectors.image.first(soup)
        image_url = None
        if image is not None:
            image_url = image.get("src") or image.get("data-old-hires")

        brand_text = selectors.brand.text(soup)
        brand = clean_brand(brand_text) if brand_text else None

        availability = selectors.availability.text(soup)
        in_stock = (
            availability is not None
            and not contains_any(availability, self.config.out_of_stock_phrases)
            and contains_any(availability, self.config.in_stock_phrases)
        )

        return Product(
            asin=listing_id,
            title=title,
            url=product_url(self.region, listing_id),
            image_url=image_url or None,
            price=self._parse_page_price(soup),
            rating=self._parse_rating(soup, selectors.rating, selectors.review_count),
            is_sponsored=False,
            is_prime=selectors.prime.matches(soup),
            is_amazon_choice=selectors.amazon_choice.matches(soup),
            in_stock=in_stock,
            brand=brand or None,
        )

    def _page_asin(self, soup: BeautifulSoup) -> Optional[str]:
        found = self.catalog.product.asin.first(soup)
        if found is None:
            return None
        value = found.get("value") if found.name == "input" else found.get_text()
        return normalize_asin(value)

    def _parse_page_price(self, soup: BeautifulSoup) -> Optional[Price]:
        selectors = self.catalog.product

        current_text = selectors.price.text(soup)
        if current_text is None:
            return None

        current = parse_price_value(current_text, self.region)
        if current is None:
            return None

        return Price(
            current=current,
            original=self._parse_optional_price(soup, selectors.price_original),
            currency=self.region.currency,
        )

    # ============================================
    # Shared field helpers
    # ============================================

    def _parse_optional_price(self, scope: Tag, rule: FieldRule) -> Optional[float]:
        text = rule.text(scope)
        if text is None:
            return None
        return parse_price_value(text, self.region)

    def _parse_rating(self, scope: Tag, stars_rule: FieldRule, count_rule: FieldRule) -> Optional[Rating]:
        """Rating needs a parsable star value; a missing count becomes 0."""
        stars_text = stars_rule.text(scope)
        if stars_text is None:
            return None

        stars = parse_stars(stars_text)
        if stars is None:
            return None

        count_text = count_rule.text(scope) or ""
        return Rating(stars=stars, review_count=parse_review_count(count_text))
