"""
CSS selector catalog for marketplace search and product pages.

The source site renders the same field with different markup depending
on layout experiments, so each logical field carries an ordered list of
alternative selectors. Alternatives are tried in order and the first one
that matches anything wins; later alternatives are only consulted when
every earlier one found nothing. Structural and attribute selectors come
before bare class-name selectors because class names churn most.

Text matching uses soupsieve's ``:-soup-contains()`` pseudo-class.

Update process: when extraction starts returning empty fields, save the
page HTML, add the new markup as an alternative, and add a fixture test.

Example:
    >>> catalog = default_catalog()
    >>> card = soup.select_one(catalog.search.result.alternatives[0])
    >>> title = catalog.search.title.first(card)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Tuple

from bs4 import Tag


@dataclass(frozen=True)
class FieldRule:
    """
    Ordered alternative selectors for one logical field.

    Attributes:
        name: Field name, used in log messages.
        alternatives: CSS selectors, most reliable first.
    """

    name: str
    alternatives: Tuple[str, ...]

    def first(self, scope: Tag) -> Optional[Tag]:
        """Return the first element of the first alternative that matches."""
        for selector in self.alternatives:
            found = scope.select_one(selector)
            if found is not None:
                return found
        return None

    def all(self, scope: Tag) -> List[Tag]:
        """Return every element of the first alternative that matches."""
        for selector in self.alternatives:
            found = scope.select(selector)
            if found:
                return list(found)
        return []

    def matches(self, scope: Tag) -> bool:
        return self.first(scope) is not None

    def text(self, scope: Tag) -> Optional[str]:
        """Whitespace-trimmed text of the first match, or None."""
        found = self.first(scope)
        if found is None:
            return None
        return found.get_text().strip()


def _rule(name: str, *alternatives: str) -> FieldRule:
    return FieldRule(name=name, alternatives=tuple(alternatives))


# ============================================
# Search results page
# ============================================


@dataclass(frozen=True)
class SearchSelectors:
    """Selectors scoped to a search results page or a single result card."""

    # Attribute on the card root holding the listing identifier
    asin_attr: str = "data-asin"

    result: FieldRule = _rule(
        "result",
        "[data-component-type='s-search-result']",
    )
    title: FieldRule = _rule(
        "title",
        "h2 a span",
        "h2 span.a-text-normal",
        ".a-size-medium.a-text-normal",
        ".a-size-base-plus.a-text-normal",
    )
    title_link: FieldRule = _rule(
        "title_link",
        "h2 a.a-link-normal",
        "h2 a.s-link-style",
        ".a-link-normal.s-underline-text",
    )
    image: FieldRule = _rule(
        "image",
        "img.s-image",
        ".s-product-image-container img",
    )
    price_current: FieldRule = _rule(
        "price_current",
        ".a-price:not([data-a-strike]) .a-offscreen",
        ".a-price .a-offscreen",
    )
    price_original: FieldRule = _rule(
        "price_original",
        ".a-price[data-a-strike] .a-offscreen",
        ".a-text-price .a-offscreen",
        "span[data-a-strike='true'] .a-offscreen",
    )
    price_range: FieldRule = _rule(
        "price_range",
        ".a-price-range",
        ".a-price + .a-price",
    )
    price_hidden: FieldRule = _rule(
        "price_hidden",
        ".a-color-base:-soup-contains('See price')",
        ".a-button-text:-soup-contains('See price')",
    )
    rating_stars: FieldRule = _rule(
        "rating_stars",
        "i.a-icon-star-small span.a-icon-alt",
        "i.a-icon-star span.a-icon-alt",
        "span.a-icon-alt",
    )
    rating_count: FieldRule = _rule(
        "rating_count",
        "span.a-size-base.s-underline-text",
        "a[href*='customerReviews'] span",
        ".a-size-base.puis-light-weight-text",
    )
    prime_badge: FieldRule = _rule(
        "prime_badge",
        "[data-component-type='s-prime-badge']",
        "i.a-icon-prime",
        ".a-icon-prime",
    )
    sponsored: FieldRule = _rule(
        "sponsored",
        ".puis-label-popover-default",
        ".s-label-popover-default",
        "span:-soup-contains('Sponsored')",
    )
    amazon_choice: FieldRule = _rule(
        "amazon_choice",
        "[data-component-type='s-merchandised-badge']",
        ".a-badge-text:-soup-contains('Choice')",
    )
    brand: FieldRule = _rule(
        "brand",
        "h5.s-line-clamp-1 span",
        ".a-row.a-size-base.a-color-secondary span",
        ".a-size-base-plus.a-color-base",
    )
    total_results: FieldRule = _rule(
        "total_results",
        "[data-component-type='s-result-info-bar'] h1 span:first-child",
        ".a-section.a-spacing-small span:first-child",
        ".sg-col-inner .a-section span",
    )
    next_page: FieldRule = _rule(
        "next_page",
        "a.s-pagination-next",
        ".s-pagination-item.s-pagination-next",
    )


# ============================================
# Product detail page
# ============================================


@dataclass(frozen=True)
class ProductSelectors:
    """Selectors scoped to a whole product detail page."""

    title: FieldRule = _rule(
        "title",
        "#productTitle",
        "#title span",
        ".product-title-word-break",
    )
    price: FieldRule = _rule(
        "price",
        "#corePrice_feature_div .a-price .a-offscreen",
        "#priceblock_ourprice",
        "#priceblock_dealprice",
        ".a-price .a-offscreen",
    )
    price_original: FieldRule = _rule(
        "price_original",
        "#corePrice_feature_div .a-text-price .a-offscreen",
        "#priceblock_saleprice",
        ".a-text-price .a-offscreen",
    )
    image: FieldRule = _rule(
        "image",
        "#landingImage",
        "#imgTagWrapperId img",
        "#main-image",
    )
    rating: FieldRule = _rule(
        "rating",
        "#acrPopover span.a-icon-alt",
        ".a-icon-star span.a-icon-alt",
    )
    review_count: FieldRule = _rule(
        "review_count",
        "#acrCustomerReviewText",
        "#acrCustomerReviewLink span",
    )
    brand: FieldRule = _rule(
        "brand",
        "#bylineInfo",
        ".po-brand .po-break-word",
    )
    availability: FieldRule = _rule(
        "availability",
        "#availability span",
        "#outOfStock span",
        ".a-color-success",
    )
    prime: FieldRule = _rule(
        "prime",
        "#prime-badge",
        "i.a-icon-prime",
        ".a-icon-prime",
    )
    amazon_choice: FieldRule = _rule(
        "amazon_choice",
        "#acBadge_feature_div .a-badge-text",
        ".ac-badge-wrapper",
    )
    asin: FieldRule = _rule(
        "asin",
        "input[name='ASIN']",
        "th:-soup-contains('ASIN') + td",
    )


# ============================================
# Block and error pages
# ============================================


@dataclass(frozen=True)
class BlockSelectors:
    """Fingerprints of pages served instead of real content."""

    captcha: FieldRule = _rule(
        "captcha",
        "form[action*='validateCaptcha']",
        "img[src*='captcha']",
        ".a-box-inner h4:-soup-contains('robot')",
    )
    service_error: FieldRule = _rule(
        "service_error",
        "img[alt*='dog']",
        ".a-box-inner a[href='/ref=cs_503_link']",
    )
    no_results: FieldRule = _rule(
        "no_results",
        ".a-section.a-text-center.s-no-search-results",
        ".s-no-search-results",
        "span:-soup-contains('No results for')",
    )


@dataclass(frozen=True)
class SelectorCatalog:
    """All selector groups, shared read-only across extraction calls."""

    search: SearchSelectors = field(default_factory=SearchSelectors)
    product: ProductSelectors = field(default_factory=ProductSelectors)
    blocks: BlockSelectors = field(default_factory=BlockSelectors)

    def rules(self) -> List[FieldRule]:
        """Every rule in the catalog, for validation and diagnostics."""
        collected = []
        for group in (self.search, self.product, self.blocks):
            for value in vars(group).values():
                if isinstance(value, FieldRule):
                    collected.append(value)
        return collected


@lru_cache(maxsize=None)
def default_catalog() -> SelectorCatalog:
    """Build the default catalog once and return the same instance afterwards."""
    return SelectorCatalog()
