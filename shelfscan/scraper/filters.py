"""
Composable product filters.

Filters never reorder: ``FilterChain.apply`` keeps the extraction order,
which is the marketplace's relevance order.

Products missing the data a filter looks at (no visible price, no
rating) pass that filter rather than being dropped.

Example:
    >>> chain = FilterChain.from_config(FilterConfig(min_rating=4.5, no_sponsored=True))
    >>> kept = chain.apply(results.products)
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

from shelfscan.utils.config import FilterConfig

from .models import Product


class ProductFilter(Protocol):
    """Interface every filter implements."""

    def matches(self, product: Product) -> bool: ...

    def description(self) -> str: ...


class PriceFilter:
    """Keep products whose visible price lies within [min, max]."""

    def __init__(self, min_price: Optional[float] = None, max_price: Optional[float] = None):
        self.min_price = min_price
        self.max_price = max_price

    def matches(self, product: Product) -> bool:
        price = product.current_price()
        if price is None:
            return True
        if self.min_price is not None and price < self.min_price:
            return False
        if self.max_price is not None and price > self.max_price:
            return False
        return True

    def description(self) -> str:
        if self.min_price is not None and self.max_price is not None:
            return f"Price: {self.min_price:.2f} - {self.max_price:.2f}"
        if self.min_price is not None:
            return f"Price: >= {self.min_price:.2f}"
        if self.max_price is not None:
            return f"Price: <= {self.max_price:.2f}"
        return "Price: any"


class RatingFilter:
    """Keep products rated at least ``min_stars``."""

    def __init__(self, min_stars: float):
        self.min_stars = min(max(min_stars, 0.0), 5.0)

    def matches(self, product: Product) -> bool:
        stars = product.stars()
        if stars is None:
            return True
        return stars >= self.min_stars

    def description(self) -> str:
        return f"Rating: >= {self.min_stars:.1f} stars"


class PrimeFilter:
    """Keep only Prime-eligible products."""

    def matches(self, product: Product) -> bool:
        return product.is_prime

    def description(self) -> str:
        return "Prime only"


class SponsoredFilter:
    """Drop sponsored listings."""

    def matches(self, product: Product) -> bool:
        return not product.is_sponsored

    def description(self) -> str:
        return "Exclude sponsored"


class KeywordFilter:
    """Case-insensitive title keywords: all required ones present, no excluded one present."""

    def __init__(self, required: Iterable[str] = (), excluded: Iterable[str] = ()):
        self.required = [k.lower() for k in required]
        self.excluded = [k.lower() for k in excluded]

    def matches(self, product: Product) -> bool:
        title = product.title.lower()
        if any(keyword not in title for keyword in self.required):
            return False
        if any(keyword in title for keyword in self.excluded):
            return False
        return True

    def description(self) -> str:
        parts = []
        if self.required:
            parts.append(f"Must contain: {', '.join(self.required)}")
        if self.excluded:
            parts.append(f"Must not contain: {', '.join(self.excluded)}")
        return "; ".join(parts) if parts else "Keywords: any"


class FilterChain:
    """A list of filters that must all pass."""

    def __init__(self, filters: Optional[Iterable[ProductFilter]] = None):
        self.filters: List[ProductFilter] = list(filters or [])

    def add(self, product_filter: ProductFilter) -> "FilterChain":
        self.filters.append(product_filter)
        return self

    def matches(self, product: Product) -> bool:
        return all(f.matches(product) for f in self.filters)

    def apply(self, products: Iterable[Product]) -> List[Product]:
        """Return the products passing every filter, in their original order."""
        return [p for p in products if self.matches(p)]

    def descriptions(self) -> List[str]:
        return [f.description() for f in self.filters]

    def is_empty(self) -> bool:
        return not self.filters

    def __len__(self) -> int:
        return len(self.filters)

    @classmethod
    def from_config(cls, config: FilterConfig) -> "FilterChain":
        """Build a chain holding only the filters the config enables."""
        chain = cls()
        if config.min_price is not None or config.max_price is not None:
            chain.add(PriceFilter(config.min_price, config.max_price))
        if config.min_rating is not None:
            chain.add(RatingFilter(config.min_rating))
        if config.prime_only:
            chain.add(PrimeFilter())
        if config.no_sponsored:
            chain.add(SponsoredFilter())
        if config.keywords:
            chain.add(KeywordFilter(required=config.keywords))
        if config.exclude_keywords:
            chain.add(KeywordFilter(excluded=config.exclude_keywords))
        return chain
