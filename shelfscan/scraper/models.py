"""Pydantic data models for extracted marketplace listings.

Records are built once per extraction call and handed to the caller.
Optional fields stay ``None`` when the page did not provide them, so a
missing price is never confused with a price of zero.
"""

import math
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PriceRange(BaseModel):
    """Price span for variable-priced listings ("$X - $Y" or "from $X")."""

    min: float = Field(..., description="Lowest price")
    max: Optional[float] = Field(default=None, description="Highest price, None for 'from $X' style")


class Price(BaseModel):
    """Model representing a listing's price information."""

    current: float = Field(..., description="Current/sale price")
    original: Optional[float] = Field(default=None, description="Price before discount")
    currency: str = Field(..., description="Currency code (USD, EUR, ...)")
    range: Optional[PriceRange] = Field(default=None, description="Range for variable pricing")
    is_hidden: bool = Field(default=False, description="True for 'see price in cart' listings")

    @classmethod
    def simple(cls, current: float, currency: str) -> "Price":
        return cls(current=current, currency=currency)

    @classmethod
    def with_discount(cls, current: float, original: float, currency: str) -> "Price":
        return cls(current=current, original=original, currency=currency)

    @classmethod
    def hidden(cls, currency: str) -> "Price":
        """Price the seller only reveals in the cart; ``current`` is meaningless."""
        return cls(current=0.0, currency=currency, is_hidden=True)

    @classmethod
    def with_range(cls, min: float, max: Optional[float], currency: str) -> "Price":
        return cls(current=min, currency=currency, range=PriceRange(min=min, max=max))


class Rating(BaseModel):
    """Star rating and review count."""

    stars: float = Field(..., description="Star rating, clamped to 0.0-5.0")
    review_count: int = Field(default=0, ge=0, description="Number of reviews")

    @field_validator('stars')
    @classmethod
    def clamp_stars(cls, v: float) -> float:
        """Clamp star value into the 0-5 scale."""
        return min(max(v, 0.0), 5.0)


class Product(BaseModel):
    """Model representing a single marketplace listing."""

    asin: str = Field(..., description="Listing identifier (ASIN)")
    title: str = Field(..., description="Product title")
    url: str = Field(..., description="Canonical product URL")
    image_url: Optional[str] = Field(default=None, description="Main image URL")
    price: Optional[Price] = Field(default=None, description="Price information")
    rating: Optional[Rating] = Field(default=None, description="Rating information")
    is_sponsored: bool = Field(default=False, description="Paid placement")
    is_prime: bool = Field(default=False, description="Prime eligible")
    is_amazon_choice: bool = Field(default=False, description="Carries the editorial 'Choice' badge")
    in_stock: bool = Field(default=False, description="Currently purchasable")
    brand: Optional[str] = Field(default=None, description="Brand name")

    def current_price(self) -> Optional[float]:
        """Visible current price, or None when absent or hidden."""
        if self.price is None or self.price.is_hidden:
            return None
        return self.price.current

    def stars(self) -> Optional[float]:
        return self.rating.stars if self.rating is not None else None

    def discount_percent(self) -> Optional[int]:
        """Discount against the original price, rounded and capped at 99.

        Returns None without an original price. No check is made that the
        original exceeds the current price.
        """
        if self.price is None or self.price.original is None:
            return None

        original = self.price.original
        if original <= 0:
            return 0

        # Halves round up, not to even
        discount = math.floor((original - self.price.current) / original * 100.0 + 0.5)
        return min(max(discount, 0), 99)


class SearchResults(BaseModel):
    """One page of search results with its metadata."""

    query: str = Field(..., description="Search query")
    region: str = Field(..., description="Region code searched")
    total_results: Optional[int] = Field(default=None, ge=0, description="Total reported by the page")
    products: list[Product] = Field(default_factory=list, description="Listings in display order")
    page: int = Field(default=1, ge=1, description="Page number")
    has_more: bool = Field(default=False, description="Whether a next page exists")

    def count(self) -> int:
        return len(self.products)

    def is_empty(self) -> bool:
        return not self.products
