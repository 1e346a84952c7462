"""Helper utilities for extraction."""

import re
from typing import Optional
from urllib.parse import urlparse

from .regions import Region

_ASIN_PATTERN = re.compile(r"^[A-Z0-9]{10}$")
_ASIN_IN_PATH = re.compile(r"/(?:dp|gp/product)/([A-Za-z0-9]{10})(?:[/?]|$)")


def normalize_asin(value: Optional[str]) -> Optional[str]:
    """Return the upper-cased identifier if it is 10 alphanumerics, else None.

    Args:
        value: Candidate identifier, possibly padded with whitespace

    Returns:
        Normalized identifier or None
    """
    if not value:
        return None

    candidate = value.strip().upper()
    if _ASIN_PATTERN.match(candidate):
        return candidate
    return None


def extract_asin_from_url(url: str) -> str:
    """Extract the listing identifier from a product URL.

    Handles URL formats like:
    - https://www.amazon.com/dp/B08N5WRWNW
    - https://www.amazon.de/Some-Title/dp/B08N5WRWNW/ref=sr_1_1
    - /gp/product/B08N5WRWNW?psc=1

    Args:
        url: Product URL, absolute or relative

    Returns:
        Identifier as string

    Raises:
        ValueError: If no identifier can be found
    """
    match = _ASIN_IN_PATH.search(urlparse(url).path + "/")
    if not match:
        raise ValueError(f"Could not extract ASIN from URL: {url}")
    return match.group(1).upper()


def product_url(region: Region, asin: str) -> str:
    """Canonical detail page URL for a listing."""
    return f"{region.base_url}/dp/{asin}"


def absolute_url(href: str, region: Region) -> str:
    """Resolve a possibly relative link against the region's storefront."""
    if href.startswith("http"):
        return href
    if href.startswith("//"):
        return f"https:{href}"
    if not href.startswith("/"):
        href = "/" + href
    return f"{region.base_url}{href}"


def clean_brand(text: str) -> str:
    """Strip marketing wrappers from a brand line.

    "by Logitech" -> "Logitech"
    "Brand: Logitech" -> "Logitech"
    "Visit the Logitech Store" -> "Logitech"
    """
    brand = text.strip()
    for prefix in ("by ", "Brand:", "Visit the"):
        if brand.startswith(prefix):
            brand = brand[len(prefix):].strip()
    if brand.endswith("Store"):
        brand = brand[: -len("Store")].strip()
    return brand


def contains_any(text: str, phrases) -> bool:
    """Case-insensitive check whether any phrase occurs in text."""
    lowered = text.lower()
    return any(phrase.lower() in lowered for phrase in phrases)
