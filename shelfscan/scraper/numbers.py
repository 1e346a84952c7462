"""Locale-aware parsing of prices, star ratings and review counts.

Every function here is pure: text in, number (or None) out. The caller
decides what an unparsable value means for its field.
"""

import math
import re
from typing import Optional

from .regions import Region

_PRICE_CHARS = re.compile(r"[^0-9.,\-]")
_NON_DIGITS = re.compile(r"\D")
_NUMBER_RUN = re.compile(r"\d[\d.,]*")


def parse_price_value(text: str, region: Region) -> Optional[float]:
    """Parse a price string using the region's decimal convention.

    Handles formats like:
    - "$1,234.56" (period decimal) -> 1234.56
    - "1.234,56 €" (comma decimal) -> 1234.56
    - "$10 - $20" -> 10.0 (first segment of a range)

    Args:
        text: Raw price text from the page
        region: Storefront whose separator convention applies

    Returns:
        Parsed value, or None if the text holds no number
    """
    cleaned = _PRICE_CHARS.sub("", text)
    if not cleaned:
        return None

    # Range upper bounds are read separately at card level
    if "-" in cleaned:
        cleaned = cleaned.split("-")[0]

    return _parse_single_price(cleaned, region)


def _parse_single_price(text: str, region: Region) -> Optional[float]:
    text = text.strip()
    if not text:
        return None

    if region.uses_comma_decimal:
        normalized = text.replace(".", "").replace(",", ".")
    else:
        normalized = text.replace(",", "")

    try:
        return float(normalized)
    except ValueError:
        return None


def parse_stars(text: str) -> Optional[float]:
    """Extract the star value from text like "4.5 out of 5 stars" or "4,5 von 5 Sternen"."""
    tokens = text.split()
    if not tokens:
        return None

    try:
        stars = float(tokens[0].replace(",", "."))
    except ValueError:
        return None
    return stars if math.isfinite(stars) else None


def parse_review_count(text: str) -> int:
    """Extract a review count from text like "1,234 ratings"; 0 when there are no digits."""
    digits = _NON_DIGITS.sub("", text)
    return int(digits) if digits else 0


def parse_total_results(text: str) -> Optional[int]:
    """Extract the total from a results banner like "1-48 of over 10,000 results"."""
    parts = text.split("of", 1)
    if len(parts) < 2:
        return None

    # Only the first number; the banner may also echo the query
    match = _NUMBER_RUN.search(parts[1])
    if match is None:
        return None
    return int(_NON_DIGITS.sub("", match.group()))
