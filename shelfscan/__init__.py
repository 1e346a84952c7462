"""shelfscan - structured listings from marketplace HTML.

Turns saved search result and product pages from localized marketplace
storefronts into typed product, price and rating records.
"""

__version__ = "0.1.0"
