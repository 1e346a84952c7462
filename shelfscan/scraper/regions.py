"""
Storefront regions and their fixed locale data.

Each region maps to one marketplace domain, a currency code, the
Accept-Language header the transport layer should send, and the decimal
separator convention used when reading numbers from that storefront.
The table is built once at import time and never changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from shelfscan.utils.exceptions import UnknownRegionError


@dataclass(frozen=True)
class RegionInfo:
    """Fixed locale data for one storefront."""

    domain: str
    currency: str
    accept_language: str
    comma_decimal: bool


class Region(Enum):
    """Supported storefront regions."""

    US = "us"
    UK = "uk"
    DE = "de"
    FR = "fr"
    ES = "es"
    IT = "it"
    CA = "ca"
    AU = "au"
    JP = "jp"
    IN = "in"
    BR = "br"
    MX = "mx"
    NL = "nl"
    SE = "se"
    PL = "pl"

    def __str__(self) -> str:
        return self.value

    @property
    def info(self) -> RegionInfo:
        return REGION_TABLE[self]

    @property
    def domain(self) -> str:
        return self.info.domain

    @property
    def base_url(self) -> str:
        return f"https://www.{self.info.domain}"

    @property
    def currency(self) -> str:
        return self.info.currency

    @property
    def accept_language(self) -> str:
        return self.info.accept_language

    @property
    def uses_comma_decimal(self) -> bool:
        """True when the storefront writes ``1.234,56`` rather than ``1,234.56``."""
        return self.info.comma_decimal

    @classmethod
    def default(cls) -> "Region":
        return cls.US

    @classmethod
    def parse(cls, text: "str | Region") -> "Region":
        """Resolve a region from a code or country name, case-insensitively.

        Args:
            text: Region code ("de"), alias ("gb") or country name ("germany")

        Returns:
            Matching Region

        Raises:
            UnknownRegionError: If nothing matches
        """
        if isinstance(text, Region):
            return text

        key = text.strip().lower()
        region = _ALIASES.get(key)
        if region is None:
            raise UnknownRegionError(text, valid=[r.value for r in cls])
        return region


REGION_TABLE: Mapping[Region, RegionInfo] = MappingProxyType({
    Region.US: RegionInfo("amazon.com", "USD", "en-US,en;q=0.9", False),
    Region.UK: RegionInfo("amazon.co.uk", "GBP", "en-GB,en;q=0.9", False),
    Region.DE: RegionInfo("amazon.de", "EUR", "de-DE,de;q=0.9,en;q=0.8", True),
    Region.FR: RegionInfo("amazon.fr", "EUR", "fr-FR,fr;q=0.9,en;q=0.8", True),
    Region.ES: RegionInfo("amazon.es", "EUR", "es-ES,es;q=0.9,en;q=0.8", True),
    Region.IT: RegionInfo("amazon.it", "EUR", "it-IT,it;q=0.9,en;q=0.8", True),
    Region.CA: RegionInfo("amazon.ca", "CAD", "en-US,en;q=0.9", False),
    Region.AU: RegionInfo("amazon.com.au", "AUD", "en-US,en;q=0.9", False),
    Region.JP: RegionInfo("amazon.co.jp", "JPY", "ja-JP,ja;q=0.9,en;q=0.8", False),
    Region.IN: RegionInfo("amazon.in", "INR", "en-IN,en;q=0.9,hi;q=0.8", False),
    Region.BR: RegionInfo("amazon.com.br", "BRL", "pt-BR,pt;q=0.9,en;q=0.8", True),
    Region.MX: RegionInfo("amazon.com.mx", "MXN", "es-ES,es;q=0.9,en;q=0.8", False),
    Region.NL: RegionInfo("amazon.nl", "EUR", "nl-NL,nl;q=0.9,en;q=0.8", True),
    Region.SE: RegionInfo("amazon.se", "SEK", "sv-SE,sv;q=0.9,en;q=0.8", True),
    Region.PL: RegionInfo("amazon.pl", "PLN", "pl-PL,pl;q=0.9,en;q=0.8", True),
})

_ALIASES: Mapping[str, Region] = MappingProxyType({
    **{region.value: region for region in Region},
    "usa": Region.US,
    "united states": Region.US,
    "gb": Region.UK,
    "united kingdom": Region.UK,
    "germany": Region.DE,
    "france": Region.FR,
    "spain": Region.ES,
    "italy": Region.IT,
    "canada": Region.CA,
    "australia": Region.AU,
    "japan": Region.JP,
    "india": Region.IN,
    "brazil": Region.BR,
    "mexico": Region.MX,
    "netherlands": Region.NL,
    "sweden": Region.SE,
    "poland": Region.PL,
})
