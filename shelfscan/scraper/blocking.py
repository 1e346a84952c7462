"""Detection of anti-automation challenges and service error pages.

Runs before any field extraction: selectors applied to a block page
either find nothing or find misleading content.
"""

from enum import Enum

from bs4 import BeautifulSoup

from shelfscan.utils.exceptions import ContentBlockedError
from shelfscan.utils.logger import get_logger

from .selectors import SelectorCatalog

logger = get_logger(__name__)


class BlockStatus(Enum):
    """Outcome of inspecting a document for block markers."""

    CLEAN = "clean"
    CAPTCHA = "captcha"
    SERVICE_ERROR = "service_error"


def detect_block(soup: BeautifulSoup, catalog: SelectorCatalog) -> BlockStatus:
    """Classify a parsed document. Captcha markers are checked first."""
    if catalog.blocks.captcha.matches(soup):
        return BlockStatus.CAPTCHA
    if catalog.blocks.service_error.matches(soup):
        return BlockStatus.SERVICE_ERROR
    return BlockStatus.CLEAN


def ensure_not_blocked(soup: BeautifulSoup, catalog: SelectorCatalog, **context) -> None:
    """Raise ContentBlockedError when the document is a block page.

    Args:
        soup: Parsed document
        catalog: Selector catalog holding the block fingerprints
        **context: Extra debugging context attached to the error

    Raises:
        ContentBlockedError: If a captcha or service error page is detected
    """
    status = detect_block(soup, catalog)

    if status is BlockStatus.CAPTCHA:
        logger.warning("CAPTCHA page detected")
        raise ContentBlockedError(
            "CAPTCHA detected. The marketplace is blocking automated requests. "
            "Slow down or use a different network path before retrying.",
            status=status.value,
            context=dict(context),
        )

    if status is BlockStatus.SERVICE_ERROR:
        logger.warning("Service error page detected")
        raise ContentBlockedError(
            "Marketplace error page detected (503). "
            "The service may be temporarily unavailable.",
            status=status.value,
            context=dict(context),
        )
