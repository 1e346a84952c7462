"""
Custom exception hierarchy for shelfscan.

Provides a structured exception hierarchy for different error scenarios:
- AppException: Base for all application errors
- ConfigError: Configuration-related errors
- ScraperError: Page extraction errors
- UnknownRegionError: Unrecognised storefront region

Each exception includes:
- Descriptive message
- Optional error code for programmatic handling
- Optional context dictionary for debugging

Only whole-call failures are exceptions. A malformed result card, an
absent optional field or an unparsable number is reported as ``None`` by
the extractors and never raised.

Example:
    >>> from shelfscan.utils.exceptions import ContentBlockedError
    >>> raise ContentBlockedError("CAPTCHA detected", status="captcha")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# ============================================
# Base Exception
# ============================================


class AppException(Exception):
    """
    Base exception for all shelfscan errors.

    Attributes:
        message: Human-readable error description.
        code: Error code for programmatic handling. Falls back to the
              class's ``default_code``.
        context: Dictionary with debugging context.
    """

    default_code = "APP_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
        }


# ============================================
# Configuration Errors
# ============================================


class ConfigError(AppException):
    """
    Base exception for configuration-related errors.

    Raised when there are issues with:
    - Loading configuration files
    - Parsing YAML
    - Validating configuration values
    """

    default_code = "CONFIG_ERROR"


class ConfigFileNotFoundError(ConfigError):
    """
    Raised when a required configuration file is not found.

    Example:
        >>> raise ConfigFileNotFoundError(path="/path/to/config.yaml")
    """

    def __init__(
        self,
        message: str = "Configuration file not found",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="CONFIG_FILE_NOT_FOUND", context=context, **kwargs)


class ConfigurationError(ConfigError):
    """
    Raised when configuration is invalid or cannot be parsed.

    Example:
        >>> raise ConfigurationError(
        ...     "min_price must not exceed max_price",
        ...     context={"min_price": 50, "max_price": 10}
        ... )
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        **kwargs,
    ) -> None:
        super().__init__(message, code="CONFIG_INVALID", **kwargs)


# ============================================
# Scraper Errors
# ============================================


class ScraperError(AppException):
    """
    Base exception for page extraction errors.

    Raised when a whole extraction call cannot produce a result:
    - The page is an anti-automation challenge or a service error page
    - A product detail page lacks its title
    """

    default_code = "SCRAPER_ERROR"


class ContentBlockedError(ScraperError):
    """
    Raised when the document is a block page instead of real content.

    ``status`` tells the two cases apart: ``"captcha"`` means the source
    site challenged automated traffic (slow down or change network path),
    ``"service_error"`` means the site served its temporary error page.

    Example:
        >>> raise ContentBlockedError(
        ...     "CAPTCHA detected",
        ...     status="captcha",
        ...     context={"region": "de"}
        ... )
    """

    def __init__(
        self,
        message: str = "Content blocked by the source site",
        status: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if status:
            context["status"] = status
        self.status = status
        super().__init__(message, code="CONTENT_BLOCKED", context=context, **kwargs)


class MissingRequiredFieldError(ScraperError):
    """
    Raised when a field required for a valid record is absent.

    Example:
        >>> raise MissingRequiredFieldError(
        ...     "Could not find product title",
        ...     field="title",
        ...     context={"asin": "B08N5WRWNW"}
        ... )
    """

    def __init__(
        self,
        message: str = "Required field missing",
        field: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        self.field = field
        super().__init__(message, code="MISSING_FIELD", context=context, **kwargs)


class PageParsingError(ScraperError):
    """
    Raised when page content cannot be read at all.

    Example:
        >>> raise PageParsingError("Empty document", context={"path": "page.html"})
    """

    def __init__(
        self,
        message: str = "Failed to parse page content",
        **kwargs,
    ) -> None:
        super().__init__(message, code="PAGE_PARSE", **kwargs)


# ============================================
# Region Errors
# ============================================


class UnknownRegionError(AppException, ValueError):
    """
    Raised when a region name or code is not recognised.

    Subclasses ``ValueError`` so pydantic validators surface it as a
    normal validation failure.
    """

    def __init__(
        self,
        value: str,
        valid: Optional[list] = None,
        **kwargs,
    ) -> None:
        valid_codes = ", ".join(valid or [])
        message = f"Unknown region '{value}'. Valid regions: {valid_codes}"
        context = kwargs.pop("context", {})
        context["value"] = value
        super().__init__(message, code="UNKNOWN_REGION", context=context, **kwargs)
