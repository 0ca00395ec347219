"""High-level service that checks a single product page."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import requests

from configs import settings
from src.models.product_models import ProductRecord

from .errors import ExtractionError, FetchError, ProductCheckError, ValidationError
from .patterns import record_from_markup
from .structured_data import find_product_entity, record_from_product
from .utils import DEFAULT_HEADERS, canonical_url, is_target_url

logger = logging.getLogger("extraction.service")


class ProductExtractionService:
    """Fetch a product page and turn it into a ProductRecord.

    The service keeps no state between calls.
    """

    def __init__(
        self,
        timeout: float | None = None,
        domain: str | None = None,
    ) -> None:
        self.timeout = timeout or settings.FETCH_TIMEOUT_SECONDS
        self.domain = domain or settings.TARGET_DOMAIN

    def check(self, url: str | None) -> ProductRecord:
        """Validate, fetch and extract. Raises a ProductCheckError subclass."""
        clean_url = self.validate(url)
        document = self.fetch(clean_url)
        try:
            return self.extract(document, clean_url)
        except ProductCheckError:
            raise
        except Exception as exc:
            logger.exception("Unexpected failure while parsing %s", clean_url)
            raise ExtractionError() from exc

    def validate(self, url: str | None) -> str:
        """Return the canonical URL or raise ValidationError."""
        if not url or not is_target_url(url, self.domain):
            logger.info("Rejected URL outside %s: %r", self.domain, url)
            raise ValidationError()
        return canonical_url(url)

    def fetch(self, url: str) -> str:
        """Download the page with browser-like headers."""
        try:
            response = requests.get(url, headers=DEFAULT_HEADERS, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise FetchError() from exc

        if not response.ok:
            logger.warning("HTTP %s while fetching %s", response.status_code, url)
            raise FetchError()

        # requests assumes ISO-8859-1 for text/* without a charset
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = response.apparent_encoding
        return response.text

    def extract(self, document: str, url: str) -> ProductRecord:
        """Prefer the JSON-LD Product entity, fall back to markup patterns."""
        observed_at = datetime.now(timezone.utc)
        product = find_product_entity(document)
        if product is not None:
            logger.debug("Using JSON-LD Product entity for %s", url)
            return record_from_product(product, url, observed_at)

        logger.debug("No JSON-LD Product for %s, using markup patterns", url)
        return record_from_markup(document, url, observed_at)


def get_extraction_service() -> ProductExtractionService:
    """Dependency for FastAPI."""
    return ProductExtractionService()
