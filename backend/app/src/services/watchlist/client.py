"""HTTP client for the product check endpoint."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError as ModelValidationError

from configs import settings
from src.models.product_models import ProductRecord

logger = logging.getLogger("watchlist.client")

GENERIC_FAILURE = "Ürün kontrol edilemedi"


class WatchlistError(RuntimeError):
    """Raised when a watchlist operation cannot be completed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ExtractionClient:
    """Call the extraction service and return parsed records."""

    def __init__(
        self,
        service_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.service_url = service_url or settings.EXTRACTION_SERVICE_URL
        self.timeout = timeout or settings.CLIENT_TIMEOUT_SECONDS

    def check(self, url: str) -> ProductRecord:
        """
        Ask the service to check a product page.

        Args:
            url (str): Product page URL.

        Returns:
            ProductRecord: The record returned by the service.

        Raises:
            WatchlistError: With the service's error message when it
            answers with a failure, or a generic one otherwise.
        """
        try:
            response = requests.post(
                self.service_url, json={"url": url}, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Extraction service unreachable: %s", exc)
            raise WatchlistError(GENERIC_FAILURE) from exc

        if not response.ok:
            raise WatchlistError(self._error_message(response))

        try:
            return ProductRecord.model_validate(response.json())
        except (ValueError, ModelValidationError) as exc:
            logger.error("Unexpected payload from extraction service: %s", exc)
            raise WatchlistError(GENERIC_FAILURE) from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return GENERIC_FAILURE
        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return GENERIC_FAILURE
