"""Failures raised while checking a product page."""

from __future__ import annotations


class ProductCheckError(RuntimeError):
    """Base error carrying the HTTP status and the user-facing message."""

    status_code = 500
    default_message = "Ürün bilgileri alınırken bir hata oluştu"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ProductCheckError):
    """The URL is missing or does not belong to the target marketplace."""

    status_code = 400
    default_message = "Geçerli bir Trendyol linki giriniz"


class FetchError(ProductCheckError):
    """The product page could not be retrieved."""

    status_code = 502
    default_message = "Ürün sayfasına erişilemedi"


class ExtractionError(ProductCheckError):
    """Unexpected failure while parsing the product page."""

    status_code = 500
