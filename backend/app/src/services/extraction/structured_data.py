"""Product extraction from embedded JSON-LD blocks."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, Iterator, Optional

from bs4 import BeautifulSoup

from configs import settings
from src.models.product_models import ProductRecord

from .utils import normalize_whitespace, with_currency

logger = logging.getLogger("extraction.structured_data")

NAME_PLACEHOLDER = "Ürün Adı Bulunamadı"
PRICE_PLACEHOLDER = "Fiyat Bulunamadı"
SELLER_PLACEHOLDER = "Satıcı Bulunamadı"

PRODUCT_TYPE = "Product"
IN_STOCK_MARKER = "InStock"


def _iter_blocks(document: str) -> Iterator[Any]:
    """Yield every JSON-LD block that parses; broken blocks are skipped."""
    soup = BeautifulSoup(document, "html.parser")
    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            yield json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Skipping malformed JSON-LD block: %s", exc)


def _is_product(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    entry_type = entry.get("@type")
    if isinstance(entry_type, list):
        return PRODUCT_TYPE in entry_type
    return entry_type == PRODUCT_TYPE


def find_product_entity(document: str) -> Optional[Dict[str, Any]]:
    """Return the first Product entity found in the page's JSON-LD blocks."""
    for block in _iter_blocks(document):
        entries = block if isinstance(block, list) else [block]
        for entry in entries:
            if _is_product(entry):
                return entry
    return None


def _first_offer(product: Dict[str, Any]) -> Dict[str, Any]:
    offers = product.get("offers") or {}
    if isinstance(offers, list):
        offers = offers[0] if offers else {}
    return offers if isinstance(offers, dict) else {}


def _format_amount(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _image_url(value: Any) -> Optional[str]:
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("url") or value.get("contentUrl")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def record_from_product(
    product: Dict[str, Any], url: str, observed_at: datetime
) -> ProductRecord:
    """Build a record from a JSON-LD Product entity.

    Only name, price, stock, seller and image are available on this path;
    discount, original price and rating fields stay empty.
    """
    offer = _first_offer(product)

    name = product.get("name")
    name = normalize_whitespace(name) if isinstance(name, str) else ""

    price = offer.get("price")
    price_text = _format_amount(price) if price else ""

    availability = offer.get("availability")
    in_stock = isinstance(availability, str) and IN_STOCK_MARKER in availability

    seller = offer.get("seller")
    seller_name = seller.get("name") if isinstance(seller, dict) else None

    return ProductRecord(
        url=url,
        name=name or NAME_PLACEHOLDER,
        price=with_currency(price_text, settings.CURRENCY_SUFFIX)
        if price_text
        else PRICE_PLACEHOLDER,
        in_stock=in_stock,
        seller=seller_name.strip()
        if isinstance(seller_name, str) and seller_name.strip()
        else SELLER_PLACEHOLDER,
        image_url=_image_url(product.get("image")),
        observed_at=observed_at,
    )
