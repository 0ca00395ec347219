"""Pattern-based extraction used when a page has no JSON-LD Product.

Each field has an ordered chain of matchers. A matcher takes the raw
markup and returns a capture or None; the first capture wins.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional

from configs import settings
from src.models.product_models import ProductRecord

from .structured_data import NAME_PLACEHOLDER, PRICE_PLACEHOLDER
from .utils import Matcher, clean_text, first_match, with_currency


def regex(pattern: str, transform=None) -> Matcher:
    """Build a case-insensitive matcher returning the first group."""
    compiled = re.compile(pattern, re.IGNORECASE)

    def match(document: str) -> Optional[str]:
        found = compiled.search(document)
        if not found:
            return None
        value = found.group(1)
        if transform is not None:
            value = transform(value)
        return value or None

    return match


def strip_to_digits(value: str) -> str:
    """Keep digits and the comma decimal separator of displayed prices."""
    return re.sub(r"[^\d,]", "", value)


ORIGINAL_PRICE_DISPLAY = r'prc-org[^>]*>([^<]+)<'

NAME_MATCHERS: List[Matcher] = [
    regex(r'<h1[^>]*class="[^"]*pr-new-br[^"]*"[^>]*>([^<]+)</h1>', clean_text),
    regex(r"<h1[^>]*>([^<]+)</h1>", clean_text),
    regex(r"<title>([^<|]+)", clean_text),
]

PRICE_MATCHERS: List[Matcher] = [
    regex(r'"price":\s*"?(\d+(?:\.\d+)?)"?', strip_to_digits),
    regex(r"prc-dsc[^>]*>([^<]+)<", strip_to_digits),
    regex(r'"prc-org"[^>]*>([^<]+)<', strip_to_digits),
]

ORIGINAL_PRICE_MATCHERS: List[Matcher] = [
    regex(ORIGINAL_PRICE_DISPLAY, str.strip),
]

DISCOUNT_MATCHERS: List[Matcher] = [
    regex(r"prc-dsc[^>]*>%(\d+)"),
    regex(r'"discount(?:Ratio)?":\s*"?(\d+)"?'),
]

SELLER_MATCHERS: List[Matcher] = [
    regex(r'"seller":\s*{\s*"name":\s*"([^"]+)"', clean_text),
    regex(r"merchant-name[^>]*>([^<]+)<", clean_text),
    regex(r'"sellerName":\s*"([^"]+)"', clean_text),
]

IMAGE_MATCHERS: List[Matcher] = [
    regex(r'"image":\s*"([^"]+)"'),
    regex(r'og:image[^>]*content="([^"]+)"'),
]

RATING_MATCHERS: List[Matcher] = [
    regex(r'"ratingValue":\s*"?([^",}]+)"?', str.strip),
]

REVIEW_COUNT_MATCHERS: List[Matcher] = [
    regex(r'"reviewCount":\s*"?(\d+)"?'),
]

OUT_OF_STOCK_INDICATORS = (
    "sold-out",
    "tükendi",
    "stokta yok",
    "out-of-stock",
    '"inStock":false',
    '"availability":"OutOfStock"',
    "add-to-bs-disabled",
    "notify-me-btn",
)


def extract_name(document: str) -> str:
    return first_match(NAME_MATCHERS, document) or NAME_PLACEHOLDER


def extract_price(document: str) -> str:
    amount = first_match(PRICE_MATCHERS, document)
    if not amount:
        return PRICE_PLACEHOLDER
    return with_currency(amount, settings.CURRENCY_SUFFIX)


def extract_original_price(document: str) -> Optional[str]:
    return first_match(ORIGINAL_PRICE_MATCHERS, document)


def extract_discount(document: str) -> Optional[str]:
    ratio = first_match(DISCOUNT_MATCHERS, document)
    return f"%{ratio}" if ratio else None


def extract_in_stock(document: str) -> bool:
    """Any out-of-stock indicator anywhere in the page wins."""
    lowered = document.lower()
    return not any(
        indicator.lower() in lowered for indicator in OUT_OF_STOCK_INDICATORS
    )


def extract_seller(document: str) -> str:
    return first_match(SELLER_MATCHERS, document) or settings.PLATFORM_NAME


def extract_image(document: str) -> Optional[str]:
    return first_match(IMAGE_MATCHERS, document)


def extract_rating(document: str) -> Optional[str]:
    return first_match(RATING_MATCHERS, document)


def extract_review_count(document: str) -> Optional[str]:
    return first_match(REVIEW_COUNT_MATCHERS, document)


def record_from_markup(document: str, url: str, observed_at: datetime) -> ProductRecord:
    """Build a record field by field from the raw markup."""
    return ProductRecord(
        url=url,
        name=extract_name(document),
        price=extract_price(document),
        original_price=extract_original_price(document),
        discount_label=extract_discount(document),
        in_stock=extract_in_stock(document),
        seller=extract_seller(document),
        rating=extract_rating(document),
        review_count=extract_review_count(document),
        image_url=extract_image(document),
        observed_at=observed_at,
    )
