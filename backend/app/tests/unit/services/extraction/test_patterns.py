"""Test fallback pattern extraction."""

from datetime import datetime, timezone

import pytest

from src.services.extraction import patterns
from src.services.extraction.structured_data import NAME_PLACEHOLDER, PRICE_PLACEHOLDER
from src.services.extraction.utils import first_match

URL = "https://www.trendyol.com/acme/kettle-p-123"
OBSERVED_AT = datetime(2025, 6, 4, 20, 48, 42, tzinfo=timezone.utc)

PRODUCT_PAGE = """
<html>
<head>
  <title>ACME Su Isıtıcı | Trendyol</title>
  <meta property="og:image" content="https://cdn.example.com/og.jpg">
</head>
<body>
  <h1 class="pr-new-br"> ACME Su Isıtıcı 1.7L </h1>
  <div class="product-price">
    <span class="prc-org">1.499,90 TL</span>
    <span class="prc-dsc">1.299,90 TL</span>
  </div>
  <a class="merchant-name">ACME Store</a>
  <script>window.__STATE__ = {"ratingValue": 4.6, "reviewCount": "128", "discountRatio": 13};</script>
</body>
</html>
"""


def test_first_match_returns_first_present_capture() -> None:
    calls = []

    def none(document):
        calls.append("none")
        return None

    def hit(document):
        calls.append("hit")
        return "value"

    def never(document):
        calls.append("never")
        return "other"

    assert first_match([none, hit, never], "doc") == "value"
    assert calls == ["none", "hit"]


def test_first_match_skips_empty_captures() -> None:
    assert first_match([lambda d: "", lambda d: "x"], "doc") == "x"
    assert first_match([lambda d: None], "doc") is None


class TestName:
    """Name chain: brand heading, any heading, title."""

    def test_brand_heading_wins(self) -> None:
        document = '<h1>Generic</h1><h1 class="pr-new-br">Brand Name</h1>'
        assert patterns.extract_name(document) == "Brand Name"

    def test_generic_heading(self) -> None:
        assert patterns.extract_name("<h1 id='x'>  Kettle\n Pro </h1>") == "Kettle Pro"

    def test_title_up_to_separator(self) -> None:
        document = "<title>Kettle &amp; Cup | Trendyol</title>"
        assert patterns.extract_name(document) == "Kettle & Cup"

    def test_placeholder(self) -> None:
        assert patterns.extract_name("<p>nothing</p>") == NAME_PLACEHOLDER


class TestPrice:
    """Price chain: quoted field, discounted display, original display."""

    def test_quoted_price_field_wins_over_display(self) -> None:
        document = '<span class="prc-dsc">1.299,90 TL</span> {"price": "1299"}'
        assert patterns.extract_price(document) == "1299 TL"

    @pytest.mark.parametrize(
        "document",
        ['{"price": "199.90"}', '{"price": 199.90}'],
    )
    def test_quoted_price_field_is_stripped_like_displays(self, document) -> None:
        assert patterns.extract_price(document) == "19990 TL"

    def test_discounted_display_is_stripped(self) -> None:
        document = '<span class="prc-dsc">1.299,90 TL</span>'
        assert patterns.extract_price(document) == "1299,90 TL"

    def test_original_display_when_no_discount(self) -> None:
        document = '<span class="prc-org">899,00 TL</span>'
        assert patterns.extract_price(document) == "899,00 TL"

    def test_placeholder(self) -> None:
        assert patterns.extract_price("<p>nothing</p>") == PRICE_PLACEHOLDER


class TestOptionalFields:
    """Original price, discount, seller, image, rating, review count."""

    def test_original_price(self) -> None:
        assert patterns.extract_original_price(PRODUCT_PAGE) == "1.499,90 TL"
        assert patterns.extract_original_price("<p></p>") is None

    def test_discount_next_to_discounted_price(self) -> None:
        document = '<span class="prc-dsc">%25</span>{"discountRatio": 10}'
        assert patterns.extract_discount(document) == "%25"

    def test_discount_ratio_field(self) -> None:
        assert patterns.extract_discount('{"discount": "15"}') == "%15"
        assert patterns.extract_discount("<p></p>") is None

    def test_seller_chain_and_default(self) -> None:
        structured = '{"seller": {"name": "Json Seller"}} <a class="merchant-name">X</a>'
        assert patterns.extract_seller(structured) == "Json Seller"
        assert patterns.extract_seller('{"sellerName": "Alt Seller"}') == "Alt Seller"
        assert patterns.extract_seller("<p></p>") == "Trendyol"

    def test_image_chain(self) -> None:
        document = '{"image": "https://cdn.example.com/a.jpg"}' + PRODUCT_PAGE
        assert patterns.extract_image(document) == "https://cdn.example.com/a.jpg"
        assert patterns.extract_image(PRODUCT_PAGE) == "https://cdn.example.com/og.jpg"

    def test_rating_and_reviews(self) -> None:
        assert patterns.extract_rating(PRODUCT_PAGE) == "4.6"
        assert patterns.extract_review_count(PRODUCT_PAGE) == "128"
        assert patterns.extract_rating("<p></p>") is None
        assert patterns.extract_review_count("<p></p>") is None


class TestStock:
    """Out-of-stock detection is a substring union."""

    def test_in_stock_without_indicators(self) -> None:
        assert patterns.extract_in_stock(PRODUCT_PAGE) is True

    @pytest.mark.parametrize(
        "indicator",
        [
            "sold-out",
            "Ürün Tükendi",
            "Stokta Yok",
            "out-of-stock",
            '"inStock":false',
            '"availability":"OutOfStock"',
            "add-to-bs-disabled",
            "notify-me-btn",
        ],
    )
    def test_any_indicator_forces_out_of_stock(self, indicator) -> None:
        assert patterns.extract_in_stock(PRODUCT_PAGE + indicator) is False

    def test_indicator_outside_stock_markup(self) -> None:
        document = PRODUCT_PAGE.replace(
            "</body>", "<footer>Bazı ürünler stokta yok olabilir</footer></body>"
        )
        assert patterns.extract_in_stock(document) is False


def test_record_from_markup_assembles_all_fields() -> None:
    record = patterns.record_from_markup(PRODUCT_PAGE, URL, OBSERVED_AT)

    assert record.url == URL
    assert record.name == "ACME Su Isıtıcı 1.7L"
    assert record.price == "1299,90 TL"
    assert record.original_price == "1.499,90 TL"
    assert record.discount_label == "%13"
    assert record.in_stock is True
    assert record.seller == "ACME Store"
    assert record.rating == "4.6"
    assert record.review_count == "128"
    assert record.image_url == "https://cdn.example.com/og.jpg"
    assert record.observed_at == OBSERVED_AT


def test_record_from_empty_markup_keeps_name_and_price() -> None:
    record = patterns.record_from_markup("", URL, OBSERVED_AT)

    assert record.name == NAME_PLACEHOLDER
    assert record.price == PRICE_PLACEHOLDER
    assert record.seller == "Trendyol"
    assert record.in_stock is True
