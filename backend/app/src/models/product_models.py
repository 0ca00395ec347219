"""Request and response models for the product check endpoint."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckStockRequest(BaseModel):
    """Body of a product check request."""

    url: Optional[str] = Field(
        default=None, description="Product page URL on the target marketplace."
    )


class ProductRecord(BaseModel):
    """Normalized product attributes extracted from a product page."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., description="Canonical product URL, query stripped.")
    name: str = Field(..., description="Product name or a placeholder.")
    price: str = Field(..., description="Price with currency suffix or a placeholder.")
    original_price: Optional[str] = Field(
        default=None,
        alias="originalPrice",
        description="Price before discount, when displayed.",
    )
    discount_label: Optional[str] = Field(
        default=None, alias="discountLabel", description="Discount such as '%25'."
    )
    in_stock: bool = Field(..., alias="inStock", description="Whether it can be bought.")
    seller: str = Field(..., description="Seller name or a placeholder.")
    rating: Optional[str] = None
    review_count: Optional[str] = Field(default=None, alias="reviewCount")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    observed_at: datetime = Field(
        ..., alias="observedAt", description="When the page was checked (UTC)."
    )


class ErrorResponse(BaseModel):
    """Error object returned for every failed check."""

    error: str = Field(..., description="Human-readable error message.")
