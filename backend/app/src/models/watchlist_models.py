"""Models for the client-side watchlist."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from src.models.product_models import ProductRecord


class PriceHistoryEntry(BaseModel):
    """A price observed at a given moment."""

    price: str
    date: datetime


class TrackedItem(BaseModel):
    """A product on the watchlist together with its price history."""

    id: str = Field(..., description="Identifier assigned when the item was added.")
    added_at: datetime = Field(..., description="When the item was added (UTC).")
    notifications: bool = Field(
        default=True, description="Whether price/stock alerts are enabled."
    )
    price_history: List[PriceHistoryEntry] = Field(default_factory=list)
    product: ProductRecord

    @property
    def url(self) -> str:
        return self.product.url

    @property
    def last_price(self) -> str | None:
        """Most recently stored price, if any."""
        if not self.price_history:
            return None
        return self.price_history[-1].price


class WatchlistSummary(BaseModel):
    """Counters shown above the watchlist."""

    total: int
    in_stock: int
    out_of_stock: int
