"""Watchlist state transitions with persistence after every commit."""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from configs import settings
from src.models.product_models import ProductRecord
from src.models.watchlist_models import PriceHistoryEntry, TrackedItem, WatchlistSummary
from src.repositories.redis.watchlist_crud import WatchlistRepository
from src.services.extraction.utils import canonical_url, is_target_url

from .client import ExtractionClient, WatchlistError

logger = logging.getLogger("watchlist.service")

EMPTY_URL_MESSAGE = "Lütfen bir URL girin"
INVALID_URL_MESSAGE = "Lütfen geçerli bir Trendyol linki girin"
DUPLICATE_MESSAGE = "Bu ürün zaten takip listesinde"
NOT_FOUND_MESSAGE = "Ürün takip listesinde bulunamadı"


def new_item(record: ProductRecord, now: datetime) -> TrackedItem:
    """Create a tracked item seeded with its first observed price."""
    return TrackedItem(
        id=uuid.uuid4().hex,
        added_at=now,
        notifications=True,
        price_history=[PriceHistoryEntry(price=record.price, date=now)],
        product=record,
    )


def merge_observation(
    item: TrackedItem, record: ProductRecord, now: datetime
) -> TrackedItem:
    """Replace the product, appending to history only when the price moved."""
    history = list(item.price_history)
    if item.last_price != record.price:
        history.append(PriceHistoryEntry(price=record.price, date=now))
    return item.model_copy(update={"product": record, "price_history": history})


class WatchlistService:
    """Owns the tracked list for a single client."""

    def __init__(
        self,
        repository: WatchlistRepository,
        client: ExtractionClient,
        refresh_delay: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Load the stored list once.

        Args:
            repository (WatchlistRepository): Persistent store for the list.
            client (ExtractionClient): Client for the extraction service.
            refresh_delay (float): Seconds to wait between refreshes in
                refresh_all.
            sleep: Function used to wait; injectable for tests.
        """
        self.repository = repository
        self.client = client
        self.refresh_delay = (
            settings.REFRESH_DELAY_SECONDS if refresh_delay is None else refresh_delay
        )
        self._sleep = sleep
        self.items: List[TrackedItem] = repository.load()

    def _commit(self, items: List[TrackedItem]) -> None:
        self.items = items
        if items:
            self.repository.save(items)
        else:
            self.repository.clear()

    def get(self, item_id: str) -> Optional[TrackedItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def add(self, url: str) -> TrackedItem:
        """
        Start tracking a product.

        Raises:
            WatchlistError: For empty, off-domain or already tracked URLs,
            and when the service fails to check the page.
        """
        if not url or not url.strip():
            raise WatchlistError(EMPTY_URL_MESSAGE)
        if not is_target_url(url):
            raise WatchlistError(INVALID_URL_MESSAGE)

        clean_url = canonical_url(url)
        if any(item.url == clean_url for item in self.items):
            raise WatchlistError(DUPLICATE_MESSAGE)

        record = self.client.check(clean_url)
        item = new_item(record, datetime.now(timezone.utc))
        self._commit([item, *self.items])
        logger.info("Tracking %s (%s)", item.product.name, item.url)
        return item

    def refresh(self, item_id: str) -> Optional[TrackedItem]:
        """Re-check one item; failures leave it untouched."""
        item = self.get(item_id)
        if item is None:
            return None

        try:
            record = self.client.check(item.url)
        except WatchlistError as exc:
            logger.error("Refresh failed for %s: %s", item.url, exc.message)
            return item

        updated = merge_observation(item, record, datetime.now(timezone.utc))
        self._commit([updated if i.id == item_id else i for i in self.items])
        return updated

    def refresh_all(self) -> List[TrackedItem]:
        """Refresh items one at a time, in list order, pausing between them."""
        item_ids = [item.id for item in self.items]
        for index, item_id in enumerate(item_ids):
            if index:
                self._sleep(self.refresh_delay)
            self.refresh(item_id)
        return self.items

    def remove(self, item_id: str) -> bool:
        remaining = [item for item in self.items if item.id != item_id]
        if len(remaining) == len(self.items):
            return False
        self._commit(remaining)
        return True

    def toggle_notifications(self, item_id: str) -> TrackedItem:
        item = self.get(item_id)
        if item is None:
            raise WatchlistError(NOT_FOUND_MESSAGE)
        toggled = item.model_copy(update={"notifications": not item.notifications})
        self._commit([toggled if i.id == item_id else i for i in self.items])
        return toggled

    def summary(self) -> WatchlistSummary:
        in_stock = sum(1 for item in self.items if item.product.in_stock)
        return WatchlistSummary(
            total=len(self.items),
            in_stock=in_stock,
            out_of_stock=len(self.items) - in_stock,
        )


def create_watchlist_service() -> WatchlistService:
    """Build a WatchlistService from the application settings."""
    repository = WatchlistRepository(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        password=settings.REDIS_PASSWORD,
        ssl=settings.REDIS_SSL,
        key=settings.WATCHLIST_STORAGE_KEY,
        db=settings.REDIS_DB,
    )
    return WatchlistService(repository, ExtractionClient())
