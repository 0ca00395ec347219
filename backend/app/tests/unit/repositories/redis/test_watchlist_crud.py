"""Test the Redis-backed watchlist repository."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from src.models.product_models import ProductRecord
from src.models.watchlist_models import PriceHistoryEntry, TrackedItem
from src.repositories.redis.watchlist_crud import WatchlistRepository


class FakeRedis:
    """Minimal in-memory stand-in for the get/set/delete calls used."""

    def __init__(self) -> None:
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value if isinstance(value, bytes) else value.encode()
        return True

    def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0


def make_item(item_id: str, prices) -> TrackedItem:
    added_at = datetime(2025, 6, 4, 20, 48, 42, 154852, tzinfo=timezone.utc)
    history = [
        PriceHistoryEntry(
            price=price,
            date=datetime(2025, 6, 5 + offset, 9, 30, tzinfo=timezone.utc),
        )
        for offset, price in enumerate(prices)
    ]
    return TrackedItem(
        id=item_id,
        added_at=added_at,
        notifications=False,
        price_history=history,
        product=ProductRecord(
            url=f"https://www.trendyol.com/acme/item-p-{item_id}",
            name="Kettle",
            price=prices[-1],
            original_price="249,90 TL",
            discount_label="%20",
            in_stock=True,
            seller="ACME",
            rating="4.5",
            review_count="12",
            observed_at=history[-1].date,
        ),
    )


class TestWatchlistRepository:
    """Test cases for WatchlistRepository."""

    def setup_method(self) -> None:
        """Set up test fixtures before each test method."""
        self.fake = FakeRedis()
        with patch("src.repositories.redis.watchlist_crud.redis.Redis") as MockRedis:
            MockRedis.return_value = self.fake
            self.repository = WatchlistRepository(
                "test_host", 6379, "test_password", "true", key="trackedProducts"
            )
            self.redis_kwargs = MockRedis.call_args.kwargs

    def test_init_creates_redis_connection(self) -> None:
        assert self.redis_kwargs == {
            "host": "test_host",
            "port": 6379,
            "password": "test_password",
            "ssl": True,
            "db": 0,
        }
        assert self.repository.handler is self.fake

    def test_load_returns_empty_list_when_nothing_stored(self) -> None:
        assert self.repository.load() == []

    def test_round_trip_preserves_ids_timestamps_and_history(self) -> None:
        items = [
            make_item("b2", ["199,90 TL", "179,90 TL", "189,90 TL"]),
            make_item("a1", ["99,90 TL"]),
        ]

        self.repository.save(items)
        loaded = self.repository.load()

        assert [item.id for item in loaded] == ["b2", "a1"]
        assert loaded == items
        assert isinstance(loaded[0].added_at, datetime)
        assert loaded[0].added_at == items[0].added_at
        assert [entry.price for entry in loaded[0].price_history] == [
            "199,90 TL",
            "179,90 TL",
            "189,90 TL",
        ]
        assert isinstance(loaded[0].price_history[0].date, datetime)
        assert loaded[0].product.observed_at == items[0].product.observed_at

    def test_save_stores_single_blob_under_key(self) -> None:
        self.repository.save([make_item("a1", ["99,90 TL"])])

        assert list(self.fake.data) == ["trackedProducts"]

    def test_clear_removes_key(self) -> None:
        self.repository.save([make_item("a1", ["99,90 TL"])])

        self.repository.clear()

        assert self.fake.data == {}
        assert self.repository.load() == []

    def test_unreadable_blob_loads_as_empty(self) -> None:
        self.fake.data["trackedProducts"] = b'[{"id": "x"}]'

        assert self.repository.load() == []

    def test_uses_configured_key(self) -> None:
        handler = MagicMock()
        handler.get.return_value = None
        with patch("src.repositories.redis.watchlist_crud.redis.Redis") as MockRedis:
            MockRedis.return_value = handler
            repository = WatchlistRepository("h", 6379, None, False, key="custom", db=2)

        repository.load()
        repository.clear()

        handler.get.assert_called_once_with("custom")
        handler.delete.assert_called_once_with("custom")
        assert MockRedis.call_args.kwargs["db"] == 2
