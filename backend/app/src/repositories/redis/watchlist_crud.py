"""Module for persisting the watchlist as a single JSON blob in Redis."""

import logging
from typing import List, Optional, Union

import redis
from pydantic import TypeAdapter
from pydantic import ValidationError as ModelValidationError

from src.models.watchlist_models import TrackedItem

logger = logging.getLogger(__name__)

_items_adapter = TypeAdapter(List[TrackedItem])


def str_to_bool(value: str) -> bool:
    """Convert REDIS_SSL env variable to boolean."""
    return value.lower() in ("true", "1", "yes")


class WatchlistRepository:
    """Load, save and clear the tracked list stored under a fixed key."""

    def __init__(
        self,
        host: str,
        port: int,
        password: Optional[str],
        ssl: Union[str, bool],
        key: str,
        db: int = 0,
    ) -> None:
        """
        Initialize a connection to the Redis database.

        Args:
            host (str): The hostname or IP address of the Redis server.
            port (int): The port number of the Redis server.
            password (Optional[str]): Password, if the server requires one.
            ssl (Union[str, bool]): Whether to connect over TLS.
            key (str): Key holding the serialized watchlist.
            db (int): Redis logical database.
        """
        ssl = str_to_bool(ssl) if isinstance(ssl, str) else ssl
        self.key = key
        self.handler = redis.Redis(
            host=host,
            port=port,
            password=password,
            ssl=ssl,
            db=db,
        )

    def load(self) -> List[TrackedItem]:
        """Return the stored items, or an empty list when nothing is stored."""
        raw = self.handler.get(self.key)
        if not raw:
            return []
        try:
            items = _items_adapter.validate_json(raw)
        except ModelValidationError as exc:
            logger.error("Stored watchlist under %s is unreadable: %s", self.key, exc)
            return []
        logger.info("Loaded %d tracked item(s)", len(items))
        return items

    def save(self, items: List[TrackedItem]) -> None:
        """Overwrite the stored list."""
        self.handler.set(self.key, _items_adapter.dump_json(items))
        logger.debug("Saved %d tracked item(s)", len(items))

    def clear(self) -> None:
        """Remove the stored list entirely."""
        self.handler.delete(self.key)
        logger.info("Cleared watchlist storage key %s", self.key)
