"""Durable key/value storage for the cart."""
import json
from abc import ABC, abstractmethod
from typing import Dict, Optional

from shopcart.db import get_redis_sync
from shopcart.logging import get_logger

from .models import Cart

logger = get_logger(__name__)


class PersistenceStore(ABC):
    """Synchronous get/set-by-key storage holding serialized text."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the whole value under key."""


class MemoryPersistenceStore(PersistenceStore):
    """Process-local store. Default backend and test double."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class RedisPersistenceStore(PersistenceStore):
    """Upstash Redis backed store (REST API, sync client)."""

    def __init__(self, redis=None):
        self._redis = redis  # Lazy initialization

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def get(self, key: str) -> Optional[str]:
        value = self.redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self.redis.set(key, value)


def serialize_cart(cart: Cart) -> str:
    return json.dumps(cart.to_list(), ensure_ascii=False)


def deserialize_cart(raw: str) -> Cart:
    return Cart.from_list(json.loads(raw))


def load_cart(store: PersistenceStore, key: str) -> Cart:
    """
    Read the cart stored under key.

    Absent, unreadable or malformed values yield an empty cart; the store is
    left as-is and the next commit overwrites it.
    """
    try:
        raw = store.get(key)
    except Exception as e:
        logger.warning(f"Failed to read cart from storage: {e}")
        return Cart()

    if not raw:
        return Cart()

    try:
        return deserialize_cart(raw)
    except ValueError as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueError
        logger.warning(f"Corrupted cart data under {key!r}: {e}")
        return Cart()


def save_cart(store: PersistenceStore, key: str, cart: Cart) -> None:
    store.set(key, serialize_cart(cart))
