"""Cart manager: stock-checked cart mutations with persistent commits."""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, AsyncIterator, Optional

from shopcart.config import DEFAULT_LANGUAGE, DEFAULT_STORAGE_KEY, Settings
from shopcart.errors import (
    AddProductError,
    CartError,
    OutOfStockError,
    ProductNotInCartError,
    RemoveProductError,
    UpdateAmountError,
)
from shopcart.i18n import get_text
from shopcart.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from shopcart.services.notifications import LoggingNotificationSink, NotificationSink

from .models import Cart, Product
from .storage import PersistenceStore, load_cart, save_cart

if TYPE_CHECKING:
    from shopcart.services.inventory import InventoryService

logger = get_logger(__name__)


@dataclass(frozen=True)
class CartResult:
    """Outcome of a cart operation. Falsy on failure."""
    ok: bool
    error: Optional[CartError] = None

    def __bool__(self) -> bool:
        return self.ok


SUCCESS = CartResult(ok=True)


class CartManager:
    """
    Owns the cart for one session.

    - `cart` is a read-only snapshot; the three operations are the only
      mutation path
    - Every successful operation writes the full cart to storage before
      replacing the in-memory copy, so the two never diverge
    - Failures never raise: they are logged, sent to the notification sink
      as localized text and returned as a failed CartResult
    """

    def __init__(
        self,
        inventory: "InventoryService",
        store: PersistenceStore,
        notifier: Optional[NotificationSink] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        language: str = DEFAULT_LANGUAGE,
        serialize_operations: bool = False,
    ):
        self.inventory = inventory
        self.store = store
        self.notifier = notifier or LoggingNotificationSink()
        self.storage_key = storage_key
        self.language = language
        self.serialize_operations = serialize_operations
        self._lock: Optional[asyncio.Lock] = None  # Created on first use, inside the running loop

        # Persisted amounts are trusted until the next mutation touches them
        self._cart = load_cart(store, storage_key)
        logger.info(f"Cart loaded from {storage_key!r}: {self._cart.size} products")

    @property
    def cart(self) -> Cart:
        """Copy of the current cart."""
        return self._cart.copy()

    # ==================== INTERNAL HELPERS ====================

    @asynccontextmanager
    async def _operation(self) -> AsyncIterator[None]:
        """Run one async operation, one at a time when serialization is on."""
        if not self.serialize_operations:
            yield
            return
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            yield

    def _latest(self, snapshot: Cart) -> Cart:
        """
        Cart to mutate after an inventory await.

        A serialized operation re-reads the owned cart so a remove committed
        while it was suspended is kept. Unserialized operations keep their
        start snapshot.
        """
        if self.serialize_operations:
            return self._cart.copy()
        return snapshot

    async def _get_stock(self, product_id: int) -> int:
        stock = await self.inventory.get_stock(product_id)
        if stock is None:
            return 0
        return stock.amount or 0

    def _commit(self, cart: Cart) -> None:
        """Persist, then publish. A failed write leaves memory untouched."""
        save_cart(self.store, self.storage_key, cart)
        self._cart = cart
        logger.info(f"Cart committed: {cart.size} products, {cart.total_items} units")

    def _reject(self, error: CartError) -> CartResult:
        logger.warning(
            "Cart operation rejected (%s): %s",
            type(error).__name__,
            sanitize_string_for_logging(error.detail, max_length=200),
        )
        message = get_text(error.message_key, self.language)
        try:
            self.notifier.error(message)
        except Exception:
            logger.exception("Notification sink failed")
        return CartResult(ok=False, error=error)

    # ==================== OPERATIONS ====================

    async def add_product(self, product_id: int) -> CartResult:
        """Add one unit of product_id, fetching the catalog record for new entries."""
        async with self._operation():
            updated = self._cart.copy()
            try:
                stock = await self._get_stock(product_id)
                updated = self._latest(updated)
                existing = updated.find(product_id)
                amount = (existing.amount if existing else 0) + 1

                if amount > stock:
                    return self._reject(OutOfStockError(product_id, amount, stock))

                if existing:
                    existing.amount = amount
                else:
                    product = await self.inventory.get_product(product_id)
                    # Only removes can land meanwhile, so the id is still absent
                    updated = self._latest(updated)
                    updated.items.append(Product.from_catalog(product, amount))

                self._commit(updated)
            except Exception as e:
                logger.exception("Failed to add product %s", sanitize_id_for_logging(product_id))
                error = AddProductError(product_id, f"Failed to add product {product_id}: {e}")
                error.__cause__ = e
                return self._reject(error)

        return SUCCESS

    def remove_product(self, product_id: int) -> CartResult:
        """Delete the entry for product_id."""
        updated = self._cart.copy()
        index = updated.index_of(product_id)

        if index is None:
            return self._reject(
                RemoveProductError(product_id, f"Product {product_id} is not in the cart")
            )

        del updated.items[index]
        try:
            self._commit(updated)
        except Exception as e:
            logger.exception("Failed to remove product %s", sanitize_id_for_logging(product_id))
            error = RemoveProductError(product_id, f"Failed to remove product {product_id}: {e}")
            error.__cause__ = e
            return self._reject(error)

        return SUCCESS

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """
        Set the amount of an entry already in the cart.

        Checks, in order: amount is a positive integer, product is in the
        cart, amount fits the current stock. The first violation aborts.
        """
        # bool is an int subclass but never a quantity
        if isinstance(amount, bool) or not isinstance(amount, int):
            return self._reject(
                UpdateAmountError(product_id, f"Amount must be an integer, got {amount!r}")
            )
        if amount <= 0:
            return self._reject(
                UpdateAmountError(product_id, f"Amount must be positive, got {amount}")
            )

        async with self._operation():
            updated = self._cart.copy()
            if updated.find(product_id) is None:
                return self._reject(ProductNotInCartError(product_id))

            try:
                stock = await self._get_stock(product_id)
                updated = self._latest(updated)
                entry = updated.find(product_id)
                if entry is None:
                    return self._reject(ProductNotInCartError(product_id))
                if amount > stock:
                    return self._reject(OutOfStockError(product_id, amount, stock))

                entry.amount = amount
                self._commit(updated)
            except Exception as e:
                logger.exception(
                    "Failed to update amount of product %s", sanitize_id_for_logging(product_id)
                )
                error = UpdateAmountError(product_id, f"Failed to update product {product_id}: {e}")
                error.__cause__ = e
                return self._reject(error)

        return SUCCESS


def build_cart_manager(
    settings: Optional[Settings] = None,
    notifier: Optional[NotificationSink] = None,
    inventory: Optional["InventoryService"] = None,
    store: Optional[PersistenceStore] = None,
) -> CartManager:
    """
    Wire a CartManager from settings.

    Collaborators passed explicitly win over the ones settings describe.
    """
    from shopcart.services.inventory import HttpInventoryService
    from .storage import MemoryPersistenceStore, RedisPersistenceStore

    settings = settings or Settings.from_env()

    if inventory is None:
        inventory = HttpInventoryService(settings.inventory_api_url, timeout=settings.inventory_timeout)

    if store is None:
        if settings.storage_backend == "redis":
            from shopcart.db import get_redis_sync
            store = RedisPersistenceStore(get_redis_sync(settings.redis_url, settings.redis_token))
        else:
            store = MemoryPersistenceStore()

    return CartManager(
        inventory=inventory,
        store=store,
        notifier=notifier,
        storage_key=settings.storage_key,
        language=settings.language,
        serialize_operations=settings.serialize_operations,
    )
