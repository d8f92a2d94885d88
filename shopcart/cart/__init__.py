"""Cart package: models, storage, and manager."""
from .models import CatalogProduct, Product, Stock, Cart
from .service import CartManager, CartResult, build_cart_manager
from .storage import PersistenceStore, MemoryPersistenceStore, RedisPersistenceStore

__all__ = [
    "CatalogProduct",
    "Product",
    "Stock",
    "Cart",
    "CartManager",
    "CartResult",
    "build_cart_manager",
    "PersistenceStore",
    "MemoryPersistenceStore",
    "RedisPersistenceStore",
]
