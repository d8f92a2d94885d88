"""Pytest configuration and fixtures"""
import json
import os
from unittest.mock import AsyncMock, Mock

import pytest

# Keep test runs independent of a developer's .env / shell
os.environ.setdefault("LOG_LEVEL", "WARNING")

from shopcart.cart import CartManager, CatalogProduct, MemoryPersistenceStore, Stock

STORAGE_KEY = "@RocketShoes:cart"


CATALOG = {
    1: {"id": 1, "title": "Tênis de Caminhada Leve Confortável", "price": 179.9,
        "image": "https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis1.jpg"},
    2: {"id": 2, "title": "Tênis VR Caminhada Confortável Detalhes Couro Masculino", "price": 139.9,
        "image": "https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis2.jpg"},
    7: {"id": 7, "title": "Tênis Adidas Duramo Lite 2.0", "price": 219.9,
        "image": "https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis3.jpg"},
}


def make_inventory(stock: dict, catalog: dict = CATALOG) -> Mock:
    """Inventory double backed by plain dicts (unknown product -> null stock amount)."""
    inventory = Mock()

    async def get_stock(product_id):
        return Stock.model_validate({"id": product_id, "amount": stock.get(product_id)})

    async def get_product(product_id):
        return CatalogProduct.model_validate(catalog[product_id])

    inventory.get_stock = AsyncMock(side_effect=get_stock)
    inventory.get_product = AsyncMock(side_effect=get_product)
    return inventory


def cart_entry(product_id: int, amount: int) -> dict:
    return {**CATALOG[product_id], "amount": amount}


@pytest.fixture
def stock():
    """Mutable stock table; tests adjust it before calling the manager."""
    return {1: 3, 2: 5, 7: 10}


@pytest.fixture
def inventory(stock):
    return make_inventory(stock)


@pytest.fixture
def store():
    return MemoryPersistenceStore()


@pytest.fixture
def notifier():
    notifier = Mock()
    notifier.error = Mock()
    return notifier


@pytest.fixture
def manager(inventory, store, notifier):
    """Manager over an empty cart, English messages."""
    return CartManager(inventory, store, notifier, storage_key=STORAGE_KEY, language="en")


@pytest.fixture
def seeded_store():
    """Store holding product 1 x2 and product 2 x1."""
    return MemoryPersistenceStore({
        STORAGE_KEY: json.dumps([cart_entry(1, 2), cart_entry(2, 1)]),
    })


@pytest.fixture
def seeded_manager(inventory, seeded_store, notifier):
    return CartManager(inventory, seeded_store, notifier, storage_key=STORAGE_KEY, language="en")
