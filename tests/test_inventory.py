"""Tests for the HTTP inventory client"""
from decimal import Decimal

import httpx
import pytest

from conftest import CATALOG
from shopcart.services.inventory import HttpInventoryService

BASE_URL = "http://inventory.test"


def make_service(handler) -> HttpInventoryService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return HttpInventoryService(BASE_URL, client=client)


def catalog_handler(request: httpx.Request) -> httpx.Response:
    kind, product_id = request.url.path.strip("/").split("/")
    product_id = int(product_id)
    if kind == "stock":
        return httpx.Response(200, json={"id": product_id, "amount": 4})
    if kind == "products" and product_id in CATALOG:
        return httpx.Response(200, json=CATALOG[product_id])
    return httpx.Response(404, json={})


@pytest.mark.asyncio
async def test_get_stock():
    async with make_service(catalog_handler) as service:
        stock = await service.get_stock(1)

    assert stock.id == 1
    assert stock.amount == 4


@pytest.mark.asyncio
async def test_get_stock_without_amount():
    def handler(request):
        return httpx.Response(200, json={"id": 3})

    async with make_service(handler) as service:
        stock = await service.get_stock(3)

    assert stock.amount == 0


@pytest.mark.asyncio
async def test_get_product():
    async with make_service(catalog_handler) as service:
        product = await service.get_product(2)

    assert product.id == 2
    assert product.title == CATALOG[2]["title"]
    assert product.price == Decimal("139.9")
    assert not hasattr(product, "amount")


@pytest.mark.asyncio
async def test_requests_use_expected_paths():
    seen = []

    def handler(request):
        seen.append(request.url.path)
        return catalog_handler(request)

    async with make_service(handler) as service:
        await service.get_stock(7)
        await service.get_product(7)

    assert seen == ["/stock/7", "/products/7"]


@pytest.mark.asyncio
async def test_http_error_raises():
    async with make_service(catalog_handler) as service:
        with pytest.raises(httpx.HTTPStatusError):
            await service.get_product(404)


@pytest.mark.asyncio
async def test_network_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_service(handler) as service:
        with pytest.raises(httpx.ConnectError):
            await service.get_stock(1)


@pytest.mark.asyncio
async def test_malformed_payload_raises():
    def handler(request):
        return httpx.Response(200, json={"title": "no id"})

    async with make_service(handler) as service:
        with pytest.raises(ValueError):
            await service.get_product(1)


@pytest.mark.asyncio
async def test_lazy_client_created_and_closed():
    service = HttpInventoryService(BASE_URL + "/", timeout=2.0)
    assert service.base_url == BASE_URL

    client = await service._get_http_client()
    assert client is await service._get_http_client()
    assert str(client.base_url).rstrip("/") == BASE_URL

    await service.aclose()
    assert service._http_client is None
    assert client.is_closed
