"""
Inventory Service Client

Stock and catalog lookups against the inventory REST API:
    GET /stock/{id}     -> {"id": 1, "amount": 3}
    GET /products/{id}  -> {"id": 1, "title": "...", "price": 179.9, "image": "..."}
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from shopcart.cart.models import CatalogProduct, Stock
from shopcart.logging import get_logger

logger = get_logger(__name__)


class InventoryService(ABC):
    """Stock and product lookups consumed by CartManager."""

    @abstractmethod
    async def get_stock(self, product_id: int) -> Stock:
        ...

    @abstractmethod
    async def get_product(self, product_id: int) -> CatalogProduct:
        ...


class HttpInventoryService(InventoryService):
    """InventoryService over HTTP (httpx)."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._http_client

    async def _get_json(self, path: str) -> Any:
        client = await self._get_http_client()
        try:
            response = await client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Inventory API error %s for %s", e.response.status_code, path)
            raise
        except httpx.RequestError as e:
            logger.error("Inventory network error for %s: %s", path, e)
            raise
        return response.json()

    async def get_stock(self, product_id: int) -> Stock:
        data = await self._get_json(f"/stock/{product_id}")
        return Stock.model_validate(data)

    async def get_product(self, product_id: int) -> CatalogProduct:
        data = await self._get_json(f"/products/{product_id}")
        return CatalogProduct.model_validate(data)

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "HttpInventoryService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
