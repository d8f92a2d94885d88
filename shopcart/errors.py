"""
Cart Errors

Error kinds reported by CartManager. They are never raised out of a cart
operation: the manager builds them, logs them, forwards the localized text
to the notification sink and returns them in the CartResult.
"""
from typing import Optional

# Translation keys (shopcart/i18n/locales/*.json)
MSG_OUT_OF_STOCK = "cart.out_of_stock"
MSG_ADD_FAILED = "cart.add_failed"
MSG_REMOVE_FAILED = "cart.remove_failed"
MSG_PRODUCT_NOT_IN_CART = "cart.product_not_in_cart"
MSG_UPDATE_FAILED = "cart.update_failed"


class CartError(Exception):
    """Base class for cart operation failures."""

    message_key = MSG_UPDATE_FAILED

    def __init__(self, product_id: Optional[int], detail: str = ""):
        self.product_id = product_id
        self.detail = detail or self.__class__.__name__
        super().__init__(self.detail)


class OutOfStockError(CartError):
    """Requested quantity exceeds the available stock."""

    message_key = MSG_OUT_OF_STOCK

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            product_id,
            f"Product {product_id}: requested {requested}, available {available}",
        )
        self.requested = requested
        self.available = available


class ProductNotInCartError(CartError):
    """Amount update targets a product that is not in the cart."""

    message_key = MSG_PRODUCT_NOT_IN_CART

    def __init__(self, product_id: int):
        super().__init__(product_id, f"Product {product_id} is not in the cart")


class GenericOperationError(CartError):
    """Any other failure: transport, parsing, storage, invalid input."""


class AddProductError(GenericOperationError):
    message_key = MSG_ADD_FAILED


class RemoveProductError(GenericOperationError):
    message_key = MSG_REMOVE_FAILED


class UpdateAmountError(GenericOperationError):
    message_key = MSG_UPDATE_FAILED


__all__ = [
    "MSG_OUT_OF_STOCK",
    "MSG_ADD_FAILED",
    "MSG_REMOVE_FAILED",
    "MSG_PRODUCT_NOT_IN_CART",
    "MSG_UPDATE_FAILED",
    "CartError",
    "OutOfStockError",
    "ProductNotInCartError",
    "GenericOperationError",
    "AddProductError",
    "RemoveProductError",
    "UpdateAmountError",
]
