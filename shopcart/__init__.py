"""
shopcart - stock-aware shopping cart state.

    from shopcart.cart import build_cart_manager

    manager = build_cart_manager()
    await manager.add_product(1)
"""

__version__ = "0.1.0"
