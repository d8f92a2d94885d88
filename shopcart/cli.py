"""
Cart command line

Operates on the configured cart storage and inventory API.

Usage:
    shopcart show
    shopcart add 3
    shopcart update 3 2
    shopcart remove 3

With the default memory backend nothing survives the process; set
CART_STORAGE_BACKEND=redis to keep the cart between runs.
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from shopcart.cart import Cart, CartResult, build_cart_manager
from shopcart.config import Settings
from shopcart.i18n import get_text
from shopcart.services.inventory import HttpInventoryService
from shopcart.services.money import format_money
from shopcart.services.notifications import RecordingNotificationSink


def render_cart(cart: Cart, lang: str) -> str:
    """Plain-text listing of the cart with its total."""
    if not cart.size:
        return get_text("cart.empty", lang)

    lines = []
    for item in cart:
        lines.append(
            f"#{item.id:<4} {item.title[:40]:<40} x{item.amount:<3} "
            f"{format_money(item.price):>12} {format_money(item.subtotal):>12}"
        )
    lines.append(get_text("cart.items", lang, count=cart.total_items))
    lines.append(get_text("cart.total", lang, total=format_money(cart.total)))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shopcart", description="Inspect and change the shopping cart.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the cart")

    add = sub.add_parser("add", help="Add one unit of a product")
    add.add_argument("product_id", type=int)

    remove = sub.add_parser("remove", help="Remove a product from the cart")
    remove.add_argument("product_id", type=int)

    update = sub.add_parser("update", help="Set the amount of a product in the cart")
    update.add_argument("product_id", type=int)
    update.add_argument("amount", type=int)

    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    sink = RecordingNotificationSink(callback=lambda message: print(f"! {message}", file=sys.stderr))
    inventory = HttpInventoryService(settings.inventory_api_url, timeout=settings.inventory_timeout)
    manager = build_cart_manager(settings, notifier=sink, inventory=inventory)

    result: CartResult
    async with inventory:
        if args.command == "add":
            result = await manager.add_product(args.product_id)
        elif args.command == "remove":
            result = manager.remove_product(args.product_id)
        elif args.command == "update":
            result = await manager.update_product_amount(args.product_id, args.amount)
        else:
            result = CartResult(ok=True)

    print(render_cart(manager.cart, settings.language))
    return 0 if result else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
