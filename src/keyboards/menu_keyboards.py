"""
Inline keyboard layouts for the MyFood bot
"""

from typing import Iterable, Sequence, Tuple

from src.bot.actions import Action, ActionKind
from src.domain.entities.product_entity import CatalogProduct
from src.dtos import Button, OrderSummary

Keyboard = Tuple[Tuple[Button, ...], ...]


def _row(text: str, action: Action) -> Tuple[Button, ...]:
    return (Button(text, action.token),)


def get_main_menu_keyboard() -> Keyboard:
    return (
        _row("📍 Send location", Action(ActionKind.SEND_LOCATION)),
        _row("🛍️ View products", Action(ActionKind.VIEW_PRODUCTS)),
        _row("🛒 My cart", Action(ActionKind.VIEW_CART)),
        _row("📦 My orders", Action(ActionKind.VIEW_ORDERS)),
    )


def get_location_saved_keyboard() -> Keyboard:
    return (
        _row("🛍️ View products", Action(ActionKind.VIEW_PRODUCTS)),
        _row("📍 Change location", Action(ActionKind.SEND_LOCATION)),
    )


def get_products_keyboard(products: Iterable[CatalogProduct]) -> Keyboard:
    rows = [_row(f"➕ {product.name}", Action.add_to_cart(product.id)) for product in products]
    rows.append(_row("🛒 View cart", Action(ActionKind.VIEW_CART)))
    return tuple(rows)


def get_cart_keyboard() -> Keyboard:
    return (
        _row("✅ Confirm order", Action(ActionKind.CONFIRM_ORDER)),
        _row("➕ Add more", Action(ActionKind.VIEW_PRODUCTS)),
        _row("🗑️ Clear cart", Action(ActionKind.CLEAR_CART)),
    )


def get_order_confirmed_keyboard(order_id: int) -> Keyboard:
    return (_row("🚗 Track delivery", Action.track_order(order_id)),)


def get_orders_keyboard(orders: Sequence[OrderSummary]) -> Keyboard:
    rows = [_row(f"📦 Order #{order.id}", Action.track_order(order.id)) for order in orders]
    rows.append(_row("🏠 Home", Action(ActionKind.BACK_TO_MENU)))
    return tuple(rows)


def get_tracking_keyboard(order_id: int) -> Keyboard:
    return (
        _row("🔄 Refresh", Action.track_order(order_id)),
        _row("📦 View orders", Action(ActionKind.VIEW_ORDERS)),
    )
