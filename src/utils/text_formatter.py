"""
Text formatting utilities for the Telegram bot

All texts are Telegram HTML.
"""

from html import escape
from typing import Iterable, Optional, Sequence

from src.domain.entities.cart_entity import Cart
from src.domain.entities.product_entity import CatalogProduct
from src.domain.entities.session_entity import OrderQuote
from src.domain.value_objects.coordinates import Coordinates
from src.dtos import OrderDetail, OrderSummary

LOCATION_PROMPT_TEXT = "📍 Please share your location (where you want to receive the order)"
CART_EMPTY_TEXT = "🛒 Your cart is empty"
CART_CLEARED_TEXT = "🗑️ Cart emptied"
LOCATION_REQUIRED_TEXT = "❌ You need to share your location first"
NO_PRODUCTS_TEXT = "❌ No products available"
NO_ORDERS_TEXT = "❌ No orders yet"
VIEW_PRODUCTS_FIRST_TEXT = "❌ Product not found. Please view the products again"
CHECKOUT_INCOMPLETE_TEXT = "❌ Incomplete cart or delivery address not set"


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


def format_main_menu(display_name: str) -> str:
    """
    Format the welcome/main menu text

    Args:
        display_name: The user's first name as Telegram reports it

    Returns:
        Greeting with a short list of what the bot can do
    """
    return (
        f"Hi {escape(display_name)}! 👋\n\n"
        "Welcome to <b>MyFood</b>. Here you can:\n\n"
        "✅ Browse products\n"
        "📦 Place orders\n"
        "🚗 Track your delivery"
    )


def format_location_saved(location: Coordinates) -> str:
    return f"✅ Location saved:\n📍 <code>{location.format_display()}</code>\n\nWhat would you like to do?"


def format_product_list(products: Iterable[CatalogProduct]) -> str:
    """Numbered product listing with price and description"""
    text = "<b>🛍️ Available products:</b>\n\n"
    for index, product in enumerate(products, start=1):
        text += (
            f"{index}. {escape(product.name)} - ${product.price:g} {escape(product.currency)}\n"
            f"<i>{escape(product.description)}</i>\n\n"
        )
    return text


def format_added_to_cart(product: CatalogProduct) -> str:
    return f"✅ <b>{escape(product.name)}</b> added to cart"


def format_cart(cart: Cart, quote: OrderQuote) -> str:
    """
    Format cart lines followed by the delivery quote

    Args:
        cart: Non-empty cart
        quote: Quote computed for this cart

    Returns:
        Cart summary with subtotal, distance, delivery fee and total
    """
    text = "<b>🛒 Your cart:</b>\n\n"
    for index, line in enumerate(cart.lines, start=1):
        text += f"{index}. {escape(line.name)} x{line.quantity} = {format_money(line.line_total)}\n"

    text += f"\n<b>Subtotal:</b> {format_money(quote.subtotal)}"
    text += f"\n<b>Distance:</b> {quote.distance_km:.2f} km"
    text += f"\n<b>Delivery:</b> {format_money(quote.delivery_fee)}"
    text += f"\n<b>Total:</b> {format_money(quote.total)}"
    return text


def format_order_confirmed(order_id: int, total: float) -> str:
    return (
        "✅ <b>Order confirmed!</b>\n\n"
        f"📦 Order ID: <code>{order_id}</code>\n"
        f"💰 Total: {format_money(total)}\n\n"
        "Tracking your delivery..."
    )


def format_orders(orders: Sequence[OrderSummary]) -> str:
    text = "<b>📦 Your orders:</b>\n\n"
    for order in orders:
        text += f"ID: <code>{order.id}</code>\n"
        text += f"Status: {escape(order.status_name or 'Unknown')}\n"
        text += f"Total: ${order.total:g}\n"
        if order.date is not None:
            text += f"Date: {order.date.strftime('%d/%m/%Y')}\n"
        text += "\n"
    return text


def _format_coordinate(value: Optional[float]) -> str:
    return f"{value:.6f}" if value is not None else "?"


def format_tracking(order: OrderDetail) -> str:
    """Order status with driver and delivery location when known"""
    text = f"<b>📦 Order #{order.id}</b>\n\n"
    text += f"Status: <b>{escape(order.status_name or 'Processing')}</b>\n"
    text += f"Total: ${order.total:g}\n"

    driver = order.driver
    if driver is not None:
        availability = "✅ Available" if driver.is_available else "❌ Not available"
        text += "\n<b>🚗 Driver:</b>\n"
        text += f"Name: {escape(driver.name)} {escape(driver.last_name)}\n"
        text += f"Status: {availability}\n"

    if order.address is not None:
        text += (
            f"\n📍 <b>Your location:</b> {_format_coordinate(order.address.coordinate_x)}, "
            f"{_format_coordinate(order.address.coordinate_y)}"
        )
    return text
