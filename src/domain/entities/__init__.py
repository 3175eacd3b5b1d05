"""
Domain entities package

Contains the core business entities of the MyFood ordering bot.
"""

from .cart_entity import Cart, CartLine
from .product_entity import CatalogProduct
from .session_entity import OrderQuote, Session, SessionState

__all__ = ["Cart", "CartLine", "CatalogProduct", "OrderQuote", "Session", "SessionState"]
