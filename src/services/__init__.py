"""Business-logic service layer."""

from .cart_service import CartService
from .delivery_service import DeliveryService
from .order_workflow import OrderWorkflow

__all__ = [
    "CartService",
    "DeliveryService",
    "OrderWorkflow",
]
