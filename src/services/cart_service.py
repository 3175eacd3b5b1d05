"""
Cart management service
"""

import logging

from src.domain.entities.cart_entity import Cart
from src.domain.entities.product_entity import CatalogProduct
from src.domain.repositories.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class CartService:
    """Service for cart management operations"""

    def __init__(self, cart_repository: CartRepository):
        self._carts = cart_repository

    async def get_cart(self, user_id: int) -> Cart:
        """Get the user's cart; a never-seen user has an empty one"""
        cart = await self._carts.get(user_id)
        return cart if cart is not None else Cart(user_id=user_id)

    async def ensure_cart(self, user_id: int) -> Cart:
        """Create an empty cart for the user unless one exists"""
        cart = await self._carts.get(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            await self._carts.upsert(user_id, cart)
            logger.info("Created empty cart for user %s", user_id)
        return cart

    async def add_item(self, user_id: int, product: CatalogProduct) -> Cart:
        """Add one unit of `product`, merging with an existing line"""
        cart = (await self.get_cart(user_id)).with_product(product)
        await self._carts.upsert(user_id, cart)
        line = cart.find_line(product.id)
        logger.info(
            "Added product %s to cart of user %s (quantity now %d, %d lines)",
            product.id,
            user_id,
            line.quantity,
            len(cart.lines),
        )
        return cart

    async def clear_cart(self, user_id: int) -> Cart:
        """Remove every line from the user's cart"""
        cart = (await self.get_cart(user_id)).cleared()
        await self._carts.upsert(user_id, cart)
        logger.info("Cleared cart for user %s", user_id)
        return cart
