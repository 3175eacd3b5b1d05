"""
In-memory Cart Repository

Process-local implementation of CartRepository. Contents are lost on restart.
"""

import logging
from typing import Dict, Optional

from src.domain.entities.cart_entity import Cart
from src.domain.repositories.cart_repository import CartRepository


class InMemoryCartRepository(CartRepository):
    """Dictionary-backed cart repository"""

    def __init__(self):
        self._carts: Dict[int, Cart] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get(self, user_id: int) -> Optional[Cart]:
        return self._carts.get(user_id)

    async def upsert(self, user_id: int, cart: Cart) -> None:
        if cart.user_id != user_id:
            raise ValueError(f"Cart belongs to user {cart.user_id}, not {user_id}")
        self._carts[user_id] = cart
        self._logger.debug("💾 CART SAVED: user %s, %d lines", user_id, len(cart.lines))

    def __len__(self) -> int:
        return len(self._carts)
