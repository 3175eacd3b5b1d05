"""
Cart repository interface

Defines the contract for cart data access operations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.cart_entity import Cart


class CartRepository(ABC):
    """Repository interface for cart operations"""

    @abstractmethod
    async def get(self, user_id: int) -> Optional[Cart]:
        """Get the cart of a user, None for a never-seen user"""

    @abstractmethod
    async def upsert(self, user_id: int, cart: Cart) -> None:
        """Create or replace the cart of a user"""
