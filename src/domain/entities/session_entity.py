"""
Session Entity - per-user conversation state
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from src.domain.entities.product_entity import CatalogProduct
from src.domain.value_objects.coordinates import Coordinates


class SessionState(Enum):
    """Where the user is in the conversation"""

    UNAUTHENTICATED = "unauthenticated"
    MAIN_MENU = "main_menu"
    VIEWING_PRODUCTS = "viewing_products"
    AWAITING_LOCATION = "awaiting_location"
    VIEWING_CART = "viewing_cart"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    TRACKING = "tracking"


@dataclass(frozen=True)
class OrderQuote:
    """Derived pricing snapshot for the current cart and delivery location"""

    subtotal: float
    distance_km: float
    delivery_fee: float
    total: float


@dataclass(frozen=True)
class Session:
    """Conversation state of one user

    Identity fields are fixed at creation. Workflow steps derive new
    sessions with `evolve` and commit them only when the whole step
    succeeded.
    """

    user_id: int
    display_name: str
    customer_id: int
    access_token: str
    state: SessionState = SessionState.MAIN_MENU
    delivery_location: Optional[Coordinates] = None
    delivery_address_id: Optional[int] = None
    catalog_snapshot: Optional[Tuple[CatalogProduct, ...]] = None
    pending_order_quote: Optional[OrderQuote] = None
    last_order_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    @property
    def has_delivery_address(self) -> bool:
        return self.delivery_location is not None and self.delivery_address_id is not None

    def find_product(self, product_id: int) -> Optional[CatalogProduct]:
        """Resolve a product id against the last listing shown to the user"""
        for product in self.catalog_snapshot or ():
            if product.id == product_id:
                return product
        return None

    def evolve(self, **changes) -> "Session":
        """Return a copy with `changes` applied; identity fields cannot change"""
        for locked in ("user_id", "display_name", "customer_id"):
            if locked in changes and changes[locked] != getattr(self, locked):
                raise ValueError(f"Session field '{locked}' is immutable")
        return replace(self, **changes)
