"""
Button actions carried in inline keyboard callback data
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ActionKind(Enum):
    """Every action a button can trigger; the value is the token prefix"""

    SEND_LOCATION = "send_location"
    VIEW_PRODUCTS = "view_products"
    ADD_TO_CART = "add_to_cart_"
    VIEW_CART = "view_cart"
    CONFIRM_ORDER = "confirm_order"
    CLEAR_CART = "clear_cart"
    VIEW_ORDERS = "view_orders"
    TRACK_ORDER = "track_order_"
    BACK_TO_MENU = "back_to_menu"

    @property
    def takes_id(self) -> bool:
        return self.value.endswith("_")


@dataclass(frozen=True)
class Action:
    """A parsed button action

    `target_id` is the product id for ADD_TO_CART, the order id for
    TRACK_ORDER and None for everything else.
    """

    kind: ActionKind
    target_id: Optional[int] = None

    def __post_init__(self):
        if self.kind.takes_id and self.target_id is None:
            raise ValueError(f"{self.kind.name} requires a target id")
        if not self.kind.takes_id and self.target_id is not None:
            raise ValueError(f"{self.kind.name} takes no target id")

    @property
    def token(self) -> str:
        """Encode as callback data"""
        if self.kind.takes_id:
            return f"{self.kind.value}{self.target_id}"
        return self.kind.value

    @classmethod
    def add_to_cart(cls, product_id: int) -> "Action":
        return cls(ActionKind.ADD_TO_CART, product_id)

    @classmethod
    def track_order(cls, order_id: int) -> "Action":
        return cls(ActionKind.TRACK_ORDER, order_id)


def parse_action_token(token: Optional[str]) -> Optional[Action]:
    """Decode callback data; None for anything unrecognised"""
    if not token:
        return None

    for kind in ActionKind:
        if kind.takes_id:
            if not token.startswith(kind.value):
                continue
            raw_id = token[len(kind.value):]
            if not raw_id.isdecimal():
                return None
            return Action(kind, int(raw_id))
        if token == kind.value:
            return Action(kind)
    return None
