"""
Cart Entity - per-user selection of products pending checkout
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from src.domain.entities.product_entity import CatalogProduct


@dataclass(frozen=True)
class CartLine:
    """A product in the cart with its quantity"""

    product_id: int
    name: str
    unit_price: float
    currency: str
    quantity: int = 1

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("Cart line quantity must be at least 1")

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    @classmethod
    def from_product(cls, product: CatalogProduct) -> "CartLine":
        return cls(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            currency=product.currency,
        )


@dataclass(frozen=True)
class Cart:
    """Insertion-ordered cart, unique by product id

    Instances are immutable; every mutation returns a new cart that the
    caller commits through the cart repository.
    """

    user_id: int
    lines: Tuple[CartLine, ...] = ()

    def __post_init__(self):
        product_ids = [line.product_id for line in self.lines]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError("Cart lines must be unique by product id")

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.lines)

    def find_line(self, product_id: int) -> Optional[CartLine]:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def with_product(self, product: CatalogProduct) -> "Cart":
        """Add one unit of a product, merging with an existing line"""
        if self.find_line(product.id) is None:
            return replace(self, lines=self.lines + (CartLine.from_product(product),))

        lines = tuple(
            replace(line, quantity=line.quantity + 1) if line.product_id == product.id else line
            for line in self.lines
        )
        return replace(self, lines=lines)

    def cleared(self) -> "Cart":
        return replace(self, lines=())
