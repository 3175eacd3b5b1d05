"""
Product Entity - a catalog item as the backend listed it
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogProduct:
    """Product as shown to the user in the last product listing"""

    id: int
    name: str
    price: float
    currency: str
    description: str = ""

    def __post_init__(self):
        """Validate the product after initialization"""
        if not self.name:
            raise ValueError("Product name cannot be empty")

        if self.price < 0:
            raise ValueError("Product price cannot be negative")
