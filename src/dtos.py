"""
Data Transfer Objects (DTOs)

All data-transfer objects for the application, including:
- Commerce backend results, one model per endpoint
- Reply payloads handed to the messenger gateway
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Commerce backend DTOs
# ---------------------------------------------------------------------------


class BackendModel(BaseModel):
    """Base for backend payloads: camelCase aliases, unknown keys ignored"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class CustomerPayload(BackendModel):
    id: int


class LoginResult(BackendModel):
    """POST /auth/telegram-login"""

    access_token: str = Field(min_length=1)
    customer: CustomerPayload


class ProductPayload(BackendModel):
    """One element of GET /products"""

    id: int
    name: str
    price: float
    currency: str = ""
    description: Optional[str] = ""


class CreatedResource(BackendModel):
    """POST /addresses and POST /orders"""

    id: int


class OrderStatusPayload(BackendModel):
    name: Optional[str] = None


class DriverPayload(BackendModel):
    name: str = ""
    last_name: str = Field(default="", alias="lastName")
    is_available: bool = Field(default=False, alias="isAvailable")


class DeliveryPayload(BackendModel):
    driver: Optional[DriverPayload] = None


class AddressPayload(BackendModel):
    coordinate_x: Optional[float] = Field(default=None, alias="coordinateX")
    coordinate_y: Optional[float] = Field(default=None, alias="coordinateY")


class OrderSummary(BackendModel):
    """One element of GET /orders/customer/{customerId}"""

    id: int
    total: float = 0.0
    order_status: Optional[OrderStatusPayload] = Field(default=None, alias="orderStatus")
    date: Optional[datetime] = None

    @property
    def status_name(self) -> Optional[str]:
        return self.order_status.name if self.order_status else None


class OrderDetail(OrderSummary):
    """GET /orders/{orderId}"""

    deliveries: List[DeliveryPayload] = Field(default_factory=list)
    address: Optional[AddressPayload] = None

    @property
    def driver(self) -> Optional[DriverPayload]:
        if not self.deliveries:
            return None
        return self.deliveries[0].driver


# ---------------------------------------------------------------------------
# Reply DTOs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Button:
    """Inline button: label plus the action token it sends back"""

    text: str
    token: str


@dataclass(frozen=True)
class Reply:
    """One outgoing message

    `request_location` asks the gateway for a location-share prompt instead
    of an inline keyboard.
    """

    text: str
    buttons: Tuple[Tuple[Button, ...], ...] = ()
    request_location: bool = False
