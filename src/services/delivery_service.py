"""
Delivery pricing: great-circle distance and tiered delivery fee.
"""

import logging
import math

from src.domain.entities.cart_entity import Cart
from src.domain.entities.session_entity import OrderQuote
from src.domain.value_objects.coordinates import Coordinates
from src.infrastructure.utilities.constants import GeoSettings

logger = logging.getLogger(__name__)


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """Haversine distance between two coordinates, in kilometres"""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    return GeoSettings.EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def delivery_fee(
    distance: float,
    base_fare: float = 5.0,
    free_radius: float = 1.0,
    per_km_rate: float = 2.0,
) -> float:
    """Flat fare inside the free radius, plus a per-km rate beyond it"""
    if distance <= free_radius:
        return base_fare
    return base_fare + (distance - free_radius) * per_km_rate


class DeliveryService:
    """Quotes delivery for a cart from a fixed restaurant location"""

    def __init__(
        self,
        origin: Coordinates,
        base_fare: float = 5.0,
        free_radius: float = 1.0,
        per_km_rate: float = 2.0,
    ):
        self.origin = origin
        self.base_fare = base_fare
        self.free_radius = free_radius
        self.per_km_rate = per_km_rate

    @classmethod
    def from_config(cls, config) -> "DeliveryService":
        return cls(
            origin=Coordinates(config.restaurant_lat, config.restaurant_lng),
            base_fare=config.delivery_base_fare,
            free_radius=config.delivery_free_radius_km,
            per_km_rate=config.delivery_per_km_rate,
        )

    def calculate_delivery_charge(self, destination: Coordinates) -> tuple[float, float]:
        """Return (distance_km, fee) for a delivery destination"""
        distance = distance_km(self.origin, destination)
        fee = delivery_fee(distance, self.base_fare, self.free_radius, self.per_km_rate)
        return distance, fee

    def quote(self, cart: Cart, destination: Coordinates) -> OrderQuote:
        """Price a cart delivered to `destination`"""
        distance, fee = self.calculate_delivery_charge(destination)
        subtotal = cart.subtotal
        quote = OrderQuote(
            subtotal=subtotal,
            distance_km=distance,
            delivery_fee=fee,
            total=subtotal + fee,
        )
        logger.info(
            "Quoted cart of user %s: subtotal=%.2f distance=%.2fkm fee=%.2f",
            cart.user_id,
            subtotal,
            distance,
            fee,
        )
        return quote
