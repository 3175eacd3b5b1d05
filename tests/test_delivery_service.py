"""
Tests for delivery pricing
"""

from types import SimpleNamespace

import pytest

from src.domain.entities.cart_entity import Cart
from src.domain.value_objects.coordinates import Coordinates
from src.services.delivery_service import DeliveryService, delivery_fee, distance_km

RESTAURANT = Coordinates(-16.389385, -68.119294)


class TestDistance:
    """Test haversine distance"""

    @pytest.mark.parametrize("point", [
        RESTAURANT,
        Coordinates(0.0, 0.0),
        Coordinates(89.9, 179.9),
    ])
    def test_distance_to_self_is_zero(self, point):
        assert distance_km(point, point) == pytest.approx(0.0, abs=1e-9)

    def test_distance_is_symmetric(self):
        other = Coordinates(-16.5, -68.15)
        assert distance_km(RESTAURANT, other) == pytest.approx(distance_km(other, RESTAURANT))

    def test_one_degree_of_latitude(self):
        # 2 * pi * 6371 / 360
        assert distance_km(Coordinates(0, 0), Coordinates(1, 0)) == pytest.approx(111.195, abs=1e-3)


class TestDeliveryFee:
    """Test tiered delivery fee"""

    @pytest.mark.parametrize("distance", [0.0, 0.3, 0.999, 1.0])
    def test_flat_fare_inside_free_radius(self, distance):
        assert delivery_fee(distance) == 5.0

    @pytest.mark.parametrize("distance, expected", [
        (1.5, 6.0),
        (2.0, 7.0),
        (10.0, 23.0),
    ])
    def test_per_km_rate_beyond_free_radius(self, distance, expected):
        assert delivery_fee(distance) == pytest.approx(expected)

    def test_strictly_increasing_beyond_free_radius(self):
        fees = [delivery_fee(1.0 + step * 0.25) for step in range(1, 20)]
        assert all(a < b for a, b in zip(fees, fees[1:]))

    def test_never_negative(self):
        assert delivery_fee(0.0, base_fare=0.0) == 0.0

    def test_custom_parameters(self):
        assert delivery_fee(3.0, base_fare=2.0, free_radius=2.0, per_km_rate=1.5) == pytest.approx(3.5)


class TestDeliveryService:
    """Test cart quoting"""

    def test_quote_at_restaurant(self, products):
        service = DeliveryService(origin=RESTAURANT)
        cart = Cart(user_id=1).with_product(products[0])

        quote = service.quote(cart, Coordinates(-16.389, -68.119))

        assert quote.distance_km < 0.1
        assert quote.subtotal == 10.0
        assert quote.delivery_fee == 5.0
        assert quote.total == 15.0

    def test_quote_far_away(self, products):
        service = DeliveryService(origin=Coordinates(0, 0))
        cart = Cart(user_id=1).with_product(products[1])

        quote = service.quote(cart, Coordinates(0.1, 0))

        assert quote.delivery_fee == pytest.approx(5.0 + (quote.distance_km - 1.0) * 2.0)
        assert quote.total == pytest.approx(4.5 + quote.delivery_fee)

    def test_from_config(self):
        config = SimpleNamespace(
            restaurant_lat=1.0,
            restaurant_lng=2.0,
            delivery_base_fare=3.0,
            delivery_free_radius_km=0.5,
            delivery_per_km_rate=1.0,
        )
        service = DeliveryService.from_config(config)
        assert service.origin == Coordinates(1.0, 2.0)
        assert service.calculate_delivery_charge(Coordinates(1.0, 2.0)) == (0.0, 3.0)
