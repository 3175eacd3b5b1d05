"""
Tests for the commerce backend client
"""

import asyncio
import json

import httpx
import pytest

from src.domain.entities.cart_entity import Cart
from src.domain.value_objects.coordinates import Coordinates
from src.infrastructure.services.commerce_backend_client import CommerceBackendClient
from src.infrastructure.utilities.exceptions import AuthError, BackendError, ReferenceNotFoundError


class Recorder:
    """MockTransport handler answering with a canned response"""

    def __init__(self, status_code=200, payload=None, content=None, exc=None):
        self.status_code = status_code
        self.payload = payload
        self.content = content
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(f"simulated {self.exc.__name__}", request=request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        if self.payload is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def make_client():
    def factory(recorder: Recorder) -> CommerceBackendClient:
        return CommerceBackendClient(
            "http://backend.test/", timeout_seconds=1.0, transport=httpx.MockTransport(recorder)
        )

    return factory


class TestLogin:
    """Test POST /auth/telegram-login"""

    async def test_login_success(self, make_client):
        recorder = Recorder(payload={"access_token": "t1", "customer": {"id": 42, "name": "Ana"}})
        client = make_client(recorder)

        result = await client.login(1001, "Ana", "Perez")

        assert result.access_token == "t1"
        assert result.customer.id == 42
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/auth/telegram-login"
        assert recorder.last_json == {"telegramId": "1001", "name": "Ana", "lastName": "Perez"}
        assert "Authorization" not in recorder.last.headers
        await client.aclose()

    async def test_login_rejected(self, make_client):
        client = make_client(Recorder(status_code=401, payload={"message": "Unauthorized"}))

        with pytest.raises(AuthError) as exc_info:
            await client.login(1001, "Ana", "Perez")

        assert exc_info.value.status_code == 401
        await client.aclose()

    async def test_login_transport_failure(self, make_client):
        client = make_client(Recorder(exc=httpx.ConnectError))

        with pytest.raises(BackendError):
            await client.login(1001, "Ana", "Perez")
        await client.aclose()

    async def test_login_missing_token(self, make_client):
        client = make_client(Recorder(payload={"customer": {"id": 42}}))

        with pytest.raises(BackendError):
            await client.login(1001, "Ana", "Perez")
        await client.aclose()


class TestCatalog:
    """Test GET /products"""

    async def test_list_products(self, make_client):
        client = make_client(Recorder(payload=[
            {"id": 1, "name": "Salteña", "price": 10, "currency": "BOB", "description": "Beef"},
            {"id": 2, "name": "Api", "price": "4.5", "currency": "BOB", "description": None},
        ]))

        products = await client.list_products()

        assert [p.id for p in products] == [1, 2]
        assert products[1].price == 4.5
        assert products[1].description == ""
        await client.aclose()

    async def test_unexpected_shape(self, make_client):
        client = make_client(Recorder(payload={"items": []}))

        with pytest.raises(BackendError):
            await client.list_products()
        await client.aclose()

    async def test_non_json_body(self, make_client):
        client = make_client(Recorder(content=b"<html>oops</html>"))

        with pytest.raises(BackendError):
            await client.list_products()
        await client.aclose()

    async def test_server_error(self, make_client):
        client = make_client(Recorder(status_code=500, payload={"error": "down"}))

        with pytest.raises(BackendError) as exc_info:
            await client.list_products()

        assert exc_info.value.status_code == 500
        assert exc_info.value.operation == "list_products"
        await client.aclose()

    async def test_timeout(self, make_client):
        client = make_client(Recorder(exc=httpx.ReadTimeout))

        with pytest.raises(BackendError) as exc_info:
            await client.list_products()

        assert "timed out" in str(exc_info.value)
        await client.aclose()

    async def test_slow_response_hits_total_deadline(self):
        async def slow_backend(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1.0)
            return httpx.Response(200, json=[])

        client = CommerceBackendClient(
            "http://backend.test", timeout_seconds=0.05, transport=httpx.MockTransport(slow_backend)
        )

        with pytest.raises(BackendError) as exc_info:
            await client.list_products()

        assert "timed out" in str(exc_info.value)
        assert exc_info.value.operation == "list_products"
        await client.aclose()

    async def test_accepted_is_not_success(self, make_client):
        client = make_client(Recorder(status_code=202, payload=[]))

        with pytest.raises(BackendError):
            await client.list_products()
        await client.aclose()


class TestAddresses:
    """Test address endpoints"""

    async def test_create_address(self, make_client):
        recorder = Recorder(status_code=201, payload={"id": 7})
        client = make_client(recorder)

        address_id = await client.create_address("t1", Coordinates(-16.389, -68.119))

        assert address_id == 7
        assert recorder.last.url.path == "/addresses"
        assert recorder.last.headers["Authorization"] == "Bearer t1"
        assert recorder.last_json == {
            "name": "Address",
            "description": "Delivery location",
            "coordinateX": -16.389,
            "coordinateY": -68.119,
        }
        await client.aclose()

    async def test_associate_address_empty_body(self, make_client):
        recorder = Recorder(status_code=201)
        client = make_client(recorder)

        assert await client.associate_address("t1", 42, 7) is None
        assert recorder.last.url.path == "/customers/42/addresses/7"
        await client.aclose()

    async def test_associate_address_failure(self, make_client):
        client = make_client(Recorder(status_code=400, payload={"message": "bad"}))

        with pytest.raises(BackendError):
            await client.associate_address("t1", 42, 7)
        await client.aclose()


class TestOrders:
    """Test order endpoints"""

    async def test_create_order(self, make_client, products):
        recorder = Recorder(status_code=201, payload={"id": 555})
        client = make_client(recorder)
        cart = Cart(user_id=1).with_product(products[0]).with_product(products[0]).with_product(products[1])

        order_id = await client.create_order("t1", 42, 7, 5.0, cart.lines)

        assert order_id == 555
        assert recorder.last_json == {
            "customerId": 42,
            "addressId": 7,
            "deliveryPrice": 5.0,
            "products": [{"productId": 1, "quantity": 2}, {"productId": 2, "quantity": 1}],
        }
        await client.aclose()

    async def test_list_customer_orders(self, make_client):
        recorder = Recorder(payload=[
            {"id": 1, "total": 15, "orderStatus": {"name": "Delivered"}, "date": "2024-03-01T10:00:00Z"},
            {"id": 2, "total": 20},
        ])
        client = make_client(recorder)

        orders = await client.list_customer_orders("t1", 42)

        assert recorder.last.url.path == "/orders/customer/42"
        assert orders[0].status_name == "Delivered"
        assert orders[0].date.day == 1
        assert orders[1].status_name is None
        await client.aclose()

    async def test_get_order(self, make_client):
        client = make_client(Recorder(payload={
            "id": 555,
            "total": 15,
            "orderStatus": {"name": "On the way"},
            "deliveries": [{"driver": {"name": "Luis", "lastName": "Quispe", "isAvailable": True}}],
            "address": {"coordinateX": -16.389, "coordinateY": -68.119},
        }))

        order = await client.get_order("t1", 555)

        assert order.driver.last_name == "Quispe"
        assert order.driver.is_available
        assert order.address.coordinate_x == -16.389
        await client.aclose()

    async def test_get_order_without_deliveries(self, make_client):
        client = make_client(Recorder(payload={"id": 555, "total": 15}))

        order = await client.get_order("t1", 555)

        assert order.driver is None
        await client.aclose()

    async def test_get_missing_order(self, make_client):
        client = make_client(Recorder(status_code=404, payload={"message": "not found"}))

        with pytest.raises(ReferenceNotFoundError):
            await client.get_order("t1", 9)
        await client.aclose()
