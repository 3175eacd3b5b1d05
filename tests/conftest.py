"""
Test configuration and fixtures for the MyFood bot
"""

import os
from unittest.mock import AsyncMock, patch

import pytest

from src.bot.router import EventRouter
from src.config import reset_config
from src.domain.entities.product_entity import CatalogProduct
from src.domain.entities.session_entity import Session, SessionState
from src.domain.value_objects.coordinates import Coordinates
from src.dtos import LoginResult
from src.infrastructure.repositories.memory_cart_repository import InMemoryCartRepository
from src.infrastructure.repositories.memory_session_repository import InMemorySessionRepository
from src.infrastructure.services.commerce_backend_client import CommerceBackendClient
from src.infrastructure.services.telegram_gateway import TelegramGateway
from src.services.cart_service import CartService
from src.services.delivery_service import DeliveryService
from src.services.order_workflow import OrderWorkflow

USER_ID = 1001
RESTAURANT = Coordinates(-16.389385, -68.119294)


# Mock environment variables for testing
@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for testing"""
    test_env = {
        "BOT_TOKEN": "test_bot_token_123456789",
        "BACKEND_URL": "http://backend.test",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, test_env, clear=True):
        reset_config()
        yield test_env
    reset_config()


@pytest.fixture
def products():
    return [
        CatalogProduct(id=1, name="Salteña", price=10.0, currency="BOB", description="Beef"),
        CatalogProduct(id=2, name="Api", price=4.5, currency="BOB", description="Purple corn"),
    ]


@pytest.fixture
def gateway():
    """Messenger gateway double recording every send"""
    return AsyncMock(spec=TelegramGateway)


@pytest.fixture
def backend(products):
    """Commerce backend double with happy-path answers"""
    client = AsyncMock(spec=CommerceBackendClient)
    client.login.return_value = LoginResult.model_validate(
        {"access_token": "t1", "customer": {"id": 42}}
    )
    client.list_products.return_value = list(products)
    client.create_address.return_value = 7
    client.associate_address.return_value = None
    client.create_order.return_value = 555
    client.list_customer_orders.return_value = []
    return client


@pytest.fixture
def session_repository():
    return InMemorySessionRepository()


@pytest.fixture
def cart_repository():
    return InMemoryCartRepository()


@pytest.fixture
def cart_service(cart_repository):
    return CartService(cart_repository)


@pytest.fixture
def delivery_service():
    return DeliveryService(origin=RESTAURANT)


@pytest.fixture
def workflow(session_repository, cart_service, backend, delivery_service):
    return OrderWorkflow(session_repository, cart_service, backend, delivery_service)


@pytest.fixture
def router(workflow, gateway):
    return EventRouter(workflow, gateway)


@pytest.fixture
def authenticated_session():
    return Session(
        user_id=USER_ID,
        display_name="Ana",
        customer_id=42,
        access_token="t1",
        state=SessionState.MAIN_MENU,
    )


@pytest.fixture
async def logged_in(session_repository, cart_service, authenticated_session):
    """Store an authenticated session with an empty cart"""
    await session_repository.upsert(USER_ID, authenticated_session)
    await cart_service.ensure_cart(USER_ID)
    return authenticated_session
