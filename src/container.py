"""
Simplified dependency injection container for the bot.
"""

import logging
from typing import Optional

from telegram import Bot

from src.bot.router import EventRouter
from src.config import Settings, get_config
from src.domain.repositories.cart_repository import CartRepository
from src.domain.repositories.session_repository import SessionRepository
from src.infrastructure.repositories.memory_cart_repository import InMemoryCartRepository
from src.infrastructure.repositories.memory_session_repository import InMemorySessionRepository
from src.infrastructure.services.commerce_backend_client import CommerceBackendClient
from src.infrastructure.services.telegram_gateway import TelegramGateway
from src.services.cart_service import CartService
from src.services.delivery_service import DeliveryService
from src.services.order_workflow import OrderWorkflow

logger = logging.getLogger(__name__)


class Container:
    """Simple dependency injection container"""

    _instance: Optional["Container"] = None
    _bot: Optional[Bot] = None

    def __new__(cls) -> "Container":
        if cls._instance is None:
            cls._instance = super(Container, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        """Initialize the container"""
        self.config: Settings = get_config()
        self.services = {}

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton and its bot"""
        cls._instance = None
        cls._bot = None

    def set_bot(self, bot: Bot) -> None:
        """Set the bot instance"""
        Container._bot = bot

    def get_bot(self) -> Optional[Bot]:
        """Get the bot instance"""
        return Container._bot

    def _get_or_create(self, name: str, factory):
        if name not in self.services:
            self.services[name] = factory()
        return self.services[name]

    def get_session_repository(self) -> SessionRepository:
        return self._get_or_create("session_repository", InMemorySessionRepository)

    def get_cart_repository(self) -> CartRepository:
        return self._get_or_create("cart_repository", InMemoryCartRepository)

    def get_cart_service(self) -> CartService:
        """Get cart service instance"""
        return self._get_or_create(
            "cart_service", lambda: CartService(self.get_cart_repository())
        )

    def get_delivery_service(self) -> DeliveryService:
        """Get delivery service instance"""
        return self._get_or_create(
            "delivery_service", lambda: DeliveryService.from_config(self.config)
        )

    def get_backend_client(self) -> CommerceBackendClient:
        """Get the commerce backend client"""
        return self._get_or_create(
            "backend_client",
            lambda: CommerceBackendClient(
                self.config.backend_url, self.config.backend_timeout_seconds
            ),
        )

    def get_gateway(self) -> TelegramGateway:
        """Get the messenger gateway; the bot must be set first"""
        bot = self.get_bot()
        if bot is None:
            raise RuntimeError("Bot instance not set on container")
        return self._get_or_create("gateway", lambda: TelegramGateway(bot))

    def get_order_workflow(self) -> OrderWorkflow:
        """Get the order workflow"""
        return self._get_or_create(
            "order_workflow",
            lambda: OrderWorkflow(
                self.get_session_repository(),
                self.get_cart_service(),
                self.get_backend_client(),
                self.get_delivery_service(),
                orders_page_size=self.config.orders_page_size,
            ),
        )

    def get_event_router(self) -> EventRouter:
        """Get the event router"""
        return self._get_or_create(
            "event_router",
            lambda: EventRouter(self.get_order_workflow(), self.get_gateway()),
        )

    def get_config(self) -> Settings:
        """Get configuration"""
        return self.config


def get_container() -> Container:
    """Get the global container instance"""
    return Container()


def initialize_container(bot: Bot) -> Container:
    """Initialize the container with bot instance"""
    container = get_container()
    container.set_bot(bot)
    logger.info("Container initialized with bot instance")
    return container
