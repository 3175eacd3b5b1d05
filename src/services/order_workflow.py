"""
Order workflow: authenticate, capture location, browse, cart, quote,
confirm and track.

Each public method is one conversation step. A step reads the user's
session and cart, talks to the commerce backend, and commits new session
and cart values only after every backend call of the step succeeded.
Callers must serialise steps per user.
"""

import logging
from typing import List

from src.domain.entities.session_entity import Session, SessionState
from src.domain.repositories.session_repository import SessionRepository
from src.domain.value_objects.coordinates import Coordinates
from src.dtos import Reply
from src.infrastructure.services.commerce_backend_client import CommerceBackendClient
from src.infrastructure.utilities.exceptions import (
    PreconditionError,
    ReferenceNotFoundError,
    SessionExpiredError,
)
from src.keyboards import menu_keyboards
from src.services.cart_service import CartService
from src.services.delivery_service import DeliveryService
from src.utils import text_formatter

logger = logging.getLogger(__name__)


class OrderWorkflow:
    """Per-user conversation state machine"""

    def __init__(
        self,
        session_repository: SessionRepository,
        cart_service: CartService,
        backend: CommerceBackendClient,
        delivery_service: DeliveryService,
        orders_page_size: int = 5,
    ):
        self._sessions = session_repository
        self._carts = cart_service
        self._backend = backend
        self._delivery = delivery_service
        self._orders_page_size = orders_page_size

    async def _require_session(self, user_id: int) -> Session:
        session = await self._sessions.get(user_id)
        if session is None or not session.is_authenticated:
            raise SessionExpiredError(user_id)
        return session

    async def _commit(self, session: Session) -> None:
        await self._sessions.upsert(session.user_id, session)

    @staticmethod
    def _main_menu(session: Session) -> Reply:
        return Reply(
            text_formatter.format_main_menu(session.display_name),
            menu_keyboards.get_main_menu_keyboard(),
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def start(self, user_id: int, first_name: str, last_name: str) -> List[Reply]:
        """Authenticate with the backend and open (or refresh) the session"""
        login = await self._backend.login(user_id, first_name, last_name)

        existing = await self._sessions.get(user_id)
        if existing is None:
            session = Session(
                user_id=user_id,
                display_name=first_name,
                customer_id=login.customer.id,
                access_token=login.access_token,
                state=SessionState.MAIN_MENU,
            )
            logger.info("Opened session for user %s (customer %s)", user_id, login.customer.id)
        else:
            if existing.customer_id != login.customer.id:
                logger.warning(
                    "Backend returned customer %s for user %s, keeping %s",
                    login.customer.id,
                    user_id,
                    existing.customer_id,
                )
            session = existing.evolve(access_token=login.access_token, state=SessionState.MAIN_MENU)
            logger.info("Refreshed session for user %s", user_id)

        await self._carts.ensure_cart(user_id)
        await self._commit(session)
        return [self._main_menu(session)]

    async def request_location(self, user_id: int) -> List[Reply]:
        session = await self._require_session(user_id)
        await self._commit(session.evolve(state=SessionState.AWAITING_LOCATION))
        return [Reply(text_formatter.LOCATION_PROMPT_TEXT, request_location=True)]

    async def share_location(self, user_id: int, location: Coordinates) -> List[Reply]:
        """Persist the delivery address and attach it to the customer"""
        session = await self._require_session(user_id)

        address_id = await self._backend.create_address(session.access_token, location)
        await self._backend.associate_address(session.access_token, session.customer_id, address_id)

        await self._commit(
            session.evolve(
                delivery_location=location,
                delivery_address_id=address_id,
                pending_order_quote=None,
                state=SessionState.MAIN_MENU,
            )
        )
        logger.info("Saved delivery address %s for user %s", address_id, user_id)
        return [
            Reply(
                text_formatter.format_location_saved(location),
                menu_keyboards.get_location_saved_keyboard(),
            )
        ]

    async def view_products(self, user_id: int) -> List[Reply]:
        """Fetch the catalog and remember it for add-to-cart lookups"""
        session = await self._require_session(user_id)

        products = await self._backend.list_products()
        if not products:
            logger.info("Catalog is empty for user %s", user_id)
            await self._commit(session.evolve(catalog_snapshot=()))
            return [Reply(text_formatter.NO_PRODUCTS_TEXT)]

        await self._commit(
            session.evolve(catalog_snapshot=tuple(products), state=SessionState.VIEWING_PRODUCTS)
        )
        return [
            Reply(
                text_formatter.format_product_list(products),
                menu_keyboards.get_products_keyboard(products),
            )
        ]

    async def add_to_cart(self, user_id: int, product_id: int) -> List[Reply]:
        """Add one unit of a product from the last listing shown"""
        session = await self._require_session(user_id)

        product = session.find_product(product_id)
        if product is None:
            raise ReferenceNotFoundError(
                f"Product {product_id} is not in the last catalog shown to user {user_id}",
                text_formatter.VIEW_PRODUCTS_FIRST_TEXT,
            )

        await self._carts.add_item(user_id, product)
        if session.pending_order_quote is not None:
            await self._commit(session.evolve(pending_order_quote=None))
        return [Reply(text_formatter.format_added_to_cart(product))]

    async def view_cart(self, user_id: int) -> List[Reply]:
        """Quote the cart against the delivery location"""
        session = await self._require_session(user_id)
        cart = await self._carts.get_cart(user_id)

        if cart.is_empty:
            raise PreconditionError(f"Cart of user {user_id} is empty", text_formatter.CART_EMPTY_TEXT)
        if session.delivery_location is None:
            raise PreconditionError(
                f"User {user_id} has no delivery location", text_formatter.LOCATION_REQUIRED_TEXT
            )

        quote = self._delivery.quote(cart, session.delivery_location)
        await self._commit(session.evolve(pending_order_quote=quote, state=SessionState.VIEWING_CART))
        return [Reply(text_formatter.format_cart(cart, quote), menu_keyboards.get_cart_keyboard())]

    async def confirm_order(self, user_id: int) -> List[Reply]:
        """Submit the quoted cart as an order"""
        session = await self._require_session(user_id)
        cart = await self._carts.get_cart(user_id)
        quote = session.pending_order_quote

        if cart.is_empty or not session.has_delivery_address or quote is None:
            raise PreconditionError(
                f"Checkout preconditions not met for user {user_id}",
                text_formatter.CHECKOUT_INCOMPLETE_TEXT,
            )

        pending = session.evolve(state=SessionState.AWAITING_CONFIRMATION)
        order_id = await self._backend.create_order(
            pending.access_token,
            pending.customer_id,
            pending.delivery_address_id,
            quote.delivery_fee,
            cart.lines,
        )

        await self._carts.clear_cart(user_id)
        await self._commit(
            pending.evolve(
                last_order_id=order_id,
                pending_order_quote=None,
                state=SessionState.MAIN_MENU,
            )
        )
        logger.info("Order %s placed for user %s, total %.2f", order_id, user_id, quote.total)
        return [
            Reply(
                text_formatter.format_order_confirmed(order_id, quote.total),
                menu_keyboards.get_order_confirmed_keyboard(order_id),
            )
        ]

    async def clear_cart(self, user_id: int) -> List[Reply]:
        session = await self._require_session(user_id)
        await self._carts.clear_cart(user_id)
        session = session.evolve(pending_order_quote=None, state=SessionState.MAIN_MENU)
        await self._commit(session)
        return [Reply(text_formatter.CART_CLEARED_TEXT), self._main_menu(session)]

    async def view_orders(self, user_id: int) -> List[Reply]:
        """List the customer's most recent orders"""
        session = await self._require_session(user_id)

        orders = await self._backend.list_customer_orders(session.access_token, session.customer_id)
        await self._commit(session.evolve(state=SessionState.MAIN_MENU))
        if not orders:
            return [Reply(text_formatter.NO_ORDERS_TEXT)]

        page = orders[: self._orders_page_size]
        return [Reply(text_formatter.format_orders(page), menu_keyboards.get_orders_keyboard(page))]

    async def track_order(self, user_id: int, order_id: int) -> List[Reply]:
        session = await self._require_session(user_id)

        order = await self._backend.get_order(session.access_token, order_id)
        await self._commit(session.evolve(state=SessionState.TRACKING))
        return [
            Reply(
                text_formatter.format_tracking(order),
                menu_keyboards.get_tracking_keyboard(order.id),
            )
        ]

    async def back_to_menu(self, user_id: int) -> List[Reply]:
        session = await self._require_session(user_id)
        session = session.evolve(state=SessionState.MAIN_MENU)
        await self._commit(session)
        return [self._main_menu(session)]
