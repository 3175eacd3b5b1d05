"""
Event router: maps normalised chat events onto order workflow steps.

Steps for one user run strictly one at a time in arrival order; steps
for different users run concurrently.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Dict, List

from src.bot.actions import Action, ActionKind, parse_action_token
from src.bot.events import ButtonPressed, ChatEvent, LocationShared, StartCommand
from src.dtos import Reply
from src.infrastructure.logging.logging_config import PerformanceLogger
from src.infrastructure.utilities.exceptions import handle_error
from src.services.order_workflow import OrderWorkflow

logger = logging.getLogger(__name__)

StepHandler = Callable[[int, Action], Awaitable[List[Reply]]]


class UserLockRegistry:
    """One FIFO asyncio.Lock per user id"""

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}

    def lock_for(self, user_id: int) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, user_id: int):
        async with self.lock_for(user_id):
            yield

    def __len__(self) -> int:
        return len(self._locks)


class EventRouter:
    """Dispatches chat events to OrderWorkflow steps and delivers replies"""

    def __init__(self, workflow: OrderWorkflow, gateway, locks: UserLockRegistry = None):
        self._workflow = workflow
        self._gateway = gateway
        self._locks = locks or UserLockRegistry()
        self._action_handlers: Dict[ActionKind, StepHandler] = {
            ActionKind.SEND_LOCATION: lambda user_id, action: workflow.request_location(user_id),
            ActionKind.VIEW_PRODUCTS: lambda user_id, action: workflow.view_products(user_id),
            ActionKind.ADD_TO_CART: lambda user_id, action: workflow.add_to_cart(user_id, action.target_id),
            ActionKind.VIEW_CART: lambda user_id, action: workflow.view_cart(user_id),
            ActionKind.CONFIRM_ORDER: lambda user_id, action: workflow.confirm_order(user_id),
            ActionKind.CLEAR_CART: lambda user_id, action: workflow.clear_cart(user_id),
            ActionKind.VIEW_ORDERS: lambda user_id, action: workflow.view_orders(user_id),
            ActionKind.TRACK_ORDER: lambda user_id, action: workflow.track_order(user_id, action.target_id),
            ActionKind.BACK_TO_MENU: lambda user_id, action: workflow.back_to_menu(user_id),
        }
        missing = set(ActionKind) - set(self._action_handlers)
        if missing:
            raise RuntimeError(f"No handler for actions: {sorted(kind.name for kind in missing)}")

    async def dispatch(self, event: ChatEvent) -> None:
        """Handle one event; never raises"""
        if isinstance(event, StartCommand):
            await self._run(
                event.user_id,
                event.chat_id,
                "start",
                lambda: self._workflow.start(event.user_id, event.first_name, event.last_name),
            )
        elif isinstance(event, LocationShared):
            await self._run(
                event.user_id,
                event.chat_id,
                "share_location",
                lambda: self._workflow.share_location(event.user_id, event.location),
            )
        elif isinstance(event, ButtonPressed):
            try:
                await self._on_button(event)
            finally:
                await self._gateway.acknowledge(event.callback_id)
        else:
            logger.warning("Ignoring unsupported event %r", event)

    async def _on_button(self, event: ButtonPressed) -> None:
        action = parse_action_token(event.token)
        if action is None:
            logger.info("Ignoring unrecognised action token %r from user %s", event.token, event.user_id)
            return

        handler = self._action_handlers[action.kind]
        await self._run(
            event.user_id,
            event.chat_id,
            action.kind.name.lower(),
            lambda: handler(event.user_id, action),
        )

    async def _run(
        self,
        user_id: int,
        chat_id: int,
        operation: str,
        step: Callable[[], Awaitable[List[Reply]]],
    ) -> None:
        """Run one step under the user's lock and send its replies"""
        async with self._locks.hold(user_id):
            logger.info("▶️ STEP %s for user %s", operation, user_id, extra={"user_id": user_id})
            try:
                with PerformanceLogger(operation, logger, {"user_id": user_id}):
                    replies = await step()
                    for reply in replies:
                        await self._gateway.deliver(chat_id, reply)
            except Exception as e:  # pylint: disable=broad-except
                await handle_error(self._gateway, chat_id, e, operation, user_id=user_id)
