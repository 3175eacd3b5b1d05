"""
Onboarding handlers for the MyFood bot: /start and shared locations
"""

import logging

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from src.bot.events import normalize_update
from src.bot.router import EventRouter

logger = logging.getLogger(__name__)


def make_update_handler(router: EventRouter):
    """Build a python-telegram-bot callback that forwards to the router"""

    async def handle_update(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        event = normalize_update(update)
        if event is None:
            logger.debug("Ignoring update %s", update.update_id)
            return
        await router.dispatch(event)

    return handle_update


def register_onboarding_handlers(application: Application, router: EventRouter) -> None:
    """Register /start and location handlers"""
    handle_update = make_update_handler(router)
    application.add_handler(CommandHandler("start", handle_update))
    application.add_handler(MessageHandler(filters.LOCATION, handle_update))
