"""
Menu handlers for the MyFood bot
"""

from telegram.ext import Application, CallbackQueryHandler

from src.bot.handlers.onboarding import make_update_handler
from src.bot.router import EventRouter


def register_menu_handlers(application: Application, router: EventRouter) -> None:
    """Register the inline button handler; tokens are decoded by the router"""
    application.add_handler(CallbackQueryHandler(make_update_handler(router)))
