"""
Telegram bot handlers
"""

from telegram.ext import Application

from src.bot.router import EventRouter

from .menu import register_menu_handlers
from .onboarding import register_onboarding_handlers


def register_handlers(application: Application, router: EventRouter) -> None:
    """Register all bot handlers"""
    register_onboarding_handlers(application, router)
    register_menu_handlers(application, router)
