"""
Webhook web service for the MyFood bot.

Telegram posts updates to /webhook; every post is answered with 200 so
Telegram does not redeliver, and processing errors are only logged.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from telegram import Update
from telegram.ext import Application

from src.api.health_checks import get_health_status
from src.infrastructure.logging.logging_config import get_structured_logger
from src.infrastructure.services.commerce_backend_client import CommerceBackendClient
from src.infrastructure.utilities.constants import TelegramSettings

logger = get_structured_logger(__name__)


async def register_webhook(application: Application, webhook_url: Optional[str]) -> bool:
    """Point Telegram at our webhook; failure is logged, not fatal"""
    if not webhook_url:
        logger.warning("webhook_url_not_set", detail="Bot will not receive updates")
        return False

    endpoint = webhook_url.rstrip("/") + TelegramSettings.WEBHOOK_PATH
    try:
        await application.bot.set_webhook(
            url=endpoint, allowed_updates=list(TelegramSettings.ALLOWED_UPDATES)
        )
    except Exception as e:  # pylint: disable=broad-except
        logger.error("webhook_registration_failed", endpoint=endpoint, error=str(e))
        return False

    logger.info("webhook_registered", endpoint=endpoint)
    return True


def create_app(
    application: Application,
    backend: Optional[CommerceBackendClient] = None,
    webhook_url: Optional[str] = None,
) -> FastAPI:
    """Build the FastAPI app serving the webhook and health endpoints"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await application.initialize()
        await application.start()
        await register_webhook(application, webhook_url)
        logger.info("bot_started")

        yield

        try:
            await application.stop()
            await application.shutdown()
        finally:
            if backend is not None:
                await backend.aclose()
        logger.info("bot_stopped")

    app = FastAPI(title="MyFood Bot", lifespan=lifespan)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return await get_health_status()

    @app.post(TelegramSettings.WEBHOOK_PATH)
    async def webhook_handler(request: Request):
        """Handle incoming webhook updates from Telegram"""
        try:
            update_data = await request.json()
            update = Update.de_json(update_data, application.bot)
            await application.process_update(update)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("webhook_processing_failed", error=str(e), exc_info=True)
        return {"ok": True}

    return app
