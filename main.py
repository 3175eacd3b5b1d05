#!/usr/bin/env python3
"""
Unified entry point for the MyFood Bot
Supports both local development (polling) and production deployment (webhook)
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from telegram.ext import Application

from src.bot.handlers import register_handlers
from src.config import get_config
from src.container import initialize_container
from src.infrastructure.logging.logging_config import ProductionLogger
from src.infrastructure.utilities.constants import TelegramSettings

logger = logging.getLogger(__name__)


def setup_bot() -> Application:
    """Setup and configure the bot application"""
    ProductionLogger.setup_logging()

    config = get_config()
    logger.info("Configuration loaded successfully (environment=%s)", config.environment)

    # Create application
    logger.info("Creating Telegram application...")
    application = Application.builder().token(config.bot_token).concurrent_updates(True).build()

    # Initialize container
    container = initialize_container(application.bot)
    logger.info("Dependency container initialized")

    # Register handlers
    register_handlers(application, container.get_event_router())
    logger.info("Handlers registered")

    return application


def run_polling() -> None:
    """Run bot in polling mode for local development"""
    print("🚀 Starting MyFood Bot in LOCAL DEVELOPMENT mode (polling)...")

    application = setup_bot()
    backend = initialize_container(application.bot).get_backend_client()

    print("✅ Bot started successfully!")
    print("📱 Send /start to your bot in Telegram to test it!")
    print("🛑 Press Ctrl+C to stop the bot")

    async def run_bot():
        await application.initialize()
        await application.start()
        await application.updater.start_polling(allowed_updates=list(TelegramSettings.ALLOWED_UPDATES))
        try:
            # Keep the bot running
            await asyncio.Event().wait()
        finally:
            await application.updater.stop()
            await application.stop()
            await application.shutdown()
            await backend.aclose()

    try:
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        print("\n🛑 Bot stopped by user")


def run_webhook() -> None:
    """Run bot in webhook mode for production deployment"""
    import uvicorn

    from src.main import create_app

    print("🚀 Starting MyFood Bot in PRODUCTION mode (webhook)...")

    config = get_config()
    application = setup_bot()
    backend = initialize_container(application.bot).get_backend_client()
    app = create_app(application, backend, config.webhook_url)

    logger.info("Starting FastAPI server on port %s", config.port)
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=config.log_level.lower())


def main() -> int:
    """Main entry point"""
    try:
        config = get_config()
    except Exception as e:  # pylint: disable=broad-except
        print(f"❌ Invalid configuration: {e}")
        print("Please set BOT_TOKEN (and BACKEND_URL) in your environment or .env file.")
        return 1

    should_use_webhook = config.webhook_mode or bool(config.webhook_url)
    print(f"Environment: {config.environment}")
    print(f"Webhook Mode: {should_use_webhook}")
    print(f"Backend: {config.backend_url}")

    try:
        if should_use_webhook:
            print("🌐 Running in WEBHOOK mode (production deployment)")
            run_webhook()
        else:
            print("🔄 Running in POLLING mode (local development)")
            run_polling()
    except Exception as e:  # pylint: disable=broad-except
        logger.exception("Failed to start bot: %s", e)
        print(f"❌ Failed to start bot: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
