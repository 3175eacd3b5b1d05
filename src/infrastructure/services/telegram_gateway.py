"""
Telegram Messenger Gateway

Sends text, inline keyboards and location prompts, and acknowledges
button presses, through the python-telegram-bot Bot API wrapper.
"""

import logging
from typing import Iterable, Optional, Sequence

from telegram import (
    Bot,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)
from telegram.error import TelegramError

from src.dtos import Button, Reply
from src.infrastructure.utilities.constants import TelegramSettings
from src.utils.text_formatter import LOCATION_PROMPT_TEXT

logger = logging.getLogger(__name__)

LOCATION_BUTTON_TEXT = "📍 Share location"


def build_inline_keyboard(buttons: Iterable[Sequence[Button]]) -> InlineKeyboardMarkup:
    """Convert rows of Buttons into a Telegram inline keyboard"""
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(button.text, callback_data=button.token) for button in row]
            for row in buttons
        ]
    )


class TelegramGateway:
    """Messenger gateway backed by the Telegram Bot API"""

    def __init__(self, bot: Bot):
        self._bot = bot

    async def send_text(self, chat_id: int, text: str, parse_mode: Optional[str] = TelegramSettings.PARSE_MODE) -> None:
        await self._bot.send_message(chat_id=chat_id, text=text, parse_mode=parse_mode)

    async def send_keyboard(self, chat_id: int, text: str, buttons: Iterable[Sequence[Button]]) -> None:
        await self._bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode=TelegramSettings.PARSE_MODE,
            reply_markup=build_inline_keyboard(buttons),
        )

    async def prompt_location_share(self, chat_id: int, text: str = LOCATION_PROMPT_TEXT) -> None:
        await self._bot.send_message(
            chat_id=chat_id,
            text=text,
            reply_markup=ReplyKeyboardMarkup(
                [[KeyboardButton(LOCATION_BUTTON_TEXT, request_location=True)]],
                one_time_keyboard=True,
                resize_keyboard=True,
            ),
        )

    async def acknowledge(self, callback_id: str) -> None:
        """Answer a callback query so the client clears its loading indicator"""
        try:
            await self._bot.answer_callback_query(callback_query_id=callback_id)
        except TelegramError as e:
            logger.warning("Failed to acknowledge callback %s: %s", callback_id, e)

    async def deliver(self, chat_id: int, reply: Reply) -> None:
        """Send one Reply using the matching primitive"""
        if reply.request_location:
            await self.prompt_location_share(chat_id, reply.text)
        elif reply.buttons:
            await self.send_keyboard(chat_id, reply.text, reply.buttons)
        else:
            await self.send_text(chat_id, reply.text)
