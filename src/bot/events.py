"""
Normalised inbound chat events
"""

from dataclasses import dataclass
from typing import Optional, Union

from telegram import Update

from src.domain.value_objects.coordinates import Coordinates
from src.infrastructure.utilities.constants import LoginDefaults


@dataclass(frozen=True)
class StartCommand:
    """The user typed /start"""

    user_id: int
    chat_id: int
    first_name: str
    last_name: str


@dataclass(frozen=True)
class LocationShared:
    """The user shared a location"""

    user_id: int
    chat_id: int
    location: Coordinates


@dataclass(frozen=True)
class ButtonPressed:
    """The user pressed an inline button carrying an opaque token"""

    user_id: int
    chat_id: int
    callback_id: str
    token: Optional[str]


ChatEvent = Union[StartCommand, LocationShared, ButtonPressed]


def normalize_update(update: Update) -> Optional[ChatEvent]:
    """Turn a Telegram update into a ChatEvent; None when it is none of them"""
    query = update.callback_query
    if query is not None:
        chat_id = query.message.chat.id if query.message is not None else query.from_user.id
        return ButtonPressed(
            user_id=query.from_user.id,
            chat_id=chat_id,
            callback_id=query.id,
            token=query.data,
        )

    message = update.message
    if message is None or message.from_user is None:
        return None

    user = message.from_user
    if message.location is not None:
        return LocationShared(
            user_id=user.id,
            chat_id=message.chat.id,
            location=Coordinates(message.location.latitude, message.location.longitude),
        )

    # "/start <payload>" and "/start@botname" both count; the payload is ignored
    words = (message.text or "").split()
    if words and words[0].split("@")[0] == "/start":
        return StartCommand(
            user_id=user.id,
            chat_id=message.chat.id,
            first_name=user.first_name or LoginDefaults.DISPLAY_NAME,
            last_name=user.last_name or LoginDefaults.LAST_NAME,
        )
    return None
