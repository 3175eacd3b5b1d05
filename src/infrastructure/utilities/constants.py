"""
Application constants for the MyFood bot

Centralizes magic numbers and hard-coded values.
"""

from typing import Final


class GeoSettings:
    """Geodesy constants"""

    EARTH_RADIUS_KM: Final[float] = 6371.0


class HttpSettings:
    """Commerce backend HTTP settings"""

    SUCCESS_STATUSES: Final[frozenset] = frozenset({200, 201})
    NOT_FOUND: Final[int] = 404
    MAX_CONNECTIONS: Final[int] = 10
    MAX_KEEPALIVE_CONNECTIONS: Final[int] = 5


class TelegramSettings:
    """Telegram update settings"""

    ALLOWED_UPDATES: Final[tuple] = ("message", "callback_query")
    WEBHOOK_PATH: Final[str] = "/webhook"
    PARSE_MODE: Final[str] = "HTML"


class AddressDefaults:
    """Values sent with every saved delivery address"""

    NAME: Final[str] = "Address"
    DESCRIPTION: Final[str] = "Delivery location"


class LoginDefaults:
    """Values used when the platform does not provide them"""

    LAST_NAME: Final[str] = "User"
    DISPLAY_NAME: Final[str] = "User"


# Logging configuration constants
class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB

    MAIN_LOG_BACKUP_COUNT: Final[int] = 10
    ERROR_LOG_BACKUP_COUNT: Final[int] = 10


class FileSettings:
    """Log file names"""

    LOGS_DIR: Final[str] = "logs"
    MAIN_LOG_FILE: Final[str] = "myfood_bot.log"
    ERROR_LOG_FILE: Final[str] = "errors.log"
