"""
Custom exceptions and error handling for the MyFood bot
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class MyFoodError(Exception):
    """Base exception for the MyFood bot"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or "❌ An error occurred. Please try again."
        self.error_code = error_code or "GENERAL_ERROR"


class AuthError(MyFoodError):
    """Backend rejected the login"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, "❌ Authentication error", "AUTH_ERROR")
        self.status_code = status_code


class BackendError(MyFoodError):
    """Backend call failed, timed out or answered with an unexpected shape"""

    def __init__(
        self,
        message: str,
        operation: str = None,
        status_code: Optional[int] = None,
        user_message: str = None,
    ):
        super().__init__(
            message,
            user_message or "❌ Our ordering service is not responding. Please try again.",
            "BACKEND_ERROR",
        )
        self.operation = operation
        self.status_code = status_code


class PreconditionError(MyFoodError):
    """Workflow invariant violated, e.g. confirming an empty cart"""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message, user_message or message, "PRECONDITION_ERROR")


class ReferenceNotFoundError(MyFoodError):
    """Action references a stale or unknown product or order id"""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message, user_message or message, "REFERENCE_ERROR")


class SessionExpiredError(MyFoodError):
    """Operation attempted without prior authentication"""

    def __init__(self, user_id: int):
        super().__init__(
            f"No active session for user {user_id}",
            "❌ Session expired. Use /start",
            "SESSION_EXPIRED",
        )
        self.user_id = user_id


async def handle_error(
    gateway,
    chat_id: int,
    error: Exception,
    operation: str = "unknown",
    user_id: Optional[int] = None,
) -> None:
    """
    Central error handler for every workflow step

    Logs the error and tells the user what happened. Never raises.
    """
    error_context = {
        "operation": operation,
        "chat_id": chat_id,
        "user_id": user_id,
        "error_type": type(error).__name__,
    }

    if isinstance(error, MyFoodError):
        logger.warning("Business error in %s: %s", operation, error, extra=error_context)
        user_message = error.user_message
    else:
        logger.error(
            "Unexpected error in %s: %s",
            operation,
            error,
            extra=error_context,
            exc_info=error,
        )
        user_message = "❌ Sorry, something went wrong. Please try again in a few minutes."

    try:
        await gateway.send_text(chat_id, user_message)
    except Exception as reply_error:  # pylint: disable=broad-except
        logger.error("Failed to send error message to %s: %s", chat_id, reply_error)
