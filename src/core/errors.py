"""Error types and Telegram API error classification."""

from enum import Enum
from typing import Literal


class ErrorCategory(Enum):
    """Categories of errors returned by the Telegram Bot API or the network."""

    MESSAGE_NOT_MODIFIED = "message_not_modified"
    MESSAGE_NOT_FOUND = "message_not_found"
    CHAT_NOT_FOUND = "chat_not_found"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


class DisplayError(RuntimeError):
    """The active message could neither be edited nor replaced by a new one."""


class InvalidCallbackError(ValueError):
    """A callback carried a parameter that does not fit the current document."""


PatternType = Literal["not_modified", "message_not_found", "chat_not_found", "forbidden", "rate_limited"]

_ERROR_PATTERNS: dict[PatternType, list[str]] = {
    "not_modified": ["message is not modified"],
    "message_not_found": [
        "message to edit not found",
        "message to delete not found",
        "message can't be edited",
        "message can't be deleted",
    ],
    "chat_not_found": ["chat not found"],
    "forbidden": ["bot was blocked by the user", "bot was kicked", "not enough rights"],
    "rate_limited": ["too many requests", "retry after"],
}

HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429


def _matches(description: str, pattern_type: PatternType) -> bool:
    """Return True if the description contains one of the configured phrases."""
    return any(phrase in description for phrase in _ERROR_PATTERNS[pattern_type])


def classify_telegram_error(*, status_code: int | None, description: str | None) -> ErrorCategory:
    """Classify a failed Bot API call.

    Args:
        status_code: HTTP status / Bot API ``error_code``, None if no response was received
        description: Bot API ``description`` or the exception text

    Returns:
        The matching ErrorCategory
    """
    if status_code is None:
        return ErrorCategory.NETWORK_ERROR

    text = (description or "").lower()

    if _matches(text, "not_modified"):
        return ErrorCategory.MESSAGE_NOT_MODIFIED
    if _matches(text, "message_not_found"):
        return ErrorCategory.MESSAGE_NOT_FOUND
    if _matches(text, "chat_not_found"):
        return ErrorCategory.CHAT_NOT_FOUND
    if status_code == HTTP_TOO_MANY_REQUESTS or _matches(text, "rate_limited"):
        return ErrorCategory.RATE_LIMITED
    if status_code == HTTP_FORBIDDEN or _matches(text, "forbidden"):
        return ErrorCategory.FORBIDDEN

    return ErrorCategory.UNKNOWN
