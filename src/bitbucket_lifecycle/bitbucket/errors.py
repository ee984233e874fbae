"""Bitbucket API errors and how command handlers report them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from bitbucket_lifecycle.chat import error_message

if TYPE_CHECKING:
    from bitbucket_lifecycle.core.ports import MessageClient

logger = logging.getLogger(__name__)

BITBUCKET_VALIDATION_ERROR: Final = "BITBUCKET_VALIDATION_ERROR"
BITBUCKET_AUTHORIZATION_ERROR: Final = "BITBUCKET_AUTHORIZATION_ERROR"
BITBUCKET_REQUEST_FAILED: Final = "BITBUCKET_REQUEST_FAILED"


class BitbucketApiError(RuntimeError):
    """Raised for non-2xx responses and transport failures."""

    def __init__(self, http_code: int | None, message: str = "") -> None:
        super().__init__(message or f"Bitbucket request failed with HTTP {http_code}")
        self.http_code = http_code
        self.message = message


@dataclass(frozen=True, slots=True)
class ErrorClassification:
    """User-facing category of a failed Bitbucket call."""

    code: str
    text: str


ValidationError: Final = ErrorClassification(
    BITBUCKET_VALIDATION_ERROR,
    "The request contained errors.",
)
AuthorizationError: Final = ErrorClassification(
    BITBUCKET_AUTHORIZATION_ERROR,
    "You are not authorized to access the requested resource.",
)
GenericError: Final = ErrorClassification(
    BITBUCKET_REQUEST_FAILED,
    "Error occurred. Please contact support.",
)


def classify_error(err: BaseException) -> ErrorClassification | None:
    """Map an API failure onto a reportable category, or ``None`` when it is fatal."""
    http_code = getattr(err, "http_code", None)
    match http_code:
        case 400 | 422:
            return ValidationError
        case 403 | 404:
            return AuthorizationError
        case _:
            message = getattr(err, "message", None)
            if message is None:
                message = str(err)
            return GenericError if message else None


async def handle_error(
    title: str,
    err: BaseException,
    messages: MessageClient,
    *,
    message_id: str | None = None,
) -> dict[str, Any]:
    """Report a classified failure to the user; re-raise anything unclassified."""
    classification = classify_error(err)
    if classification is None:
        raise err

    logger.warning("%s failed: %s", title, err)
    await messages.respond(error_message(title, classification.text), message_id=message_id)
    return {
        "success": True,
        "code": classification.code,
        "message": classification.text,
    }


__all__ = [
    "BITBUCKET_AUTHORIZATION_ERROR",
    "BITBUCKET_REQUEST_FAILED",
    "BITBUCKET_VALIDATION_ERROR",
    "AuthorizationError",
    "BitbucketApiError",
    "ErrorClassification",
    "GenericError",
    "ValidationError",
    "classify_error",
    "handle_error",
]
