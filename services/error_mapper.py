# -*- coding: utf-8 -*-
"""Centralized error message mapper."""

from services.translation_manager import tr
from services.exceptions import (
    ApiException, ValidationException, NetworkException,
    LocationResolutionError, TimezoneResolutionError, SubjectCreationError,
    PhotoUploadError, InsufficientCreditsError
)
from utils.logger import get_logger

logger = get_logger(__name__)

INSUFFICIENT_CREDITS_CODE = "INSUFFICIENT_CREDITS"


def map_api_error(error: ApiException) -> str:
    """Map API exception to generic user-friendly message.

    Technical details are logged only - never shown to the user.
    """
    status = error.status_code

    if status == 400:
        details = _extract_validation_details(error.response_data)
        if details:
            logger.warning(f"API validation error (400): {details}")
    elif status:
        logger.warning(f"API error ({status}): {error}")

    if is_insufficient_credits_error(error):
        return tr("error.credits.insufficient")

    return tr("error.api.connection")


def map_network_error(error: NetworkException) -> str:
    """Map network exception to user-friendly translated message."""
    msg = str(error.original_error) if error.original_error else ""
    if "timeout" in msg.lower() or "timed out" in msg.lower():
        return tr("error.api.timeout")
    return tr("error.api.connection")


def map_exception(error: Exception, context: str = None) -> str:
    """Map any exception to a user-friendly message.

    Technical details are logged only - never shown to the user.
    """
    if isinstance(error, ApiException):
        if not error.context and context:
            error.context = context
        return map_api_error(error)

    if isinstance(error, NetworkException):
        return map_network_error(error)

    if isinstance(error, ValidationException):
        if error.errors:
            logger.warning(f"Validation error: {error.errors}")
            return "\n".join(error.errors)
        return error.message

    if isinstance(error, LocationResolutionError):
        logger.warning(f"Location resolution failed: {error}")
        return tr("error.location.failed")

    if isinstance(error, TimezoneResolutionError):
        logger.warning(f"Timezone resolution failed: {error}")
        return tr("error.timezone.failed")

    if isinstance(error, SubjectCreationError):
        if isinstance(error.original_error, (ApiException, NetworkException)):
            return map_exception(error.original_error, context)
        logger.warning(f"Subject creation failed: {error}")
        return tr("error.subject.create_failed")

    if isinstance(error, PhotoUploadError):
        logger.warning(f"Photo upload failed: {error}")
        original = error.original_error
        if isinstance(original, ApiException) and original.status_code == 400:
            return tr("photo.invalid_request")
        return tr("photo.upload_failed")

    if isinstance(error, InsufficientCreditsError):
        return tr("error.credits.insufficient")

    # Log unexpected errors
    logger.warning(f"Unexpected error: {error}")
    return tr("error.unexpected")


def is_insufficient_credits_error(error: Exception) -> bool:
    """Backend 402 or an INSUFFICIENT_CREDITS error body."""
    if isinstance(error, InsufficientCreditsError):
        return True
    if isinstance(error, SubjectCreationError):
        return is_insufficient_credits_error(error.original_error)
    if not isinstance(error, ApiException):
        return False
    if error.status_code == 402:
        return True
    data = error.response_data or {}
    return INSUFFICIENT_CREDITS_CODE in (data.get("error"), data.get("code"))


def _extract_validation_details(response_data: dict) -> str:
    """Extract validation error details from API response."""
    if not response_data:
        return ""

    errors = response_data.get("errors", {})
    if isinstance(errors, dict):
        lines = []
        for field, messages in errors.items():
            if isinstance(messages, list):
                for msg in messages:
                    lines.append(f"• {field}: {msg}")
            else:
                lines.append(f"• {field}: {messages}")
        return "\n".join(lines)

    if isinstance(errors, list):
        return "\n".join(f"• {e}" for e in errors)

    message = response_data.get("error") or response_data.get("message", "")
    if message:
        return message

    return ""
