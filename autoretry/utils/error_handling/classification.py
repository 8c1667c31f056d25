"""
Classification of failed API attempts.

Every exception caught by the retry loop is turned into a ClassifiedError
before any decision is made, so the loop dispatches on ``ErrorKind``
rather than on exception types. Structured Bot API errors and discord.py
HTTP errors are recognised as API errors; anything else is not retryable.
"""

from typing import Optional

import discord

from autoretry.core.exceptions import APIError
from autoretry.types.models import ClassifiedError, ErrorKind


def _kind_for(retry_after: Optional[float], is_server_error: bool) -> ErrorKind:
    if retry_after is not None:
        return ErrorKind.RATE_LIMITED
    if is_server_error:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.OTHER_API_ERROR


def classify_error(error: BaseException) -> ClassifiedError:
    """
    Classify an exception raised by a single API attempt.

    Args:
        error: Exception caught from the attempt

    Returns:
        ClassifiedError: Tagged view of the failure
    """
    if isinstance(error, APIError):
        retry_after = error.retry_after
        return ClassifiedError(
            kind=_kind_for(retry_after, error.is_server_error),
            error=error,
            code=error.code,
            description=error.description,
            retry_after=retry_after,
            is_server_error=error.is_server_error
        )

    # Raised by discord.py when a rate limit wait exceeds max_ratelimit_timeout
    if isinstance(error, discord.RateLimited):
        return ClassifiedError(
            kind=ErrorKind.RATE_LIMITED,
            error=error,
            code=429,
            description=str(error),
            retry_after=error.retry_after
        )

    if isinstance(error, discord.HTTPException):
        is_server_error = error.status >= 500
        return ClassifiedError(
            kind=_kind_for(None, is_server_error),
            error=error,
            code=error.status,
            description=error.text or str(error),
            is_server_error=is_server_error
        )

    return ClassifiedError(kind=ErrorKind.NOT_RETRYABLE, error=error)
