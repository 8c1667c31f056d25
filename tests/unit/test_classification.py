"""
Tests for classifying failed API attempts.
"""

import asyncio
from unittest.mock import MagicMock

import discord
import pytest

from autoretry.types.models import ErrorKind
from autoretry.utils.error_handling.classification import classify_error
from tests.mocks import api_error, rate_limited, server_error


def http_response(status: int, reason: str = "Error") -> MagicMock:
    """Create a mock aiohttp response for discord.py exceptions."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    return response


class TestStructuredApiErrors:
    """Tests for APIError classification."""

    def test_rate_limited(self):
        """An error with retry_after is a rate limit."""
        error = rate_limited(15)

        classified = classify_error(error)

        assert classified.kind is ErrorKind.RATE_LIMITED
        assert classified.retry_after == 15
        assert classified.code == 429
        assert classified.error is error
        assert classified.is_server_error is False

    @pytest.mark.parametrize("code", [500, 502, 503, 599])
    def test_server_error(self, code):
        """Codes of 500 and above are server errors."""
        classified = classify_error(server_error(code))

        assert classified.kind is ErrorKind.SERVER_ERROR
        assert classified.is_server_error is True
        assert classified.retry_after is None

    @pytest.mark.parametrize("code", [400, 401, 403, 404, 409, 499])
    def test_other_api_error(self, code):
        """Client errors without retry_after take the fast retry path."""
        classified = classify_error(api_error(code, "Bad Request"))

        assert classified.kind is ErrorKind.OTHER_API_ERROR
        assert classified.description == "Bad Request"
        assert classified.is_api_error is True

    def test_server_error_with_retry_after(self):
        """retry_after wins over the server error kind but the flag is kept."""
        classified = classify_error(api_error(503, "Unavailable", retry_after=2))

        assert classified.kind is ErrorKind.RATE_LIMITED
        assert classified.is_server_error is True


@pytest.mark.discord_api
class TestDiscordErrors:
    """Tests for discord.py error classification."""

    def test_rate_limited(self):
        """discord.RateLimited carries its retry_after."""
        classified = classify_error(discord.RateLimited(12.5))

        assert classified.kind is ErrorKind.RATE_LIMITED
        assert classified.retry_after == 12.5
        assert classified.code == 429

    def test_server_error(self):
        """A 5xx discord.py HTTP error is a server error."""
        error = discord.DiscordServerError(http_response(503, "Service Unavailable"), "upstream")

        classified = classify_error(error)

        assert classified.kind is ErrorKind.SERVER_ERROR
        assert classified.code == 503
        assert classified.description == "upstream"

    def test_client_error(self):
        """A 4xx discord.py HTTP error is another API error."""
        error = discord.Forbidden(
            http_response(403, "Forbidden"),
            {"code": 50013, "message": "Missing Permissions"}
        )

        classified = classify_error(error)

        assert classified.kind is ErrorKind.OTHER_API_ERROR
        assert classified.code == 403
        assert classified.description == "Missing Permissions"


class TestNotRetryable:
    """Tests for errors the API did not report."""

    @pytest.mark.parametrize("error", [
        ConnectionError("reset"),
        asyncio.TimeoutError(),
        KeyError("result"),
        discord.ClientException("not connected"),
    ])
    def test_not_retryable(self, error):
        """Anything but a structured API error is not retryable."""
        classified = classify_error(error)

        assert classified.kind is ErrorKind.NOT_RETRYABLE
        assert classified.is_api_error is False
        assert classified.code is None
        assert classified.error is error
