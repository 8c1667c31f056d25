"""
Outbound-call pipeline for a Bot API.

``APIClient`` sends method calls to the API over aiohttp and lets
transformers such as AutoRetry wrap every call.
"""

import logging
from typing import Any, List, Optional, Protocol

import aiohttp

from autoretry.core.exceptions import APIError
from autoretry.types.models import APICaller, APIResult, Payload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.telegram.org"


class Transformer(Protocol):
    """Middleware that can wrap an outbound API call."""

    async def transform(self, call: APICaller, method: str, payload: Payload) -> APIResult:
        ...


class APIClient:
    """
    Client that runs API calls through a chain of transformers.

    Transformers are applied in registration order; the first one
    registered is the outermost.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0
    ):
        """
        Initialize the client.

        Args:
            token: Bot token used in the method URL
            base_url: API server URL
            session: Optional aiohttp session to use
            timeout: Total timeout per request in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session
        self.created_session = session is None
        self._transformers: List[Transformer] = []

    @property
    def transformers(self) -> List[Transformer]:
        return list(self._transformers)

    def use(self, transformer: Transformer) -> 'APIClient':
        """Register a transformer for all subsequent calls."""
        self._transformers.append(transformer)
        return self

    def method_url(self, method: str) -> str:
        return f"{self.base_url}/bot{self.token}/{method}"

    async def call(self, method: str, payload: Optional[Payload] = None) -> APIResult:
        """
        Call an API method through the transformer chain.

        Args:
            method: API method name, e.g. ``sendMessage``
            payload: Method parameters

        Returns:
            APIResult: Decoded response body
        """
        caller = self._build_caller()
        return await caller(method, payload or {})

    def _build_caller(self) -> APICaller:
        caller: APICaller = self.send
        for transformer in reversed(self._transformers):
            caller = self._bind(transformer, caller)
        return caller

    @staticmethod
    def _bind(transformer: Transformer, inner: APICaller) -> APICaller:
        async def transformed(method: str, payload: Payload) -> APIResult:
            return await transformer.transform(inner, method, payload)
        return transformed

    async def send(self, method: str, payload: Payload) -> APIResult:
        """
        Perform one HTTP request for ``method``.

        Raises:
            APIError: If the API answers with an error body
            aiohttp.ClientError: On transport failures
        """
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self.created_session = True

        async with self.session.post(self.method_url(method), json=payload) as response:
            try:
                body: Any = await response.json(content_type=None)
            except ValueError:
                body = None

            # Gateways answer 5xx with HTML or empty bodies
            if not isinstance(body, dict):
                error = APIError(
                    response.status,
                    response.reason or 'Invalid response body',
                    method=method
                )
                logger.debug(
                    f"Unreadable response body for {method}: HTTP {response.status}",
                    extra={"method": method, "error_code": error.code, "status": response.status}
                )
                raise error

            if not body.get('ok', response.status < 400):
                error = APIError.from_response(body, method=method, status=response.status)
                logger.debug(
                    f"API error for {method}: {error.code} {error.description}",
                    extra={"method": method, "error_code": error.code, "status": response.status}
                )
                raise error

            return body

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self.session is not None and self.created_session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> 'APIClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
