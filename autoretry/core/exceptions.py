"""
Custom exception classes for the auto-retry middleware.

This module defines the exceptions raised by the retry layer and the
structured API error that remote Bot API calls fail with. Each exception
carries contextual information to aid in debugging and provides a
consistent error reporting interface.
"""

from typing import Optional, Any, Dict

from ..types.models import ResponseParameters


class AutoRetryError(Exception):
    """
    Base exception class for all auto-retry errors.

    Attributes:
        message (str): Human-readable error message
        error_code (str): Machine-readable error code for categorization
        context (Dict[str, Any]): Additional context information
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


class ConfigurationError(AutoRetryError):
    """
    Raised when the retry policy or its environment variables are invalid.
    """

    def __init__(
        self,
        message: str,
        invalid_values: Optional[Dict[str, Any]] = None,
        env_file_path: Optional[str] = None
    ):
        context = {}
        if invalid_values:
            context['invalid_values'] = invalid_values
        if env_file_path:
            context['env_file_path'] = env_file_path

        super().__init__(message, "CONFIG_ERROR", context)
        self.invalid_values = invalid_values or {}
        self.env_file_path = env_file_path


class APIError(AutoRetryError):
    """
    Raised when the remote API reports a failed method call.

    This is the structured error the Bot API returns in its error body:
    an integer code, a description and optional response parameters such
    as ``retry_after`` for rate limited requests.
    """

    def __init__(
        self,
        code: int,
        description: str,
        parameters: Optional[ResponseParameters] = None,
        method: Optional[str] = None
    ):
        self.code = code
        self.description = description
        self.parameters = parameters or ResponseParameters()
        self.method = method

        context: Dict[str, Any] = {'code': code}
        if self.parameters.retry_after is not None:
            context['retry_after'] = self.parameters.retry_after
        if method:
            context['method'] = method

        super().__init__(description, "API_ERROR", context)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.code}: {self.description}"

    @property
    def is_server_error(self) -> bool:
        """Whether the API reported an internal fault (code 500 and above)."""
        return self.code >= 500

    @property
    def retry_after(self) -> Optional[int]:
        return self.parameters.retry_after

    @classmethod
    def from_response(
        cls,
        body: Dict[str, Any],
        method: Optional[str] = None,
        status: Optional[int] = None
    ) -> 'APIError':
        """
        Build an APIError from a Bot API error body.

        Args:
            body: Decoded response body (``{"ok": false, "error_code": ...}``)
            method: API method that produced the response
            status: HTTP status, used when the body carries no error code

        Returns:
            APIError: The structured error
        """
        code = body.get('error_code', status if status is not None else 0)
        description = body.get('description') or 'Unknown error'
        parameters = ResponseParameters.from_dict(body.get('parameters'))
        return cls(int(code), str(description), parameters, method=method)


class RetryLimitExceeded(AutoRetryError):
    """
    Raised when a method call has used up its retry attempts.

    The last API error seen is chained as ``__cause__``.
    """

    def __init__(
        self,
        method: str,
        attempts: int,
        last_error: Optional[BaseException] = None
    ):
        context: Dict[str, Any] = {'method': method, 'attempts': attempts}
        if last_error is not None:
            context['last_error'] = str(last_error)
            context['last_error_type'] = type(last_error).__name__

        super().__init__(
            f"Retry limit exceeded for '{method}' after {attempts} attempts",
            "RETRY_LIMIT_EXCEEDED",
            context
        )
        self.method = method
        self.attempts = attempts
        self.last_error = last_error
