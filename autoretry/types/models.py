"""
Data models and type definitions for the auto-retry middleware.

This module defines the retry policy, the per-call retry state and the
classified view of a failed attempt, with proper type hints for better
type safety and code clarity.
"""

import math
from dataclasses import dataclass, asdict
from datetime import timedelta
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional


# Seconds to wait after the first server error, and the value the delay
# returns to after a rate limit wait.
INITIAL_DELAY = 3

# Upper bound for the exponential backoff delay (one hour).
MAX_BACKOFF = 3600


# Type aliases for the outbound-call pipeline
Payload = Dict[str, Any]
APIResult = Dict[str, Any]
APICaller = Callable[[str, Payload], Awaitable[APIResult]]
SleepFunction = Callable[[float], Awaitable[None]]


class ErrorKind(Enum):
    """Classification of a failed attempt."""
    NOT_RETRYABLE = "not_retryable"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    OTHER_API_ERROR = "other_api_error"


@dataclass(frozen=True)
class ResponseParameters:
    """Optional parameters attached to a Bot API error response."""
    retry_after: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ResponseParameters':
        if not data:
            return cls()
        retry_after = data.get('retry_after')
        return cls(retry_after=int(retry_after) if retry_after is not None else None)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Immutable retry configuration shared by every call through an interceptor.

    Attributes:
        max_delay: Longest rate limit wait that will be honoured. A
            ``retry_after`` above this fails the request instead. ``None``
            disables the threshold.
        max_retry_attempts: Retries allowed per call before giving up
        rethrow_server_errors: Fail immediately on server errors (code >= 500)
        enable_logs: Emit diagnostic log lines for retry decisions
    """
    max_delay: Optional[timedelta] = None
    max_retry_attempts: int = 3
    rethrow_server_errors: bool = False
    enable_logs: bool = False

    @property
    def max_delay_seconds(self) -> float:
        """Whole seconds of ``max_delay``, or infinity when unset."""
        if self.max_delay is None:
            return math.inf
        return int(self.max_delay.total_seconds())

    def validate(self) -> None:
        """
        Validate policy values.

        Raises:
            ValueError: If any value is invalid
        """
        if not isinstance(self.max_retry_attempts, int) or isinstance(self.max_retry_attempts, bool):
            raise ValueError(
                f"max_retry_attempts must be an integer, got {type(self.max_retry_attempts).__name__}"
            )
        if self.max_retry_attempts < 0:
            raise ValueError("max_retry_attempts cannot be negative")

        if self.max_delay is not None:
            if not isinstance(self.max_delay, timedelta):
                raise ValueError(
                    f"max_delay must be a timedelta, got {type(self.max_delay).__name__}"
                )
            if self.max_delay.total_seconds() < 0:
                raise ValueError("max_delay cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert policy to dictionary for logging."""
        data = asdict(self)
        data['max_delay'] = None if self.max_delay is None else self.max_delay_seconds
        return data


@dataclass
class RetryState:
    """Retry bookkeeping owned by a single intercepted call."""
    remaining_attempts: int
    next_delay: int = INITIAL_DELAY

    @classmethod
    def from_policy(cls, policy: RetryPolicy) -> 'RetryState':
        return cls(remaining_attempts=policy.max_retry_attempts)


@dataclass(frozen=True)
class ClassifiedError:
    """
    Tagged view of an exception caught from an attempt.

    ``code``, ``description`` and ``retry_after`` are only meaningful for
    API errors; ``is_server_error`` is kept apart from ``kind`` because a
    server error may also carry a ``retry_after`` hint.
    """
    kind: ErrorKind
    error: BaseException
    code: Optional[int] = None
    description: Optional[str] = None
    retry_after: Optional[float] = None
    is_server_error: bool = False

    @property
    def is_api_error(self) -> bool:
        return self.kind is not ErrorKind.NOT_RETRYABLE
