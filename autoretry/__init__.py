"""
Automatic retries for rate limited Bot API requests.

Register ``AutoRetry`` on an ``APIClient`` (or wrap any single-attempt
caller with ``AutoRetry.wrap``) and rate limits and server errors are
retried transparently up to the configured number of attempts.
"""

from .client import APIClient
from .core import (
    AutoRetryError,
    APIError,
    ConfigurationError,
    RetryLimitExceeded,
    ConfigManager,
    load_policy
)
from .types import RetryPolicy, ResponseParameters
from .utils.error_handling import AutoRetry

__version__ = "1.0.0"

__all__ = [
    'AutoRetry',
    'APIClient',
    'RetryPolicy',
    'ResponseParameters',
    'ConfigManager',
    'load_policy',
    'AutoRetryError',
    'APIError',
    'ConfigurationError',
    'RetryLimitExceeded'
]
