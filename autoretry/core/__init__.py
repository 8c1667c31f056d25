"""
Core module for the auto-retry middleware.

This module contains:
- Configuration management for the retry policy
- Custom exception classes for API and retry failures
"""

from .config import ConfigManager, get_config_manager, load_policy
from .exceptions import (
    AutoRetryError,
    APIError,
    ConfigurationError,
    RetryLimitExceeded
)

__all__ = [
    # Configuration
    'ConfigManager',
    'get_config_manager',
    'load_policy',

    # Exception classes
    'AutoRetryError',
    'APIError',
    'ConfigurationError',
    'RetryLimitExceeded'
]
