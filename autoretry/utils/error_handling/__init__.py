"""
Error handling utilities for the auto-retry middleware.

This module provides:
- Classification of failed API attempts
- Exponential backoff for server errors
- The AutoRetry transformer
"""

from .auto_retry import AutoRetry
from .backoff import next_backoff_delay
from .classification import classify_error

__all__ = [
    'AutoRetry',
    'next_backoff_delay',
    'classify_error'
]
