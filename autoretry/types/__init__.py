"""
Type definitions and data models for the auto-retry middleware.
"""

from .models import (
    INITIAL_DELAY,
    MAX_BACKOFF,
    APICaller,
    APIResult,
    Payload,
    SleepFunction,
    ErrorKind,
    ResponseParameters,
    RetryPolicy,
    RetryState,
    ClassifiedError
)

__all__ = [
    'INITIAL_DELAY',
    'MAX_BACKOFF',
    'APICaller',
    'APIResult',
    'Payload',
    'SleepFunction',
    'ErrorKind',
    'ResponseParameters',
    'RetryPolicy',
    'RetryState',
    'ClassifiedError'
]
