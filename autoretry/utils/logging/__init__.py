"""
Logging for retry diagnostics.
"""

from .retry_logger import RetryLogger, setup_logging

__all__ = [
    'RetryLogger',
    'setup_logging'
]
