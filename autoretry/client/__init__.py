"""
Outbound-call pipeline for a Bot API.
"""

from .api_client import APIClient, Transformer

__all__ = [
    'APIClient',
    'Transformer'
]
