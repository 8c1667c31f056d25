"""
Utility modules for the auto-retry middleware.

This package provides:
- Error classification, backoff and the AutoRetry transformer
- Logging setup for retry diagnostics
"""
