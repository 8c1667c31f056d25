"""
Pytest configuration and fixtures.

This module provides test fixtures and configuration for the auto-retry
test suite, including scripted callers and a recording sleep.
"""

import pytest

from autoretry import AutoRetry
from tests.mocks import RecordingSleep

# Environment variables read by ConfigManager
AUTO_RETRY_ENV_VARS = [
    'AUTO_RETRY_MAX_DELAY',
    'AUTO_RETRY_MAX_ATTEMPTS',
    'AUTO_RETRY_RETHROW_SERVER_ERRORS',
    'AUTO_RETRY_ENABLE_LOGS'
]


@pytest.fixture
def sleep():
    """Create a sleep replacement that records delays."""
    return RecordingSleep()


@pytest.fixture
def auto_retry(sleep):
    """Create an AutoRetry transformer with default policy and no real waiting."""
    return AutoRetry(sleep=sleep)


@pytest.fixture
def temp_env_file(tmp_path):
    """Create a temporary .env file for testing."""
    env_path = tmp_path / ".env"
    env_path.write_text(
        "AUTO_RETRY_MAX_DELAY=30\n"
        "AUTO_RETRY_MAX_ATTEMPTS=5\n"
        "AUTO_RETRY_RETHROW_SERVER_ERRORS=yes\n"
        "AUTO_RETRY_ENABLE_LOGS=true\n"
    )
    return str(env_path)


@pytest.fixture(autouse=True)
def cleanup_environment(monkeypatch):
    """Start every test without AUTO_RETRY_* variables set."""
    for var in AUTO_RETRY_ENV_VARS:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


# Pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "discord_api: mark test as using discord.py error types"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
