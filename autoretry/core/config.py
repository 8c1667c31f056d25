"""
Configuration management for the retry policy.

This module loads the retry policy from environment variables, optionally
read from a .env file, and validates it with clear error messages.
"""

import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..types.models import RetryPolicy
from .exceptions import ConfigurationError


class ConfigManager:
    """
    Configuration manager for the auto-retry policy.

    Environment variables map onto RetryPolicy fields. Unset variables
    fall back to the policy defaults.
    """

    # Environment variables with their default values
    OPTIONAL_VARS = {
        'AUTO_RETRY_MAX_DELAY': None,
        'AUTO_RETRY_MAX_ATTEMPTS': 3,
        'AUTO_RETRY_RETHROW_SERVER_ERRORS': False,
        'AUTO_RETRY_ENABLE_LOGS': False
    }

    # Environment variable types for validation
    VAR_TYPES = {
        'AUTO_RETRY_MAX_DELAY': int,
        'AUTO_RETRY_MAX_ATTEMPTS': int,
        'AUTO_RETRY_RETHROW_SERVER_ERRORS': bool,
        'AUTO_RETRY_ENABLE_LOGS': bool
    }

    TRUE_VALUES = ('true', 'yes', '1', 'y')
    FALSE_VALUES = ('false', 'no', '0', 'n')

    def __init__(self, env_file_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            env_file_path: Optional path to a .env file. If not provided,
                          ``.env`` in the current directory is used when present.
        """
        self._policy: Optional[RetryPolicy] = None
        self._env_file_path = env_file_path
        self._load_environment(env_file_path)

    def _load_environment(self, env_file_path: Optional[str] = None) -> None:
        env_path = Path(env_file_path) if env_file_path else Path.cwd() / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

    def load_policy(self) -> RetryPolicy:
        """
        Load and validate the retry policy from environment variables.

        Returns:
            RetryPolicy: Validated policy

        Raises:
            ConfigurationError: If any value is missing a valid format
        """
        if self._policy is not None:
            return self._policy

        values = self._extract_config_values()

        max_delay = values['AUTO_RETRY_MAX_DELAY']
        policy = RetryPolicy(
            max_delay=timedelta(seconds=max_delay) if max_delay is not None else None,
            max_retry_attempts=values['AUTO_RETRY_MAX_ATTEMPTS'],
            rethrow_server_errors=values['AUTO_RETRY_RETHROW_SERVER_ERRORS'],
            enable_logs=values['AUTO_RETRY_ENABLE_LOGS']
        )

        try:
            policy.validate()
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid configuration: {str(e)}",
                env_file_path=self._env_file_path
            )

        self._policy = policy
        return policy

    def _extract_config_values(self) -> Dict[str, Any]:
        """
        Read and convert the environment variables.

        Raises:
            ConfigurationError: If any values cannot be converted
        """
        config_data: Dict[str, Any] = {}
        invalid_values: Dict[str, Any] = {}

        for env_var, default_value in self.OPTIONAL_VARS.items():
            env_value = os.getenv(env_var)
            if env_value is None or env_value.strip() == '':
                config_data[env_var] = default_value
                continue

            var_type = self.VAR_TYPES[env_var]
            if var_type == bool:
                normalized = env_value.strip().lower()
                if normalized in self.TRUE_VALUES:
                    config_data[env_var] = True
                elif normalized in self.FALSE_VALUES:
                    config_data[env_var] = False
                else:
                    invalid_values[env_var] = env_value
            else:
                try:
                    config_data[env_var] = int(env_value)
                except ValueError:
                    invalid_values[env_var] = env_value

        if invalid_values:
            raise ConfigurationError(
                f"Invalid values for environment variables: {invalid_values}. "
                f"Please check the data types and formats.",
                invalid_values=invalid_values,
                env_file_path=self._env_file_path
            )

        return config_data

    def reload_policy(self) -> RetryPolicy:
        """Re-read the environment and return a fresh policy."""
        self._load_environment(self._env_file_path)
        self._policy = None
        return self.load_policy()

    def get_config_summary(self) -> Dict[str, Any]:
        """Get a summary of the loaded policy."""
        if not self._policy:
            return {'status': 'not_loaded'}

        return {
            'status': 'loaded',
            'env_file_path': self._env_file_path,
            'values': self._policy.to_dict()
        }


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_policy() -> RetryPolicy:
    """Load the retry policy using the global configuration manager."""
    return get_config_manager().load_policy()
