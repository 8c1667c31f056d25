"""
Automatic retries for failed Bot API requests.

``AutoRetry`` is a transformer for the outbound-call pipeline. It wraps a
caller that performs one attempt of an API method and retries it when the
API reports a rate limit, a server error or another API error, until the
call succeeds, the retry attempts run out, or a failure is not retryable.

Each intercepted call owns its own RetryState; the policy is shared
read-only, so concurrent calls never affect each other's backoff.
"""

import asyncio
from datetime import timedelta
from typing import Optional, Union

from autoretry.core.config import ConfigManager
from autoretry.core.exceptions import ConfigurationError, RetryLimitExceeded
from autoretry.types.models import (
    INITIAL_DELAY,
    APICaller,
    APIResult,
    ClassifiedError,
    ErrorKind,
    Payload,
    RetryPolicy,
    RetryState,
    SleepFunction,
)
from autoretry.utils.error_handling.backoff import next_backoff_delay
from autoretry.utils.error_handling.classification import classify_error
from autoretry.utils.logging.retry_logger import RetryLogger


class AutoRetry:
    """
    Transformer that transparently retries failed API calls.

    Example:
        client = APIClient(token)
        client.use(AutoRetry(max_retry_attempts=5, enable_logs=True))
        await client.call("sendMessage", {"chat_id": chat_id, "text": "Hello!"})

    Attributes:
        policy (RetryPolicy): Retry configuration shared by all calls
    """

    def __init__(
        self,
        max_delay: Union[timedelta, int, float, None] = None,
        max_retry_attempts: int = 3,
        rethrow_server_errors: bool = False,
        enable_logs: bool = False,
        sleep: Optional[SleepFunction] = None
    ):
        """
        Initialize the transformer.

        Args:
            max_delay: Longest rate limit wait to honour, as a timedelta or
                seconds. Requests asked to wait longer fail immediately.
                ``None`` waits for any ``retry_after``.
            max_retry_attempts: Retries allowed per call (default 3)
            rethrow_server_errors: Do not retry errors with code 500 and above
            enable_logs: Log each retry decision
            sleep: Coroutine used to wait; defaults to ``asyncio.sleep``

        Raises:
            ConfigurationError: If the policy values are invalid
        """
        if isinstance(max_delay, (int, float)) and not isinstance(max_delay, bool):
            max_delay = timedelta(seconds=max_delay)

        policy = RetryPolicy(
            max_delay=max_delay,
            max_retry_attempts=max_retry_attempts,
            rethrow_server_errors=rethrow_server_errors,
            enable_logs=enable_logs
        )
        try:
            policy.validate()
        except ValueError as e:
            raise ConfigurationError(f"Invalid retry policy: {str(e)}")

        self.policy = policy
        self._sleep = sleep
        self._log = RetryLogger(policy.enable_logs)

    @classmethod
    def from_policy(cls, policy: RetryPolicy, sleep: Optional[SleepFunction] = None) -> 'AutoRetry':
        """Create a transformer from an existing policy."""
        return cls(
            max_delay=policy.max_delay,
            max_retry_attempts=policy.max_retry_attempts,
            rethrow_server_errors=policy.rethrow_server_errors,
            enable_logs=policy.enable_logs,
            sleep=sleep
        )

    @classmethod
    def from_env(cls, env_file_path: Optional[str] = None, sleep: Optional[SleepFunction] = None) -> 'AutoRetry':
        """
        Create a transformer from ``AUTO_RETRY_*`` environment variables.

        Args:
            env_file_path: Optional .env file to load first
            sleep: Coroutine used to wait

        Raises:
            ConfigurationError: If the environment holds invalid values
        """
        return cls.from_policy(ConfigManager(env_file_path).load_policy(), sleep=sleep)

    def wrap(self, call: APICaller) -> APICaller:
        """
        Wrap a single-attempt caller into one that retries.

        Args:
            call: Coroutine function performing one attempt of ``method``

        Returns:
            APICaller: Caller with the same signature
        """
        async def retrying_call(method: str, payload: Payload) -> APIResult:
            return await self.transform(call, method, payload)

        return retrying_call

    async def transform(self, call: APICaller, method: str, payload: Payload) -> APIResult:
        """
        Call ``method`` through ``call``, retrying recoverable failures.

        Args:
            call: Coroutine function performing one attempt
            method: API method name
            payload: Method parameters

        Returns:
            APIResult: Result of the first successful attempt

        Raises:
            RetryLimitExceeded: If every allowed attempt failed
            Exception: The original error when it is not retryable, when it
                is a server error and ``rethrow_server_errors`` is set, or when
                its ``retry_after`` exceeds ``max_delay``
        """
        state = RetryState.from_policy(self.policy)
        last_error: Optional[BaseException] = None

        while True:
            try:
                return await call(method, payload)
            except Exception as error:
                classified = classify_error(error)
                if not self._should_retry(classified, method):
                    raise
                last_error = error
                await self._wait_before_retry(classified, method, state)

            state.remaining_attempts -= 1
            if state.remaining_attempts < 0:
                attempts = self.policy.max_retry_attempts + 1
                self._log.warning(
                    f"Max retry attempts reached for '{method}'",
                    method=method,
                    attempts=attempts
                )
                raise RetryLimitExceeded(method, attempts, last_error) from last_error

    def _should_retry(self, classified: ClassifiedError, method: str) -> bool:
        """Decide whether a failed attempt may be retried at all."""
        if not classified.is_api_error:
            self._log.debug(
                f"Non API exception occurred. (Error Type: {type(classified.error).__name__}). Rethrowing...",
                method=method,
                error_type=type(classified.error).__name__
            )
            return False

        self._log.info(
            f"[Exception]: {classified.code} | {classified.description}",
            method=method,
            error_code=classified.code
        )

        if classified.is_server_error and self.policy.rethrow_server_errors:
            self._log.info(
                f"Internal Server Error occurred (code: {classified.code}) | "
                f"Rethrowing as rethrow_server_errors is enabled.",
                method=method,
                error_code=classified.code
            )
            return False

        max_delay = self.policy.max_delay_seconds
        if classified.retry_after is not None and classified.retry_after > max_delay:
            self._log.info(
                f"Rate limit for '{method}' asks for {classified.retry_after} seconds, "
                f"more than max_delay of {max_delay} seconds. Rethrowing...",
                method=method,
                retry_after=classified.retry_after
            )
            return False

        return True

    async def _wait_before_retry(self, classified: ClassifiedError, method: str, state: RetryState) -> None:
        """Pause as the failure requires and update the call's backoff state."""
        sleep = self._sleep or asyncio.sleep

        if classified.kind is ErrorKind.RATE_LIMITED:
            self._log.info(
                f"Hit rate limit, will retry '{method}' after {classified.retry_after} seconds",
                method=method,
                delay=classified.retry_after
            )
            await sleep(classified.retry_after)
            state.next_delay = INITIAL_DELAY

        elif classified.kind is ErrorKind.SERVER_ERROR:
            self._log.info(
                f"Internal server error, will retry '{method}' after {state.next_delay} seconds",
                method=method,
                delay=state.next_delay
            )
            await sleep(state.next_delay)
            state.next_delay = next_backoff_delay(state.next_delay)

        else:
            self._log.debug(
                f"API error for '{method}', retrying without delay",
                method=method,
                remaining_attempts=state.remaining_attempts
            )
