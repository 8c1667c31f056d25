"""
Exponential backoff for server errors.

The delay starts at ``INITIAL_DELAY`` seconds and doubles after every
server error wait, clamped to ``MAX_BACKOFF``. A rate limit wait resets it.
"""

from autoretry.types.models import MAX_BACKOFF


def next_backoff_delay(
    current_delay: int,
    exponential_base: int = 2,
    max_delay: int = MAX_BACKOFF
) -> int:
    """
    Calculate the delay to use after waiting ``current_delay`` seconds.

    Args:
        current_delay: Delay that was just waited, in seconds
        exponential_base: Growth factor per step
        max_delay: Maximum delay in seconds

    Returns:
        int: Next delay in seconds, between 1 and ``max_delay``
    """
    return max(1, min(current_delay * exponential_base, max_delay))
