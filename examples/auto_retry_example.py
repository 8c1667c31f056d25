"""
Example script demonstrating automatic retries for Bot API requests.

The script sends a burst of messages to one chat. The API starts rate
limiting the bot after a while; AutoRetry waits out each limit and the
messages still arrive.

Usage:
    python examples/auto_retry_example.py

Environment Variables:
    BOT_TOKEN: Bot token
    CHAT_ID: Chat to send the messages to
    AUTO_RETRY_*: Optional retry policy overrides (see ConfigManager)
"""

import asyncio
import os
from dataclasses import replace

from autoretry import APIClient, AutoRetry, ConfigManager
from autoretry.utils.logging import setup_logging

logger = setup_logging("INFO")


async def main() -> None:
    token = os.environ["BOT_TOKEN"]
    chat_id = int(os.environ["CHAT_ID"])

    # Policy from AUTO_RETRY_* variables, with logging on unless disabled there
    policy = ConfigManager().load_policy()
    if not os.getenv("AUTO_RETRY_ENABLE_LOGS"):
        policy = replace(policy, enable_logs=True)
    auto_retry = AutoRetry.from_policy(policy)

    async with APIClient(token) as client:
        client.use(auto_retry)

        results = await asyncio.gather(
            *(client.call("sendMessage", {"chat_id": chat_id, "text": f"Hello {i}"}) for i in range(150)),
            return_exceptions=True
        )

    failed = [result for result in results if isinstance(result, Exception)]
    logger.info(f"Sent {len(results) - len(failed)} messages, {len(failed)} failed")


if __name__ == "__main__":
    asyncio.run(main())
