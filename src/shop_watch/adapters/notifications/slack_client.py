"""Slack Web API adapter."""

import logging
from typing import Any

import httpx

from shop_watch.core import MessagingClient


logger = logging.getLogger(__name__)


class SlackClient(MessagingClient):
    """Post messages through ``chat.postMessage`` with a bot token."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://slack.com/api",
        timeout: float = 30.0,
    ) -> None:
        """Initialize Slack client.

        Args:
            token: Bot token (``xoxb-...``).
            api_url: Base URL of the Web API.
            timeout: Request timeout in seconds.
        """
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    async def post_message(
        self,
        text: str,
        blocks: list[dict[str, Any]],
        channel: str,
        **options: Any,
    ) -> dict[str, Any]:
        """Send a message and return Slack's JSON response.

        Transport failures and HTTP errors raise ``httpx.HTTPError``; a
        platform-level rejection comes back as ``{"ok": False, "error": ...}``.
        """
        payload = {
            "channel": channel,
            "text": text,
            "blocks": blocks,
            **options,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.api_url}/chat.postMessage",
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
                json=payload,
            )
            response.raise_for_status()
            result = response.json()

        if not result.get("ok"):
            logger.warning("Slack rejected message: %s", result.get("error"))
        return result
