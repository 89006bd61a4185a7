"""Tests for Slack client adapter."""

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from shop_watch.adapters.notifications import SlackClient


@pytest.mark.asyncio
async def test_post_message_success() -> None:
    """Test successful Slack message."""
    client = SlackClient("xoxb-test")

    with patch("httpx.AsyncClient") as mock_client:
        mock_response = Mock()
        mock_response.raise_for_status = Mock()
        mock_response.json = Mock(return_value={"ok": True, "ts": "1.0"})

        mock_post = AsyncMock(return_value=mock_response)
        mock_client.return_value.__aenter__.return_value.post = mock_post

        blocks = [{"type": "divider"}]
        result = await client.post_message(
            "✨ *new items:* Mug", blocks, "C123", unfurl_links=False, unfurl_media=False
        )

        assert result["ok"] is True

        # Verify API call
        call_args = mock_post.call_args
        assert call_args.args[0] == "https://slack.com/api/chat.postMessage"
        assert call_args.kwargs["headers"]["Authorization"] == "Bearer xoxb-test"

        payload = call_args.kwargs["json"]
        assert payload["channel"] == "C123"
        assert payload["text"] == "✨ *new items:* Mug"
        assert payload["blocks"] == blocks
        assert payload["unfurl_links"] is False
        assert payload["unfurl_media"] is False


@pytest.mark.asyncio
async def test_post_message_platform_error_is_returned() -> None:
    """Slack-level rejections are returned, not raised."""
    client = SlackClient("xoxb-test")

    with patch("httpx.AsyncClient") as mock_client:
        mock_response = Mock()
        mock_response.raise_for_status = Mock()
        mock_response.json = Mock(return_value={"ok": False, "error": "channel_not_found"})

        mock_client.return_value.__aenter__.return_value.post = AsyncMock(return_value=mock_response)

        result = await client.post_message("text", [], "C404")

        assert result == {"ok": False, "error": "channel_not_found"}


@pytest.mark.asyncio
async def test_post_message_http_error_raises() -> None:
    """HTTP failures propagate so the caller can retry."""
    client = SlackClient("xoxb-test")

    with patch("httpx.AsyncClient") as mock_client:
        mock_response = Mock()
        mock_response.raise_for_status = Mock(side_effect=httpx.HTTPError("API Error"))

        mock_client.return_value.__aenter__.return_value.post = AsyncMock(return_value=mock_response)

        with pytest.raises(httpx.HTTPError):
            await client.post_message("text", [], "C123")


def test_custom_api_url_is_normalized() -> None:
    """Trailing slashes are dropped from the API base URL."""
    client = SlackClient("xoxb-test", api_url="https://slack.example/api/")

    assert client.api_url == "https://slack.example/api"
