"""Tests for the CDN client."""

import json
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from shop_watch.adapters.assets import CdnClient
from shop_watch.errors import UploadError


def _response(status_code: int, body) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    return response


@pytest.mark.asyncio
async def test_relocate_success() -> None:
    """Deployed URLs come back in input order."""
    client = CdnClient(token="secret", retry_delay=0)
    body = {"files": [{"deployedUrl": "https://cdn/a.png"}, {"deployedUrl": "https://cdn/b.png"}]}

    with patch("httpx.AsyncClient") as mock_client:
        mock_post = AsyncMock(return_value=_response(200, body))
        mock_client.return_value.__aenter__.return_value.post = mock_post

        result = await client.relocate(["https://shop/a.png", "https://shop/b.png"])

        assert result == ["https://cdn/a.png", "https://cdn/b.png"]
        mock_post.assert_awaited_once()
        assert mock_post.call_args.kwargs["json"] == ["https://shop/a.png", "https://shop/b.png"]
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_relocate_error_embeds_upstream_text() -> None:
    """Non-success responses are retried, then raised with the CDN's message."""
    client = CdnClient(retry_attempts=2, retry_delay=0)

    with patch("httpx.AsyncClient") as mock_client:
        mock_post = AsyncMock(return_value=_response(500, "disk full"))
        mock_client.return_value.__aenter__.return_value.post = mock_post

        with pytest.raises(UploadError, match="disk full"):
            await client.relocate(["https://shop/a.png"])

        assert mock_post.await_count == 2


@pytest.mark.asyncio
async def test_relocate_retries_transport_errors() -> None:
    """A transient network error is retried."""
    client = CdnClient(retry_delay=0)
    body = {"files": [{"deployedUrl": "https://cdn/a.png"}]}

    with patch("httpx.AsyncClient") as mock_client:
        mock_post = AsyncMock(side_effect=[httpx.ConnectError("reset"), _response(200, body)])
        mock_client.return_value.__aenter__.return_value.post = mock_post

        assert await client.relocate(["https://shop/a.png"]) == ["https://cdn/a.png"]
        assert mock_post.await_count == 2


@pytest.mark.parametrize(
    "text, message",
    [
        ("not json", "invalid JSON"),
        (json.dumps({"data": []}), "'files' list"),
        (json.dumps({"files": [{"deployedUrl": "ftp://nope"}]}), "invalid deployedUrl"),
        (json.dumps({"files": []}), "0 files for 1 uploads"),
    ],
)
def test_parse_response_validation(text, message) -> None:
    """Malformed CDN responses are rejected."""
    with pytest.raises(UploadError, match=message):
        CdnClient._parse_response(text, expected=1)
