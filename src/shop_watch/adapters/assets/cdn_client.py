"""CDN client for re-hosting item images."""

import json
import logging

import httpx

from shop_watch.core import AssetHost
from shop_watch.errors import UploadError
from shop_watch.retry import retry


logger = logging.getLogger(__name__)


class CdnClient(AssetHost):
    """Upload remote files to the CDN in one request."""

    def __init__(
        self,
        upload_url: str = "https://cdn.hackclub.com/api/v3/new",
        token: str = "beans",
        timeout: float = 60.0,
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        self.upload_url = upload_url
        self.token = token
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay

    async def relocate(self, urls: list[str]) -> list[str]:
        """Upload ``urls`` and return the deployed URLs in the same order.

        Raises:
            UploadError: If the CDN rejects the upload or the response does
                not list one deployed URL per input.
        """
        text = await retry(
            lambda: self._upload(urls),
            attempts=self.retry_attempts,
            delay=self.retry_delay,
        )
        deployed = self._parse_response(text, expected=len(urls))
        logger.info("⬆️ Uploaded %d files to CDN.", len(urls))
        return deployed

    async def _upload(self, urls: list[str]) -> str:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.upload_url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.token}",
                },
                json=urls,
            )

        if response.status_code >= 400:
            raise UploadError(
                f"Error occurred whilst uploading {urls} to CDN: {response.text}"
            )
        return response.text

    @staticmethod
    def _parse_response(text: str, expected: int) -> list[str]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise UploadError(f"CDN returned invalid JSON: {e}") from e

        files = data.get("files") if isinstance(data, dict) else None
        if not isinstance(files, list):
            raise UploadError("CDN response is missing a 'files' list")

        deployed: list[str] = []
        for entry in files:
            url = entry.get("deployedUrl") if isinstance(entry, dict) else None
            if not isinstance(url, str) or not url.startswith(("http://", "https://")):
                raise UploadError(f"CDN response has an invalid deployedUrl: {entry!r}")
            deployed.append(url)

        if len(deployed) != expected:
            raise UploadError(f"CDN returned {len(deployed)} files for {expected} uploads")

        return deployed
