"""Re-host item images before they are referenced in notifications."""

import logging

from shop_watch.core.entities import Item
from shop_watch.core.interfaces import AssetHost
from shop_watch.errors import UploadError


logger = logging.getLogger(__name__)


class AssetRelocator:
    """Swap every item image for a re-hosted copy using one batched upload."""

    def __init__(self, host: AssetHost) -> None:
        self.host = host

    async def relocate_images(self, items: list[Item]) -> int:
        """Rewrite ``image_url`` on each item that has one, in place.

        Returns:
            Number of images relocated.

        Raises:
            UploadError: If the host returns the wrong number of URLs.
        """
        urls: list[str] = []
        positions: list[tuple[Item, int]] = []

        for item in items:
            if item.image_url:
                positions.append((item, len(urls)))
                urls.append(item.image_url)

        if not urls:
            return 0

        relocated = await self.host.relocate(urls)
        if len(relocated) != len(urls):
            raise UploadError(
                f"Asset host returned {len(relocated)} URLs for {len(urls)} uploads"
            )

        for item, idx in positions:
            item.image_url = relocated[idx]

        return len(urls)
