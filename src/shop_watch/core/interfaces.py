"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Any

from shop_watch.core.entities import DeltaEntry, Item


class ItemSource(ABC):
    """Interface for fetching the current shop catalog."""

    @abstractmethod
    async def fetch_items(self) -> list[Item]:
        """Fetch every item currently listed."""
        pass


class AssetHost(ABC):
    """Interface for re-hosting remote images."""

    @abstractmethod
    async def relocate(self, urls: list[str]) -> list[str]:
        """Re-host URLs, returning one relocated URL per input in the same order."""
        pass


class MessagingClient(ABC):
    """Interface for delivering a message to a channel."""

    @abstractmethod
    async def post_message(
        self,
        text: str,
        blocks: list[dict[str, Any]],
        channel: str,
        **options: Any,
    ) -> dict[str, Any]:
        """Post a message. The response carries ``ok`` and, on failure, ``error``."""
        pass


class BlockRenderer(ABC):
    """Interface for turning changes into message blocks."""

    @abstractmethod
    def render(self, entry: DeltaEntry) -> list[dict[str, Any]]:
        """Render one change into an ordered list of blocks."""
        pass

    @abstractmethod
    def usergroup_ping(self, usergroup_id: str) -> list[dict[str, Any]]:
        """Render the escalation message addressed at a user group."""
        pass
