"""Core domain layer."""

from shop_watch.core.assets import AssetRelocator
from shop_watch.core.entities import (
    IMPORTANCE_IGNORED,
    DeltaEntry,
    DeltaKind,
    Item,
    RunResult,
    RunState,
)
from shop_watch.core.interfaces import AssetHost, BlockRenderer, ItemSource, MessagingClient
from shop_watch.core.snapshot_store import SnapshotStore

__all__ = [
    "IMPORTANCE_IGNORED",
    "Item",
    "DeltaKind",
    "DeltaEntry",
    "RunResult",
    "RunState",
    "ItemSource",
    "AssetHost",
    "MessagingClient",
    "BlockRenderer",
    "AssetRelocator",
    "SnapshotStore",
]
