"""Source adapters for fetching items."""

from shop_watch.adapters.sources.shop_source import ShopSource

__all__ = ["ShopSource"]
