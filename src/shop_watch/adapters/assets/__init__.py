"""Asset hosting adapters."""

from shop_watch.adapters.assets.cdn_client import CdnClient

__all__ = ["CdnClient"]
