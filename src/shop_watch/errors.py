"""Error types raised across the shop watcher."""


class ShopWatchError(Exception):
    """Base class for all shop watcher errors."""


class ConfigError(ShopWatchError):
    """Required configuration is missing or invalid."""


class SnapshotError(ShopWatchError):
    """Stored baseline snapshot could not be parsed or validated."""


class ScrapeError(ShopWatchError):
    """Storefront could not be fetched or parsed."""


class UploadError(ShopWatchError):
    """Asset host rejected an upload or returned a malformed response."""


class DeliveryError(ShopWatchError):
    """Messaging platform did not accept a message."""


class InvariantError(ShopWatchError):
    """Internal logic produced a state that should be impossible."""
