"""Notification adapters."""

from shop_watch.adapters.notifications.slack_blocks import SlackBlockRenderer
from shop_watch.adapters.notifications.slack_client import SlackClient

__all__ = ["SlackBlockRenderer", "SlackClient"]
