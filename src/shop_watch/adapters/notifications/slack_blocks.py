"""Slack Block Kit rendering for shop changes."""

import re
from dataclasses import fields
from typing import Any, Optional

from shop_watch.core import BlockRenderer, DeltaEntry, DeltaKind, Item


Block = dict[str, Any]

# Labels for fields shown in update diffs, in display order
FIELD_LABELS = {
    "title": "Title",
    "description": "Description",
    "price": "Price",
    "stock_remaining": "Stock",
    "image_url": "Image",
    "options": "Options",
}

# Slack rejects section text longer than this
SECTION_TEXT_LIMIT = 3000


def to_mrkdwn(text: str) -> str:
    """Convert markdown to Slack mrkdwn format."""
    # Convert markdown links [text](url) to Slack format <url|text>
    text = re.sub(r'\[([^\]]+)\]\(([^)]+)\)', r'<\2|\1>', text)

    # Convert markdown bold **text** to Slack bold *text*
    text = re.sub(r'\*\*([^*]+)\*\*', r'*\1*', text)

    return text


def _truncate(text: str, limit: int = SECTION_TEXT_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def format_value(name: str, value: Any) -> str:
    """Human-readable rendering of a single item field."""
    if value is None:
        return "_none_"
    if name == "price":
        return f"{value:g} 🐚"
    if name == "options":
        return ", ".join(value) if value else "_none_"
    return str(value)


def _header(text: str) -> Block:
    return {"type": "header", "text": {"type": "plain_text", "text": _truncate(text, 150), "emoji": True}}


def _section(text: str, image_url: Optional[str] = None, alt_text: str = "") -> Block:
    block: Block = {"type": "section", "text": {"type": "mrkdwn", "text": _truncate(text)}}
    if image_url:
        block["accessory"] = {"type": "image", "image_url": image_url, "alt_text": alt_text or "item image"}
    return block


def _divider() -> Block:
    return {"type": "divider"}


def _item_details(item: Item) -> str:
    lines = []
    if item.description:
        lines.append(to_mrkdwn(item.description))
    if item.price is not None:
        lines.append(f"*Price:* {format_value('price', item.price)}")
    if item.stock_remaining is not None:
        lines.append(f"*Stock:* {item.stock_remaining} left")
    if item.options:
        lines.append(f"*Options:* {format_value('options', item.options)}")
    return "\n".join(lines) or "_No details_"


def changed_fields(old: Item, new: Item) -> list[str]:
    """Names of fields that differ between two versions of an item."""
    return [f.name for f in fields(Item) if getattr(old, f.name) != getattr(new, f.name)]


class SlackBlockRenderer(BlockRenderer):
    """Render new/updated/deleted items and usergroup pings as Block Kit."""

    def render(self, entry: DeltaEntry) -> list[Block]:
        if entry.kind is DeltaKind.NEW:
            return self.new_item(entry.new)  # type: ignore[arg-type]
        if entry.kind is DeltaKind.UPDATED:
            return self.updated_item(entry.old, entry.new)  # type: ignore[arg-type]
        return self.deleted_item(entry.old)  # type: ignore[arg-type]

    def new_item(self, item: Item) -> list[Block]:
        return [
            _header(f"🆕 New item: {item.title}"),
            _section(_item_details(item), item.image_url, item.title),
            _divider(),
        ]

    def updated_item(self, old: Item, new: Item) -> list[Block]:
        lines = []
        for name in changed_fields(old, new):
            if name == "image_url":
                lines.append("*Image:* changed")
                continue
            label = FIELD_LABELS.get(name, name)
            old_value = format_value(name, getattr(old, name))
            new_value = format_value(name, getattr(new, name))
            lines.append(f"*{label}:* {old_value} → {new_value}")

        return [
            _header(f"📝 Updated item: {old.title}"),
            _section("\n".join(lines), new.image_url, new.title),
            _divider(),
        ]

    def deleted_item(self, item: Item) -> list[Block]:
        return [
            _header(f"🗑️ Deleted item: {item.title}"),
            _section(f"~{item.title}~ is no longer in the shop."),
            _divider(),
        ]

    def usergroup_ping(self, usergroup_id: str) -> list[Block]:
        return [_section(f"<!subteam^{usergroup_id}> the shop has been updated! 👀")]
