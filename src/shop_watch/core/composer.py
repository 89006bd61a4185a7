"""Turn detected changes into message blocks."""

from typing import Any

from shop_watch.core.entities import DeltaEntry, DeltaKind
from shop_watch.core.interfaces import BlockRenderer
from shop_watch.errors import InvariantError


# Slack refuses messages with more blocks than this
SLACK_BLOCK_LIMIT = 50

Block = dict[str, Any]


def render_entries(entries: list[DeltaEntry], renderer: BlockRenderer) -> list[list[Block]]:
    """Render each entry separately, keeping diff order."""
    return [renderer.render(entry) for entry in entries]


def flatten_blocks(rendered: list[list[Block]]) -> list[Block]:
    """Concatenate per-entry blocks into one sequence.

    Raises:
        InvariantError: If there were entries but nothing was rendered.
    """
    blocks = [block for entry_blocks in rendered for block in entry_blocks]
    if rendered and not blocks:
        raise InvariantError(
            "Updates were detected, but we have no update blocks. This should never happen."
        )
    return blocks


def chunk_blocks(blocks: list[Block], limit: int = SLACK_BLOCK_LIMIT) -> list[list[Block]]:
    """Split blocks into consecutive chunks of at most ``limit`` blocks."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    return [blocks[i:i + limit] for i in range(0, len(blocks), limit)]


def summary_text(
    new_titles: list[str],
    updated_titles: list[str],
    deleted_titles: list[str],
) -> str:
    """Plain-text fallback shown in notifications and clients without blocks."""
    parts = []
    if new_titles:
        parts.append(f"*new items:* {', '.join(new_titles)}")
    if deleted_titles:
        parts.append(f"*deleted items:* {', '.join(deleted_titles)}")
    if updated_titles:
        parts.append(f"*updated items:* {', '.join(updated_titles)}")
    return f"✨ {' · '.join(parts)}"


def titles_by_kind(entries: list[DeltaEntry]) -> dict[DeltaKind, list[str]]:
    """Group entry titles by change kind, preserving order within each kind."""
    grouped: dict[DeltaKind, list[str]] = {kind: [] for kind in DeltaKind}
    for entry in entries:
        grouped[entry.kind].append(entry.title)
    return grouped
