"""Snapshot diffing and importance triage."""

import logging
from dataclasses import fields
from numbers import Real
from typing import Iterable

from shop_watch.core.entities import (
    IMPORTANCE_IGNORED,
    STOCK_FIELD,
    DeltaEntry,
    DeltaKind,
    Item,
)


logger = logging.getLogger(__name__)

# Stock moves of this size or less are treated as noise
STOCK_TOLERANCE = 1


def _index_by_id(items: Iterable[Item]) -> dict[str, Item]:
    index: dict[str, Item] = {}
    for item in items:
        # First occurrence wins, like a linear first-match lookup
        index.setdefault(item.id, item)
    return index


def diff_snapshots(baseline: list[Item], current: list[Item]) -> list[DeltaEntry]:
    """Compute the item-level delta between two snapshots.

    New and updated entries come first, in the order of ``current``; deleted
    entries follow in the order of ``baseline``. Identical snapshots
    short-circuit to an empty list without any per-item work.
    """
    if baseline == current:
        logger.debug("Snapshots are identical, skipping per-item diff")
        return []

    old_by_id = _index_by_id(baseline)
    current_ids = {item.id for item in current}

    entries: list[DeltaEntry] = []
    for item in current:
        old = old_by_id.get(item.id)
        if old is None:
            entries.append(DeltaEntry.added(item))
        elif old != item:
            entries.append(DeltaEntry.updated(old, item))

    for old in baseline:
        if old.id not in current_ids:
            entries.append(DeltaEntry.deleted(old))

    return entries


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_important_update(old: Item, new: Item) -> bool:
    """Decide whether an update to an item deserves an escalation.

    Title and description churn is ignored and stock may drift by one unit
    either way; any other field that differs makes the update important.
    """
    for f in fields(Item):
        if f.name in IMPORTANCE_IGNORED:
            continue

        old_value = getattr(old, f.name)
        new_value = getattr(new, f.name)

        if f.name == STOCK_FIELD and _is_number(old_value) and _is_number(new_value):
            if abs(old_value - new_value) > STOCK_TOLERANCE:
                return True
            continue

        if old_value != new_value:
            return True

    return False


def is_important(entry: DeltaEntry) -> bool:
    """Classify a single delta entry. New and deleted items always escalate."""
    if entry.kind is DeltaKind.UPDATED:
        return is_important_update(entry.old, entry.new)  # type: ignore[arg-type]
    return True


def classify(entries: list[DeltaEntry]) -> list[bool]:
    """Importance flag for each entry, in order."""
    return [is_important(entry) for entry in entries]


def should_escalate(classifications: Iterable[bool]) -> bool:
    """Fold per-entry classifications into the run-level escalation decision."""
    return any(classifications)
