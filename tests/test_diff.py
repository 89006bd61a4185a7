"""Tests for snapshot diffing and importance triage."""

from shop_watch.core import DeltaEntry, DeltaKind, Item
from shop_watch.core.diff import (
    classify,
    diff_snapshots,
    is_important,
    is_important_update,
    should_escalate,
)


def _catalog() -> list[Item]:
    return [
        Item(id="1", title="Sticker", stock_remaining=5, price=10),
        Item(id="2", title="Mug", stock_remaining=10, price=25),
        Item(id="3", title="Hoodie", price=100, options=["S", "M", "L"]),
    ]


def test_diff_against_itself_is_empty() -> None:
    """Diffing a snapshot against itself yields nothing."""
    catalog = _catalog()

    assert diff_snapshots(catalog, catalog) == []
    assert diff_snapshots(catalog, _catalog()) == []
    assert diff_snapshots([], []) == []


def test_unchanged_items_produce_no_entries() -> None:
    """Only the changed item shows up."""
    baseline = _catalog()
    current = _catalog()
    current[1] = Item(id="2", title="Mug", stock_remaining=7, price=25)

    entries = diff_snapshots(baseline, current)

    assert len(entries) == 1
    assert entries[0].kind is DeltaKind.UPDATED
    assert entries[0].old == baseline[1]
    assert entries[0].new == current[1]


def test_stock_update_scenario() -> None:
    """A stock drop of two is an important update."""
    baseline = [Item(id="1", title="Sticker", stock_remaining=5)]
    current = [Item(id="1", title="Sticker", stock_remaining=3)]

    entries = diff_snapshots(baseline, current)

    assert entries == [DeltaEntry.updated(baseline[0], current[0])]
    assert classify(entries) == [True]
    assert should_escalate(classify(entries))


def test_new_and_deleted_ordering() -> None:
    """New/updated entries follow current order, deletions come last in baseline order."""
    baseline = [
        Item(id="1", title="Sticker"),
        Item(id="2", title="Mug"),
        Item(id="4", title="Pin"),
    ]
    current = [
        Item(id="5", title="Poster"),
        Item(id="2", title="Mug v2"),
        Item(id="3", title="Hoodie"),
    ]

    entries = diff_snapshots(baseline, current)

    assert [(e.kind, e.item.id) for e in entries] == [
        (DeltaKind.NEW, "5"),
        (DeltaKind.UPDATED, "2"),
        (DeltaKind.NEW, "3"),
        (DeltaKind.DELETED, "1"),
        (DeltaKind.DELETED, "4"),
    ]


def test_add_and_remove_always_escalate() -> None:
    """New and deleted entries escalate regardless of content."""
    baseline = [Item(id="1", title="Sticker")]
    current = [Item(id="3", title="Hoodie")]

    entries = diff_snapshots(baseline, current)

    assert [e.kind for e in entries] == [DeltaKind.NEW, DeltaKind.DELETED]
    assert classify(entries) == [True, True]
    assert should_escalate(classify(entries))


def test_exactly_one_entry_per_unmatched_id() -> None:
    """Ids only on one side produce exactly one entry each."""
    baseline = [Item(id=str(i), title=f"Old {i}") for i in range(5)]
    current = [Item(id=str(i), title=f"Old {i}") for i in range(3, 8)]

    entries = diff_snapshots(baseline, current)

    new_ids = [e.item.id for e in entries if e.kind is DeltaKind.NEW]
    deleted_ids = [e.item.id for e in entries if e.kind is DeltaKind.DELETED]
    assert new_ids == ["5", "6", "7"]
    assert deleted_ids == ["0", "1", "2"]


def test_stock_tolerance() -> None:
    """Stock moves of one are noise, two are important."""
    old = Item(id="1", title="Sticker", stock_remaining=5)

    assert not is_important_update(old, Item(id="1", title="Sticker", stock_remaining=4))
    assert not is_important_update(old, Item(id="1", title="Sticker", stock_remaining=6))
    assert is_important_update(old, Item(id="1", title="Sticker", stock_remaining=3))
    assert is_important_update(old, Item(id="1", title="Sticker", stock_remaining=7))


def test_stock_appearing_is_important() -> None:
    """Going from unknown stock to a number is a real change."""
    old = Item(id="1", title="Sticker", stock_remaining=None)
    new = Item(id="1", title="Sticker", stock_remaining=1)

    assert is_important_update(old, new)


def test_title_and_description_changes_are_not_important() -> None:
    """Copy edits never escalate."""
    old = Item(id="1", title="Sticker", description="Shiny")
    new = Item(id="1", title="Sticker!", description="Very shiny")

    assert not is_important_update(old, new)
    assert not is_important(DeltaEntry.updated(old, new))


def test_other_field_changes_are_important() -> None:
    """Price, image and option changes always escalate."""
    old = Item(id="1", title="Hoodie", price=100, image_url="a.png", options=["S", "M"])

    assert is_important_update(old, Item(id="1", title="Hoodie", price=90, image_url="a.png", options=["S", "M"]))
    assert is_important_update(old, Item(id="1", title="Hoodie", price=100, image_url="b.png", options=["S", "M"]))
    assert is_important_update(old, Item(id="1", title="Hoodie", price=100, image_url="a.png", options=["M", "S"]))


def test_should_escalate_folds_with_or() -> None:
    """Any important entry escalates the run."""
    assert not should_escalate([])
    assert not should_escalate([False, False])
    assert should_escalate([False, True])
