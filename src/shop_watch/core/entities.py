"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from shop_watch.errors import SnapshotError


# Attributes that never make an update worth escalating
IMPORTANCE_IGNORED = frozenset({"title", "description"})

# Stock attribute that tolerates +/-1 noise
STOCK_FIELD = "stock_remaining"

# Python attribute -> key in the stored JSON document
_JSON_KEYS = {
    "id": "id",
    "title": "title",
    "description": "description",
    "price": "price",
    "stock_remaining": "stockRemaining",
    "image_url": "imageUrl",
    "options": "options",
}


@dataclass
class Item:
    """One shop listing.

    Compared by value: two items are equal when every field is equal.
    Only ``image_url`` is ever mutated, by the asset relocator.
    """

    id: str
    title: str
    description: str = ""
    price: Optional[float] = None
    stock_remaining: Optional[int] = None
    image_url: Optional[str] = None
    options: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ID cannot be empty")
        if not self.title:
            raise ValueError("Title cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return {
            json_key: getattr(self, attr)
            for attr, json_key in _JSON_KEYS.items()
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Item":
        """Build an item from the stored JSON shape, validating types.

        Raises:
            SnapshotError: If the record does not match the item schema.
        """
        if not isinstance(data, dict):
            raise SnapshotError(f"Item must be an object, got {type(data).__name__}")

        item_id = data.get("id")
        if isinstance(item_id, int) and not isinstance(item_id, bool):
            item_id = str(item_id)
        if not isinstance(item_id, str):
            raise SnapshotError(f"Item id must be a string, got {item_id!r}")

        title = data.get("title")
        if not isinstance(title, str):
            raise SnapshotError(f"Item {item_id}: title must be a string")

        description = data.get("description", "")
        if not isinstance(description, str):
            raise SnapshotError(f"Item {item_id}: description must be a string")

        price = data.get("price")
        if price is not None and (isinstance(price, bool) or not isinstance(price, (int, float))):
            raise SnapshotError(f"Item {item_id}: price must be a number")

        stock = data.get("stockRemaining")
        if stock is not None and (isinstance(stock, bool) or not isinstance(stock, int)):
            raise SnapshotError(f"Item {item_id}: stockRemaining must be an integer")

        image_url = data.get("imageUrl")
        if image_url is not None and not isinstance(image_url, str):
            raise SnapshotError(f"Item {item_id}: imageUrl must be a string")

        options = data.get("options", [])
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise SnapshotError(f"Item {item_id}: options must be a list of strings")

        try:
            return cls(
                id=item_id,
                title=title,
                description=description,
                price=price,
                stock_remaining=stock,
                image_url=image_url,
                options=list(options),
            )
        except ValueError as e:
            raise SnapshotError(f"Invalid item {item_id!r}: {e}") from e


class DeltaKind(str, Enum):
    """Kind of change between two snapshots."""

    NEW = "new"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class DeltaEntry:
    """A single classified difference between baseline and current snapshot.

    ``old`` is set for updated and deleted entries, ``new`` for new and
    updated entries.
    """

    kind: DeltaKind
    old: Optional[Item] = None
    new: Optional[Item] = None

    @classmethod
    def added(cls, item: Item) -> "DeltaEntry":
        return cls(kind=DeltaKind.NEW, new=item)

    @classmethod
    def updated(cls, old: Item, new: Item) -> "DeltaEntry":
        return cls(kind=DeltaKind.UPDATED, old=old, new=new)

    @classmethod
    def deleted(cls, item: Item) -> "DeltaEntry":
        return cls(kind=DeltaKind.DELETED, old=item)

    @property
    def item(self) -> Item:
        """The item this entry is about (new side when available)."""
        return self.new if self.new is not None else self.old  # type: ignore[return-value]

    @property
    def title(self) -> str:
        """Title used in summaries; updated entries use the old title."""
        if self.kind is DeltaKind.NEW:
            return self.new.title  # type: ignore[union-attr]
        return self.old.title  # type: ignore[union-attr]


class RunState(str, Enum):
    """Stage of a single monitoring run."""

    BOOTSTRAP = "bootstrap"
    FETCHING = "fetching"
    DIFFING = "diffing"
    COMPOSING = "composing"
    DELIVERING = "delivering"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunResult:
    """Outcome of one run. Never persisted."""

    state: RunState = RunState.DONE
    blocks: list[dict[str, Any]] = field(default_factory=list)
    new_titles: list[str] = field(default_factory=list)
    updated_titles: list[str] = field(default_factory=list)
    deleted_titles: list[str] = field(default_factory=list)
    escalate: bool = False
    bootstrapped: bool = False
    messages_sent: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.new_titles or self.updated_titles or self.deleted_titles)
