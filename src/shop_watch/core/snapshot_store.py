"""Baseline snapshot persisted between runs."""

import json
import logging
from pathlib import Path
from typing import Any

from shop_watch.core.entities import Item
from shop_watch.errors import SnapshotError


logger = logging.getLogger(__name__)


class SnapshotStore:
    """Load and save the baseline item list as a JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        """Check whether a baseline has been written yet."""
        return self.path.exists()

    def load(self) -> list[Item]:
        """Read and validate the baseline.

        Raises:
            SnapshotError: If the file is not valid JSON or does not match
                the item schema.
        """
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Baseline {self.path} is not valid JSON: {e}") from e

        if not isinstance(raw, list):
            raise SnapshotError(
                f"Baseline {self.path} must contain a list of items, got {type(raw).__name__}"
            )

        return [Item.from_dict(record) for record in raw]

    def save(self, items: list[Item]) -> None:
        """Overwrite the baseline with ``items``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.dumps(items), encoding="utf-8")
        logger.debug("Baseline with %d items written to %s", len(items), self.path)

    @staticmethod
    def dumps(items: list[Item]) -> str:
        data: list[dict[str, Any]] = [item.to_dict() for item in items]
        return json.dumps(data, indent=2, ensure_ascii=False)
