"""
Client-local shopping list of yachts the visitor is interested in.

The list survives page reloads through whatever ``CartStorage`` it is given; it
never talks to the API.
"""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

from charter.core.exceptions import ValidationError
from charter.core.service_utils import validate_date_range

logger = logging.getLogger(__name__)

# Yacht fields kept in the list; enough to render it and price it offline
YACHT_SNAPSHOT_FIELDS = (
    "id",
    "name",
    "description",
    "main_image",
    "capacity",
    "price_per_hour",
    "price_per_day",
    "location",
)


class CartStorage(Protocol):
    def load(self) -> List[Dict[str, Any]]: ...

    def save(self, items: List[Dict[str, Any]]) -> None: ...


class InMemoryCartStorage:
    def __init__(self, items: Optional[List[Dict[str, Any]]] = None):
        self.items = list(items or [])

    def load(self) -> List[Dict[str, Any]]:
        return [dict(item) for item in self.items]

    def save(self, items: List[Dict[str, Any]]) -> None:
        self.items = [dict(item) for item in items]


class JsonFileCartStorage:
    """Keeps the list in a JSON file, e.g. under the user's profile directory."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable shopping list at %s", self.path)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring shopping list at %s: not a list", self.path)
            return []
        items = [
            entry
            for entry in data
            if isinstance(entry, dict) and isinstance(entry.get("yacht"), dict)
        ]
        if len(items) != len(data):
            logger.warning(
                "Dropped %d malformed entries from shopping list at %s",
                len(data) - len(items),
                self.path,
            )
        return items

    def save(self, items: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, default=str), encoding="utf-8")


@dataclass
class ShoppingListItem:
    yacht: Dict[str, Any]
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def yacht_id(self):
        return self.yacht.get("id")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShoppingListItem":
        return cls(
            yacht=dict(data.get("yacht") or {}),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )


def _yacht_snapshot(yacht: Any) -> Dict[str, Any]:
    if isinstance(yacht, Mapping):
        source = yacht
    elif hasattr(yacht, "model_dump"):
        source = yacht.model_dump(mode="json")
    else:
        source = {name: getattr(yacht, name, None) for name in YACHT_SNAPSHOT_FIELDS}
    return {name: source.get(name) for name in YACHT_SNAPSHOT_FIELDS}


class ShoppingList:
    def __init__(self, storage: CartStorage):
        self._storage = storage
        self._items = [ShoppingListItem.from_dict(data) for data in storage.load()]

    @property
    def items(self) -> List[ShoppingListItem]:
        return list(self._items)

    def _persist(self) -> None:
        self._storage.save([asdict(item) for item in self._items])

    def _find(self, yacht_id) -> Optional[ShoppingListItem]:
        return next((item for item in self._items if item.yacht_id == yacht_id), None)

    def add(self, yacht: Any) -> bool:
        """Add a yacht; returns False if it is already in the list."""
        snapshot = _yacht_snapshot(yacht)
        if self._find(snapshot["id"]) is not None:
            return False
        self._items.append(ShoppingListItem(yacht=snapshot))
        self._persist()
        return True

    def remove(self, yacht_id) -> None:
        self._items = [item for item in self._items if item.yacht_id != yacht_id]
        self._persist()

    def clear(self) -> None:
        self._items = []
        self._persist()

    def contains(self, yacht_id) -> bool:
        return self._find(yacht_id) is not None

    def count(self) -> int:
        return len(self._items)

    def set_dates(self, yacht_id, start_date: date, end_date: date) -> None:
        item = self._find(yacht_id)
        if item is None:
            raise ValidationError(
                "Yacht is not in the shopping list",
                "yacht_id",
                str(yacht_id),
                key="not_in_shopping_list",
            )
        validate_date_range(start_date, end_date)
        item.start_date = start_date.isoformat()
        item.end_date = end_date.isoformat()
        self._persist()
