import json
from datetime import date
from decimal import Decimal

import pytest

from charter.core.exceptions import ValidationError
from charter.core.shopping_list import InMemoryCartStorage, JsonFileCartStorage, ShoppingList
from charter.models import Yacht


def yacht_dict(yacht_id, name="Azure Dream"):
    return {"id": yacht_id, "name": name, "price_per_hour": "500.00", "capacity": 12}


class TestShoppingList:
    def test_add_and_persist(self):
        storage = InMemoryCartStorage()
        shopping_list = ShoppingList(storage)

        assert shopping_list.add(yacht_dict(1)) is True

        reloaded = ShoppingList(storage)
        assert reloaded.count() == 1
        assert reloaded.items[0].yacht["name"] == "Azure Dream"
        assert reloaded.contains(1)

    def test_no_duplicates(self):
        shopping_list = ShoppingList(InMemoryCartStorage())
        shopping_list.add(yacht_dict(1))
        assert shopping_list.add(yacht_dict(1, name="Renamed")) is False
        assert shopping_list.count() == 1

    def test_accepts_orm_objects(self):
        shopping_list = ShoppingList(InMemoryCartStorage())
        shopping_list.add(Yacht(id=5, name="Sea Breeze", price_per_hour=Decimal("300")))
        snapshot = shopping_list.items[0].yacht
        assert snapshot["id"] == 5
        assert snapshot["price_per_hour"] == Decimal("300")
        assert "options" not in snapshot

    def test_remove_and_clear(self):
        storage = InMemoryCartStorage()
        shopping_list = ShoppingList(storage)
        shopping_list.add(yacht_dict(1))
        shopping_list.add(yacht_dict(2))

        shopping_list.remove(1)
        assert [item.yacht_id for item in shopping_list.items] == [2]

        shopping_list.clear()
        assert shopping_list.count() == 0
        assert storage.load() == []

    def test_set_dates(self):
        storage = InMemoryCartStorage()
        shopping_list = ShoppingList(storage)
        shopping_list.add(yacht_dict(1))

        shopping_list.set_dates(1, date(2025, 8, 1), date(2025, 8, 3))

        saved = storage.load()[0]
        assert saved["start_date"] == "2025-08-01"
        assert saved["end_date"] == "2025-08-03"

    def test_end_date_must_follow_start_date(self):
        shopping_list = ShoppingList(InMemoryCartStorage())
        shopping_list.add(yacht_dict(1))
        with pytest.raises(ValidationError):
            shopping_list.set_dates(1, date(2025, 8, 3), date(2025, 8, 1))

    def test_dates_for_unknown_yacht(self):
        shopping_list = ShoppingList(InMemoryCartStorage())
        with pytest.raises(ValidationError):
            shopping_list.set_dates(9, date(2025, 8, 1), date(2025, 8, 2))


class TestJsonFileCartStorage:
    def test_survives_reload(self, tmp_path):
        path = tmp_path / "profile" / "shopping_list.json"
        ShoppingList(JsonFileCartStorage(path)).add(yacht_dict(1))

        reloaded = ShoppingList(JsonFileCartStorage(path))

        assert reloaded.contains(1)
        assert json.loads(path.read_text(encoding="utf-8"))[0]["yacht"]["id"] == 1

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileCartStorage(tmp_path / "none.json").load() == []

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "shopping_list.json"
        path.write_text("{not json", encoding="utf-8")
        assert ShoppingList(JsonFileCartStorage(path)).count() == 0

    @pytest.mark.parametrize("content", ["{}", '"x"', "42", "null"])
    def test_non_list_content_is_ignored(self, tmp_path, content):
        path = tmp_path / "shopping_list.json"
        path.write_text(content, encoding="utf-8")
        assert ShoppingList(JsonFileCartStorage(path)).count() == 0

    def test_malformed_entries_are_dropped(self, tmp_path):
        path = tmp_path / "shopping_list.json"
        path.write_text(
            json.dumps([1, {"yacht": "x"}, {"yacht": {"id": 7, "name": "Sea Breeze"}}]),
            encoding="utf-8",
        )

        shopping_list = ShoppingList(JsonFileCartStorage(path))

        assert shopping_list.count() == 1
        assert shopping_list.contains(7)
