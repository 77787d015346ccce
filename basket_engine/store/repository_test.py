"""Unit tests for basket persistence: records, repositories and local storage."""

from __future__ import annotations

import json
import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from basket_engine.errors import PersistenceError
from basket_engine.store.line_item import BasketLineItem
from basket_engine.store.repository import (
    BASKET_KEY,
    InMemoryBasketRepository,
    JsonFileBasketRepository,
    decode_basket,
    encode_basket,
)
from basket_engine.store.storage import LocalStorage


def _item(code="P001", qty=1) -> BasketLineItem:
    return BasketLineItem(code, "Fresh Apples", Decimal("5.99"), "kg", qty)


class TestBasketLineItem:
    """Tests for line item records."""

    def test_zero_quantity_rejected(self):
        """A line item cannot have quantity 0."""
        with pytest.raises(ValueError):
            _item(qty=0)

    def test_record_fields(self):
        """Records use productCode, description, price, uom, qty."""
        assert _item(qty=2).to_record() == {
            "productCode": "P001",
            "description": "Fresh Apples",
            "price": "5.99",
            "uom": "kg",
            "qty": 2,
        }

    def test_numeric_price_accepted(self):
        """Stored prices may be numbers."""
        item = BasketLineItem.from_record(
            {"productCode": "P003", "description": "Bread", "price": 1.99, "uom": "unit", "qty": 1}
        )
        assert item.effective_price == Decimal("1.99")

    def test_missing_field_rejected(self):
        """A record without qty is rejected."""
        with pytest.raises(ValueError, match="qty"):
            BasketLineItem.from_record(
                {"productCode": "P003", "description": "Bread", "price": "1.99", "uom": "unit"}
            )

    @pytest.mark.parametrize("qty", [2.9, 0.5, True, "2.5", None])
    def test_non_integer_qty_rejected(self, qty):
        """A stored qty must be a whole number, never truncated."""
        with pytest.raises(ValueError, match="Invalid quantity"):
            BasketLineItem.from_record(
                {"productCode": "P002", "description": "Bananas", "price": "3.49", "uom": "kg", "qty": qty}
            )

    def test_digit_string_qty_accepted(self):
        item = BasketLineItem.from_record(
            {"productCode": "P002", "description": "Bananas", "price": "3.49", "uom": "kg", "qty": "3"}
        )
        assert item.quantity == 3

    def test_line_total(self):
        """line_total is price times quantity."""
        assert _item(qty=3).line_total == Decimal("17.97")


class TestEncoding:
    """Tests for the stored JSON array format."""

    def test_encode_empty(self):
        """An empty basket encodes as []."""
        assert encode_basket([]) == "[]"

    def test_decode_absent(self):
        """An absent value decodes to an empty basket."""
        assert decode_basket(None) == []

    def test_encode_one_object_per_item(self):
        """Each line becomes one JSON object, in order."""
        data = json.loads(encode_basket([_item("P001"), _item("P002", 4)]))
        assert [d["productCode"] for d in data] == ["P001", "P002"]
        assert data[1]["qty"] == 4

    def test_decode_not_array(self):
        """A JSON object is not a basket."""
        with pytest.raises(PersistenceError):
            decode_basket('{"productCode": "P001"}')

    def test_decode_invalid_json(self):
        """Garbage raises PersistenceError."""
        with pytest.raises(PersistenceError):
            decode_basket("[{")

    def test_decode_malformed_item(self):
        """A record with qty 0 raises PersistenceError."""
        with pytest.raises(PersistenceError):
            decode_basket(
                '[{"productCode": "P001", "description": "x", "price": "1", "uom": "kg", "qty": 0}]'
            )

    def test_decode_fractional_qty(self):
        """A fractional qty is a malformed record, not quantity 2."""
        with pytest.raises(PersistenceError):
            decode_basket(
                '[{"productCode": "P002", "description": "Organic Bananas",'
                ' "price": "3.49", "uom": "kg", "qty": 2.9}]'
            )


class TestInMemoryBasketRepository:
    """Tests for the in-memory repository."""

    def test_empty_by_default(self):
        assert InMemoryBasketRepository().load_basket() == []

    def test_save_overwrites(self):
        """save_basket replaces the stored collection."""
        repo = InMemoryBasketRepository()
        repo.save_basket([_item("P001"), _item("P002")])
        repo.save_basket([_item("P003")])
        assert [i.product_code for i in repo.load_basket()] == ["P003"]
        assert repo.save_count == 2


class TestLocalStorage:
    """Tests for the JSON-file key-value storage."""

    def test_missing_file_is_empty(self):
        """A nonexistent file behaves as empty storage."""
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = LocalStorage(Path(tmpdir) / "storage.json")
            assert storage.get_item("basket") is None
            assert storage.keys() == []

    def test_set_and_get(self):
        """Values survive a new LocalStorage instance."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "storage.json"
            LocalStorage(path).set_item("basket", "[]")
            assert LocalStorage(path).get_item("basket") == "[]"

    def test_set_creates_parent_dirs(self):
        """Writing creates parent directories if needed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "sub" / "dir" / "storage.json"
            LocalStorage(path).set_item("k", "v")
            assert path.exists()

    def test_remove_item(self):
        """remove_item reports whether the slot existed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = LocalStorage(Path(tmpdir) / "storage.json")
            storage.set_item("a", "1")
            assert storage.remove_item("a") is True
            assert storage.remove_item("a") is False

    def test_clear(self):
        """clear removes every slot."""
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = LocalStorage(Path(tmpdir) / "storage.json")
            storage.set_item("a", "1")
            storage.set_item("b", "2")
            storage.clear()
            assert storage.keys() == []

    def test_corrupted_file_raises(self):
        """A corrupted storage file raises PersistenceError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "storage.json"
            path.write_text("{ invalid json }")
            with pytest.raises(PersistenceError):
                LocalStorage(path).get_item("basket")

    def test_unwritable_path_raises(self):
        """A write under a regular file raises PersistenceError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = Path(tmpdir) / "blocker"
            blocker.write_text("")
            with pytest.raises(PersistenceError):
                LocalStorage(blocker / "storage.json").set_item("a", "1")


class TestJsonFileBasketRepository:
    """Tests for the file-backed basket repository."""

    def test_roundtrip(self):
        """Saved lines load back in order with their snapshots."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "storage.json"
            JsonFileBasketRepository(path).save_basket([_item("P001", 2), _item("P002")])
            loaded = JsonFileBasketRepository(path).load_basket()
            assert [(i.product_code, i.quantity) for i in loaded] == [("P001", 2), ("P002", 1)]
            assert loaded[0].effective_price == Decimal("5.99")

    def test_basket_slot_holds_json_string(self):
        """The basket slot holds the JSON-encoded array as a string."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "storage.json"
            JsonFileBasketRepository(path).save_basket([])
            data = json.loads(path.read_text())
            assert data[BASKET_KEY] == "[]"

    def test_shares_storage_with_other_slots(self):
        """Saving the basket keeps unrelated slots."""
        with tempfile.TemporaryDirectory() as tmpdir:
            storage = LocalStorage(Path(tmpdir) / "storage.json")
            storage.set_item("session", "{}")
            JsonFileBasketRepository(storage).save_basket([_item()])
            assert storage.get_item("session") == "{}"

    def test_absent_slot_is_empty(self):
        """No basket slot loads as an empty basket."""
        with tempfile.TemporaryDirectory() as tmpdir:
            repo = JsonFileBasketRepository(Path(tmpdir) / "storage.json")
            assert repo.load_basket() == []
