"""Durability boundary for the basket.

BasketRepository is the two-operation interface the basket store depends
on. The stored form is a JSON array with one object per line item
(productCode, description, price, uom, qty).
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable

from basket_engine.errors import PersistenceError
from basket_engine.store.line_item import BasketLineItem
from basket_engine.store.storage import LocalStorage

# Storage slot holding the serialized basket
BASKET_KEY = "basket"


def encode_basket(items: Iterable[BasketLineItem]) -> str:
    """Encode line items as the stored JSON array."""
    return json.dumps([item.to_record() for item in items])


def decode_basket(text: str | None) -> list[BasketLineItem]:
    """Decode the stored JSON array into line items.

    Args:
        text: Stored value, or None when nothing has been stored.

    Returns:
        Line items in stored order; empty list when absent.

    Raises:
        PersistenceError: If the value is not a valid basket array.
    """
    if text is None:
        return []
    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Stored basket is not valid JSON: {e}") from e
    if not isinstance(records, list):
        raise PersistenceError("Stored basket is not a JSON array")
    try:
        return [BasketLineItem.from_record(r) for r in records]
    except (ValueError, TypeError) as e:
        raise PersistenceError(f"Stored basket has a malformed line item: {e}") from e


class BasketRepository(ABC):
    """Loads and saves the full basket line-item collection."""

    @abstractmethod
    def load_basket(self) -> list[BasketLineItem]:
        """Return the stored line items, or an empty list if none."""

    @abstractmethod
    def save_basket(self, items: list[BasketLineItem]) -> None:
        """Overwrite the stored basket with the given line items."""


class InMemoryBasketRepository(BasketRepository):
    """Keeps the encoded basket in memory."""

    def __init__(self, initial: str | None = None) -> None:
        self.stored: str | None = initial
        self.save_count = 0

    def load_basket(self) -> list[BasketLineItem]:
        return decode_basket(self.stored)

    def save_basket(self, items: list[BasketLineItem]) -> None:
        self.stored = encode_basket(items)
        self.save_count += 1

    @property
    def records(self) -> list[dict[str, Any]]:
        """The stored basket as decoded JSON records."""
        return json.loads(self.stored) if self.stored is not None else []


class JsonFileBasketRepository(BasketRepository):
    """Stores the basket in the "basket" slot of a LocalStorage file."""

    def __init__(self, storage: LocalStorage | str | Path, key: str = BASKET_KEY) -> None:
        if not isinstance(storage, LocalStorage):
            storage = LocalStorage(storage)
        self.storage = storage
        self.key = key

    def load_basket(self) -> list[BasketLineItem]:
        return decode_basket(self.storage.get_item(self.key))

    def save_basket(self, items: list[BasketLineItem]) -> None:
        self.storage.set_item(self.key, encode_basket(items))
