"""Basket store: add/merge, clear and totals over a persisted line-item list.

Each mutation is a read-mutate-write step against the repository: the
current basket is loaded, the change is applied to a working copy, the
copy is saved, and only then does it become the store's state. A failed
lookup or a failed save leaves the basket unchanged.
"""

from __future__ import annotations

import copy
from decimal import Decimal

from basket_engine.catalog.catalog import Catalog
from basket_engine.events import EventLog
from basket_engine.pricing.rules import DEFAULT_RULE, PricingRule
from basket_engine.store.line_item import BasketLineItem
from basket_engine.store.repository import BasketRepository

BASKET_CLEARED = "Basket cleared!"


def added_message(description: str) -> str:
    """Confirmation shown after a product is added."""
    return f"{description} added to basket!"


class BasketStore:
    """Ordered basket line items, at most one per product code."""

    def __init__(
        self,
        catalog: Catalog,
        repository: BasketRepository,
        pricing: PricingRule = DEFAULT_RULE,
        events: EventLog | None = None,
    ) -> None:
        self.catalog = catalog
        self.repository = repository
        self.pricing = pricing
        self.events = events if events is not None else EventLog()
        self._items: dict[str, BasketLineItem] = {}
        self._refresh()

    def _refresh(self) -> None:
        """Reload line items from the repository."""
        items: dict[str, BasketLineItem] = {}
        for item in self.repository.load_basket():
            existing = items.get(item.product_code)
            if existing is not None:
                existing.quantity += item.quantity
            else:
                items[item.product_code] = item
        self._items = items

    def _commit(self, items: dict[str, BasketLineItem]) -> None:
        self.repository.save_basket(list(items.values()))
        self._items = items

    def add(self, product_code: str) -> str:
        """Add one unit of a product to the basket.

        A repeated code increments the existing line; its snapshot price
        and unit stay as they were. A new code gets a line priced by the
        pricing rule.

        Args:
            product_code: Catalog code of the product.

        Returns:
            Confirmation message with the product's catalog description.

        Raises:
            NotFoundError: If the code is not in the catalog.
            PersistenceError: If the basket cannot be loaded or saved.
        """
        product = self.catalog.get(product_code)
        self._refresh()
        items = copy.deepcopy(self._items)

        line = items.get(product_code)
        if line is not None:
            line.quantity += 1
        else:
            price, unit = self.pricing.effective_price_and_unit(product)
            line = BasketLineItem(
                product_code=product.code,
                description=product.description,
                effective_price=price,
                effective_unit=unit,
            )
            items[product_code] = line

        self._commit(items)
        self.events.emit(
            "item_added",
            code=product_code,
            quantity=line.quantity,
            price=str(line.effective_price),
            uom=line.effective_unit,
        )
        return added_message(product.description)

    def clear(self) -> str:
        """Remove every line item.

        Returns:
            The fixed "Basket cleared!" confirmation.

        Raises:
            PersistenceError: If the empty basket cannot be saved.
        """
        removed = len(self._items)
        self._commit({})
        self.events.emit("basket_cleared", removed=removed)
        return BASKET_CLEARED

    def items(self) -> list[BasketLineItem]:
        """Line items in first-add order (copies)."""
        return [copy.copy(item) for item in self._items.values()]

    def total(self) -> Decimal:
        """Exact sum of price times quantity over all lines."""
        return sum((item.line_total for item in self._items.values()), Decimal("0"))

    def is_empty(self) -> bool:
        return not self._items

    def item_count(self) -> int:
        """Number of distinct lines."""
        return len(self._items)

    def quantity_of(self, product_code: str) -> int:
        """Quantity of a product in the basket (0 if absent)."""
        item = self._items.get(product_code)
        return item.quantity if item is not None else 0
