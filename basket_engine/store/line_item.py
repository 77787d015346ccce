"""Basket line item and its persisted record format."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


def _parse_quantity(value: Any) -> int:
    """Read a stored qty, accepting only whole numbers.

    Raises:
        ValueError: If the value is not an int or a string of digits.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"Invalid quantity {value!r}")


@dataclass
class BasketLineItem:
    """One basket row, keyed by product code.

    description, effective_price and effective_unit are a snapshot taken
    when the line was created; only quantity changes afterwards.
    """

    product_code: str
    description: str
    effective_price: Decimal
    effective_unit: str
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(
                f"Line item '{self.product_code}' must have quantity >= 1, got {self.quantity}"
            )

    @property
    def line_total(self) -> Decimal:
        return self.effective_price * self.quantity

    def to_record(self) -> dict[str, Any]:
        """Serialize to the stored basket record."""
        return {
            "productCode": self.product_code,
            "description": self.description,
            "price": str(self.effective_price),
            "uom": self.effective_unit,
            "qty": self.quantity,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> BasketLineItem:
        """Build a line item from a stored basket record.

        Prices may be stored as strings or numbers.

        Raises:
            ValueError: If the record is missing fields or malformed.
        """
        try:
            return cls(
                product_code=str(record["productCode"]),
                description=str(record["description"]),
                effective_price=Decimal(str(record["price"])),
                effective_unit=str(record["uom"]),
                quantity=_parse_quantity(record["qty"]),
            )
        except KeyError as e:
            raise ValueError(f"Basket record missing field {e}") from e
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Malformed basket record: {record!r}") from e
