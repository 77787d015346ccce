"""Product catalog for the storefront.

Provides Product (an immutable catalog record) and Catalog (an ordered,
read-only collection keyed by product code). Catalogs can be built from
the built-in demo product list or loaded from a JSON/YAML file that uses
the storefront's field names (productCode, description, price, uom, qty).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable

import yaml

from basket_engine.errors import NotFoundError

# Letter prefix followed by zero-padded digits, e.g. "P001"
CODE_PATTERN = re.compile(r"^([A-Za-z]+)(\d+)$")

# Products listed by the demo storefront, in display order
DEFAULT_PRODUCTS: list[dict[str, Any]] = [
    {"productCode": "P001", "description": "Fresh Apples", "price": "5.99", "uom": "kg", "qty": 10},
    {"productCode": "P002", "description": "Organic Bananas", "price": "3.49", "uom": "kg", "qty": 15},
    {"productCode": "P003", "description": "Whole Wheat Bread", "price": "1.99", "uom": "unit", "qty": 20},
    {"productCode": "P004", "description": "Fresh Milk", "price": "2.89", "uom": "liter", "qty": 12},
    {"productCode": "P005", "description": "Chicken Breast", "price": "6.49", "uom": "kg", "qty": 8},
    {"productCode": "P006", "description": "Beef Mince", "price": "4.99", "uom": "kg", "qty": 10},
]


def code_number(code: str) -> int:
    """Return the numeric suffix of a product code as an integer.

    Args:
        code: Product code, e.g. "P005".

    Returns:
        The digit suffix interpreted as an integer (5 for "P005").

    Raises:
        ValueError: If the code is not a letter prefix plus digits.
    """
    match = CODE_PATTERN.match(code)
    if match is None:
        raise ValueError(f"Invalid product code '{code}'")
    return int(match.group(2))


@dataclass(frozen=True)
class Product:
    """A single catalog entry.

    Storefront prices carry two decimal places, but base_price keeps any
    extra precision it is given. The adjustment key floors price * 100, so a
    sub-cent price such as 1.999 counts as 199 cents.
    """

    code: str
    description: str
    base_price: Decimal
    base_unit: str
    available_qty: int = 0

    def __post_init__(self) -> None:
        code_number(self.code)
        if not isinstance(self.base_price, Decimal):
            object.__setattr__(self, "base_price", Decimal(str(self.base_price)))
        if not self.base_price.is_finite():
            raise ValueError(f"Non-finite price for product '{self.code}'")
        if self.base_price < 0:
            raise ValueError(f"Negative price for product '{self.code}'")
        if self.available_qty < 0:
            raise ValueError(f"Negative stock for product '{self.code}'")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Product:
        """Build a Product from a storefront record.

        Args:
            data: Dict with productCode, description, price, uom and
                optional qty keys.

        Returns:
            The constructed Product.

        Raises:
            ValueError: If a required field is missing or malformed.
        """
        try:
            price = Decimal(str(data["price"]))
            return cls(
                code=str(data["productCode"]),
                description=str(data["description"]),
                base_price=price,
                base_unit=str(data["uom"]),
                available_qty=int(data.get("qty", 0)),
            )
        except KeyError as e:
            raise ValueError(f"Product record missing field {e}") from e
        except InvalidOperation as e:
            raise ValueError(f"Invalid price in product record: {data.get('price')!r}") from e
        except TypeError as e:
            raise ValueError(f"Malformed product record: {data!r}") from e

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a storefront record."""
        return {
            "productCode": self.code,
            "description": self.description,
            "price": str(self.base_price),
            "uom": self.base_unit,
            "qty": self.available_qty,
        }


class Catalog:
    """Read-only, insertion-ordered collection of products keyed by code."""

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: dict[str, Product] = {}
        for product in products:
            if product.code in self._products:
                raise ValueError(f"Duplicate product code '{product.code}'")
            self._products[product.code] = product

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> Catalog:
        """Build a catalog from storefront records."""
        return cls(Product.from_dict(r) for r in records)

    def find_by_code(self, code: str) -> Product | None:
        """Look up a product by code.

        Returns:
            The product, or None if the code is not in the catalog.
        """
        return self._products.get(code)

    def get(self, code: str) -> Product:
        """Look up a product by code, failing if it is absent.

        Raises:
            NotFoundError: If the code is not in the catalog.
        """
        product = self._products.get(code)
        if product is None:
            raise NotFoundError(code)
        return product

    def all(self) -> list[Product]:
        """Return all products in insertion order."""
        return list(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, code: object) -> bool:
        return code in self._products


def default_catalog() -> Catalog:
    """Return the demo storefront's six-product catalog."""
    return Catalog.from_records(DEFAULT_PRODUCTS)


def load_catalog(path: str | Path) -> Catalog:
    """Load a catalog from a JSON or YAML file.

    The file holds either a list of product records or a mapping with a
    "products" list. Files ending in .yaml/.yml are parsed as YAML,
    anything else as JSON.

    Args:
        path: Path to the catalog file.

    Returns:
        The loaded Catalog.

    Raises:
        ValueError: If the file cannot be parsed or is not a product list.
    """
    path = Path(path)
    text = path.read_text()
    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Catalog file {path} could not be parsed: {e}") from e

    if isinstance(data, dict):
        data = data.get("products")
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {path} does not contain a product list")
    return Catalog.from_records(data)
