"""Conditional price/unit adjustment applied when a product enters the basket.

The adjustment key for a product is

    (numeric code suffix + floor(base_price * 100)) mod 7

When the key equals 5 and the base unit label is exactly two characters
long, the line is priced 0.20 lower (never below zero) and measured in the
unit's sub-unit (kg -> g). Every other product passes through unchanged.
All arithmetic is Decimal so that floor(5.99 * 100) is exactly 599.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping

from basket_engine.catalog.catalog import Product, code_number

DEFAULT_MODULUS = 7
DEFAULT_TRIGGER = 5
DEFAULT_UNIT_LENGTH = 2
DEFAULT_REDUCTION = Decimal("0.20")
DEFAULT_SUB_UNITS: Mapping[str, str] = MappingProxyType({"kg": "g"})

ZERO = Decimal("0")


@dataclass(frozen=True)
class PricingRule:
    """Parameters of the price/unit adjustment.

    A sub-unit missing from ``sub_units`` leaves the unit label as is while
    the price reduction still applies.
    """

    modulus: int = DEFAULT_MODULUS
    trigger: int = DEFAULT_TRIGGER
    unit_length: int = DEFAULT_UNIT_LENGTH
    reduction: Decimal = DEFAULT_REDUCTION
    sub_units: Mapping[str, str] = field(default_factory=lambda: DEFAULT_SUB_UNITS, hash=False)
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.modulus < 1:
            raise ValueError(f"Pricing modulus must be >= 1, got {self.modulus}")
        object.__setattr__(self, "sub_units", MappingProxyType(dict(self.sub_units)))

    @classmethod
    def from_config(cls, data: dict[str, Any]) -> PricingRule:
        """Build a rule from the "pricing" section of the configuration.

        Raises:
            ValueError: If a parameter is not a number or a mapping.
        """
        try:
            return cls(
                modulus=int(data.get("modulus", DEFAULT_MODULUS)),
                trigger=int(data.get("trigger", DEFAULT_TRIGGER)),
                unit_length=int(data.get("unit_length", DEFAULT_UNIT_LENGTH)),
                reduction=Decimal(str(data.get("reduction", DEFAULT_REDUCTION))),
                sub_units=dict(data.get("sub_units", DEFAULT_SUB_UNITS)),
                enabled=bool(data.get("enabled", True)),
            )
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Invalid pricing configuration: {data!r}") from e

    def adjustment_key(self, product: Product) -> int:
        """Compute the adjustment key for a product."""
        cents = math.floor(product.base_price * 100)
        return (code_number(product.code) + cents) % self.modulus

    def applies_to(self, product: Product) -> bool:
        """Whether the adjustment changes this product's price and unit."""
        if not self.enabled:
            return False
        return (
            self.adjustment_key(product) == self.trigger
            and len(product.base_unit) == self.unit_length
        )

    def effective_price_and_unit(self, product: Product) -> tuple[Decimal, str]:
        """Return the (price, unit) a new basket line is snapshotted with."""
        if not self.applies_to(product):
            return product.base_price, product.base_unit
        price = max(product.base_price - self.reduction, ZERO)
        unit = self.sub_units.get(product.base_unit, product.base_unit)
        return price, unit


DEFAULT_RULE = PricingRule()


def adjustment_key(product: Product) -> int:
    """Adjustment key under the default rule."""
    return DEFAULT_RULE.adjustment_key(product)


def effective_price_and_unit(product: Product) -> tuple[Decimal, str]:
    """Effective (price, unit) under the default rule."""
    return DEFAULT_RULE.effective_price_and_unit(product)
