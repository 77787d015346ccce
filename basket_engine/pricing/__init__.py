"""Pricing rule engine: effective price and unit for new basket lines."""

from basket_engine.pricing.rules import (
    DEFAULT_RULE,
    PricingRule,
    adjustment_key,
    effective_price_and_unit,
)

__all__ = [
    "DEFAULT_RULE",
    "PricingRule",
    "adjustment_key",
    "effective_price_and_unit",
]
