"""Basket summaries: display strings, YAML/JSON reports, total checks."""

from basket_engine.reporting.reporter import (
    EMPTY_BASKET,
    TOTAL_PREFIX,
    BasketReporter,
    format_money,
    parse_displayed_total,
)

__all__ = [
    "BasketReporter",
    "EMPTY_BASKET",
    "TOTAL_PREFIX",
    "format_money",
    "parse_displayed_total",
]
