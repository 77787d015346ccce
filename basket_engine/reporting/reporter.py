"""Basket summaries for display and export.

Builds a structured summary of the basket (lines, quantities, line totals,
grand total), renders the storefront's display strings, and writes the
summary as YAML or JSON. verify_displayed_total() checks a total shown by a
UI against the exact basket total with the display tolerance of one cent.
"""

from __future__ import annotations

import json
import re
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

import yaml

from basket_engine.store.basket import BasketStore

EMPTY_BASKET = "Your basket is empty."
TOTAL_PREFIX = "Total: "

# Maximum difference between a displayed and a computed total
DISPLAY_TOLERANCE = Decimal("0.01")

CENT = Decimal("0.01")


def format_money(amount: Decimal, currency_symbol: str = "$") -> str:
    """Format an amount with two decimals, e.g. "$7.98"."""
    return f"{currency_symbol}{amount.quantize(CENT, rounding=ROUND_HALF_UP)}"


def parse_displayed_total(text: str) -> Decimal:
    """Extract the amount from a "Total: $x.yy" string (0 if absent)."""
    match = re.search(r"(\d+\.\d+)", text)
    return Decimal(match.group(1)) if match else Decimal("0")


class BasketReporter:
    """Renders a basket store's contents."""

    def __init__(self, basket: BasketStore, currency_symbol: str = "$") -> None:
        self.basket = basket
        self.currency_symbol = currency_symbol

    def total_text(self) -> str:
        """The storefront total line, e.g. "Total: $7.98"."""
        return TOTAL_PREFIX + format_money(self.basket.total(), self.currency_symbol)

    def lines(self) -> list[str]:
        """Human-readable basket listing, one string per output line."""
        if self.basket.is_empty():
            return [EMPTY_BASKET, self.total_text()]
        out = []
        for item in self.basket.items():
            out.append(
                f"{item.product_code}  {item.description}  "
                f"{format_money(item.effective_price, self.currency_symbol)}/{item.effective_unit}"
                f"  x{item.quantity}  = {format_money(item.line_total, self.currency_symbol)}"
            )
        out.append(self.total_text())
        return out

    def generate_report(self) -> dict[str, Any]:
        """Build the basket summary dict.

        Prices and totals are strings so that no precision is lost.
        """
        items = [
            {
                "productCode": item.product_code,
                "description": item.description,
                "price": str(item.effective_price),
                "uom": item.effective_unit,
                "qty": item.quantity,
                "line_total": str(item.line_total),
            }
            for item in self.basket.items()
        ]
        return {
            "basket": {
                "items": items,
                "summary": {
                    "lines": len(items),
                    "units": sum(i["qty"] for i in items),
                    "total": str(self.basket.total()),
                    "display_total": self.total_text(),
                    "empty": self.basket.is_empty(),
                },
            }
        }

    def verify_displayed_total(self, displayed: Decimal | str) -> bool:
        """Check a displayed total against the exact basket total.

        Args:
            displayed: Amount, or a display string such as "Total: $7.98".

        Returns:
            True if the two differ by less than one cent.
        """
        if isinstance(displayed, str):
            displayed = parse_displayed_total(displayed)
        return abs(self.basket.total() - displayed) < DISPLAY_TOLERANCE

    def write_yaml(self, path: Path) -> None:
        """Write the summary as a YAML file."""
        report = self.generate_report()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(
                report,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    def write_json(self, path: Path) -> None:
        """Write the summary as a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.generate_report(), f, indent=2)
            f.write("\n")
