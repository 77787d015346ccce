"""Basket engine configuration file management.

Reads and writes the .basket_config JSON file holding the storage location,
catalog source, demo credentials and pricing-rule parameters. Missing keys
are filled from DEFAULT_CONFIG; a corrupted file falls back to defaults.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

from basket_engine.pricing.rules import PricingRule

# Environment variables overriding the configured demo credentials
USERNAME_ENV = "BASKET_USERNAME"
PASSWORD_ENV = "BASKET_PASSWORD"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "storage_path": ".basket/storage.json",
    "catalog_path": None,
    "currency_symbol": "$",
    "username": "user1",
    "password": "user1",
    "pricing": {
        "enabled": True,
        "modulus": 7,
        "trigger": 5,
        "unit_length": 2,
        "reduction": "0.20",
        "sub_units": {"kg": "g"},
    },
}


class BasketConfig:
    """Manages the .basket_config JSON configuration file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._load()

    def _load(self) -> None:
        """Load config from the file."""
        assert self.path is not None
        try:
            text = self.path.read_text()
            data = json.loads(text)
            if isinstance(data, dict):
                merged = {**copy.deepcopy(DEFAULT_CONFIG), **data}
                if isinstance(data.get("pricing"), dict):
                    merged["pricing"] = {**DEFAULT_CONFIG["pricing"], **data["pricing"]}
                else:
                    merged["pricing"] = copy.deepcopy(DEFAULT_CONFIG["pricing"])
                self._data = merged
        except (json.JSONDecodeError, OSError):
            self._data = copy.deepcopy(DEFAULT_CONFIG)

    def save(self) -> None:
        """Write config to the file."""
        if self.path is None:
            raise ValueError("No config file path specified")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._data, f, indent=2)
            f.write("\n")

    @property
    def config(self) -> dict[str, Any]:
        """Get the full configuration dict."""
        return copy.deepcopy(self._data)

    @property
    def storage_path(self) -> Path:
        """Get the local storage file path."""
        return Path(self._data.get("storage_path") or DEFAULT_CONFIG["storage_path"])

    @property
    def catalog_path(self) -> Path | None:
        """Get the catalog file path (None = built-in demo catalog)."""
        val = self._data.get("catalog_path")
        return Path(val) if val else None

    @property
    def currency_symbol(self) -> str:
        return str(self._data.get("currency_symbol", DEFAULT_CONFIG["currency_symbol"]))

    @property
    def username(self) -> str:
        """Get the demo username; the BASKET_USERNAME environment variable wins."""
        return os.environ.get(USERNAME_ENV) or str(self._data.get("username", DEFAULT_CONFIG["username"]))

    @property
    def password(self) -> str:
        """Get the demo password; the BASKET_PASSWORD environment variable wins."""
        return os.environ.get(PASSWORD_ENV) or str(self._data.get("password", DEFAULT_CONFIG["password"]))

    @property
    def pricing_rule(self) -> PricingRule:
        """Build the pricing rule from the pricing section."""
        return PricingRule.from_config(self._data.get("pricing", {}))

    def set_config(
        self,
        storage_path: str | None = None,
        catalog_path: str | None = None,
        pricing_enabled: bool | None = None,
    ) -> None:
        """Update configuration values."""
        if storage_path is not None:
            self._data["storage_path"] = storage_path
        if catalog_path is not None:
            self._data["catalog_path"] = catalog_path
        if pricing_enabled is not None:
            self._data["pricing"]["enabled"] = pricing_enabled
