"""Client-local key-value storage backed by a JSON file.

Mirrors the browser's localStorage contract: string keys, string values,
get/set/remove/clear. The whole mapping lives in one JSON object on disk
and every write rewrites the file.
"""

from __future__ import annotations

import json
from pathlib import Path

from basket_engine.errors import PersistenceError


class LocalStorage:
    """Manages a JSON file of string slots."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        """Read all slots, treating a missing file as empty storage."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise PersistenceError(f"Cannot read storage {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Storage {self.path} is not a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        """Write all slots to the file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
                f.write("\n")
        except OSError as e:
            raise PersistenceError(f"Cannot write storage {self.path}: {e}") from e

    def get_item(self, key: str) -> str | None:
        """Get a slot value, or None if the slot is absent."""
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Set a slot value."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> bool:
        """Remove a slot.

        Returns:
            True if the slot was removed, False if it did not exist.
        """
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def clear(self) -> None:
        """Remove every slot."""
        self._write({})

    def keys(self) -> list[str]:
        """List slot names."""
        return list(self._read())
