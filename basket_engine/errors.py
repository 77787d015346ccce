"""Exception hierarchy for the basket engine."""

from __future__ import annotations


class BasketError(Exception):
    """Base class for all basket engine errors."""


class NotFoundError(BasketError):
    """Raised when a product code is absent from the catalog."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Product not found: {code}")
        self.code = code


class PersistenceError(BasketError):
    """Raised when the basket cannot be read from or written to storage."""


class SessionError(BasketError):
    """Raised when the basket is used without an active session."""


class AuthenticationError(BasketError):
    """Raised when login credentials are rejected."""
