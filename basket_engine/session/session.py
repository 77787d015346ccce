"""Session boundary: ties the basket lifecycle to login and logout.

Login starts a session with an empty basket. Logout clears the basket
through BasketStore.clear() and then ends the session. When a
LocalStorage is supplied the logged-in user is kept in its "session"
slot so a later process can resume() the same session.
"""

from __future__ import annotations

import json

from basket_engine.catalog.catalog import Catalog
from basket_engine.errors import AuthenticationError, SessionError
from basket_engine.events import EventLog
from basket_engine.pricing.rules import DEFAULT_RULE, PricingRule
from basket_engine.store.basket import BasketStore
from basket_engine.store.repository import BasketRepository
from basket_engine.store.storage import LocalStorage

INVALID_LOGIN = "Invalid username or password"

# Storage slot holding the logged-in user
SESSION_KEY = "session"


class SessionBoundary:
    """Owns the basket store for the duration of a login session."""

    def __init__(
        self,
        catalog: Catalog,
        repository: BasketRepository,
        username: str = "user1",
        password: str = "user1",
        pricing: PricingRule = DEFAULT_RULE,
        events: EventLog | None = None,
        storage: LocalStorage | None = None,
    ) -> None:
        self.catalog = catalog
        self.repository = repository
        self._username = username
        self._password = password
        self.pricing = pricing
        self.events = events if events is not None else EventLog()
        self.storage = storage
        self.user: str | None = None
        self._basket: BasketStore | None = None

    @property
    def active(self) -> bool:
        return self._basket is not None

    @property
    def basket(self) -> BasketStore:
        """The active session's basket.

        Raises:
            SessionError: If no session is active.
        """
        if self._basket is None:
            raise SessionError("No active session; log in first")
        return self._basket

    def _open(self, username: str) -> BasketStore:
        self.user = username
        self._basket = BasketStore(
            self.catalog, self.repository, pricing=self.pricing, events=self.events
        )
        return self._basket

    def login(self, username: str, password: str) -> BasketStore:
        """Start a session with an empty basket.

        Args:
            username: Shopper's username.
            password: Shopper's password.

        Returns:
            The session's basket store.

        Raises:
            AuthenticationError: If the credentials do not match.
            PersistenceError: If the empty basket cannot be saved.
        """
        if username != self._username or password != self._password:
            self.events.emit("login_failed", username=username)
            raise AuthenticationError(INVALID_LOGIN)

        # Baskets never carry over between sessions
        self.repository.save_basket([])
        if self.storage is not None:
            self.storage.set_item(SESSION_KEY, json.dumps({"username": username}))
        self.events.emit("logged_in", username=username)
        return self._open(username)

    def resume(self) -> BasketStore | None:
        """Reattach to a session persisted in storage, keeping its basket.

        Returns:
            The basket store, or None if no session is persisted.
        """
        if self._basket is not None:
            return self._basket
        if self.storage is None:
            return None
        raw = self.storage.get_item(SESSION_KEY)
        if raw is None:
            return None
        try:
            username = json.loads(raw).get("username")
        except (json.JSONDecodeError, AttributeError):
            return None
        if not username:
            return None
        return self._open(username)

    def logout(self) -> str:
        """Clear the basket and end the session.

        Returns:
            The basket's clear confirmation.

        Raises:
            SessionError: If no session is active.
        """
        message = self.basket.clear()
        if self.storage is not None:
            self.storage.remove_item(SESSION_KEY)
        self.events.emit("logged_out", username=self.user)
        self.user = None
        self._basket = None
        return message
