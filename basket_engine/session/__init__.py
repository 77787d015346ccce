"""Session boundary: basket lifecycle tied to login and logout."""

from basket_engine.session.session import INVALID_LOGIN, SESSION_KEY, SessionBoundary

__all__ = [
    "INVALID_LOGIN",
    "SESSION_KEY",
    "SessionBoundary",
]
