"""Basket engine for the demo storefront: catalog, search, pricing, basket, session."""

from basket_engine.catalog import Catalog, Product, default_catalog, filter_products, load_catalog
from basket_engine.errors import (
    AuthenticationError,
    BasketError,
    NotFoundError,
    PersistenceError,
    SessionError,
)
from basket_engine.pricing import PricingRule, effective_price_and_unit
from basket_engine.session import SessionBoundary
from basket_engine.store import (
    BasketLineItem,
    BasketRepository,
    BasketStore,
    InMemoryBasketRepository,
    JsonFileBasketRepository,
    LocalStorage,
)

__version__ = "1.0.0"

__all__ = [
    "AuthenticationError",
    "BasketError",
    "BasketLineItem",
    "BasketRepository",
    "BasketStore",
    "Catalog",
    "InMemoryBasketRepository",
    "JsonFileBasketRepository",
    "LocalStorage",
    "NotFoundError",
    "PersistenceError",
    "PricingRule",
    "Product",
    "SessionBoundary",
    "SessionError",
    "default_catalog",
    "effective_price_and_unit",
    "filter_products",
    "load_catalog",
]
