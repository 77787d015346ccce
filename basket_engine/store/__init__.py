"""Basket store, line items and the persistence boundary."""

from basket_engine.store.basket import BASKET_CLEARED, BasketStore, added_message
from basket_engine.store.line_item import BasketLineItem
from basket_engine.store.repository import (
    BASKET_KEY,
    BasketRepository,
    InMemoryBasketRepository,
    JsonFileBasketRepository,
    decode_basket,
    encode_basket,
)
from basket_engine.store.storage import LocalStorage

__all__ = [
    "BASKET_CLEARED",
    "BASKET_KEY",
    "BasketLineItem",
    "BasketRepository",
    "BasketStore",
    "InMemoryBasketRepository",
    "JsonFileBasketRepository",
    "LocalStorage",
    "added_message",
    "decode_basket",
    "encode_basket",
]
