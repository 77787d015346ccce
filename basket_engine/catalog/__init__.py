"""Product catalog and search."""

from basket_engine.catalog.catalog import (
    DEFAULT_PRODUCTS,
    Catalog,
    Product,
    code_number,
    default_catalog,
    load_catalog,
)
from basket_engine.catalog.search import filter_products, matches

__all__ = [
    "Catalog",
    "DEFAULT_PRODUCTS",
    "Product",
    "code_number",
    "default_catalog",
    "filter_products",
    "load_catalog",
    "matches",
]
