"""Case-insensitive substring search over the catalog."""

from __future__ import annotations

from basket_engine.catalog.catalog import Catalog, Product


def matches(product: Product, query: str) -> bool:
    """Check whether a product matches a search query.

    A product matches when the stripped, case-folded query is a substring
    of its code or its description. An empty query matches everything.
    """
    needle = query.strip().lower()
    if not needle:
        return True
    return needle in product.code.lower() or needle in product.description.lower()


def filter_products(catalog: Catalog, query: str) -> list[Product]:
    """Return the products matching a query, in catalog order.

    Args:
        catalog: Catalog to search.
        query: Search text typed by the shopper.

    Returns:
        Matching products; all products for an empty query.
    """
    return [p for p in catalog.all() if matches(p, query)]
