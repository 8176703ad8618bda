"""Catalog filtering over an in-memory product list."""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

FEATURED_LIMIT = 8


def _price(product: Dict[str, Any]) -> Optional[Decimal]:
    try:
        return Decimal(str(product.get("price")))
    except (InvalidOperation, TypeError):
        return None


def matches_search(product: Dict[str, Any], query: Optional[str]) -> bool:
    if not query:
        return True
    needle = query.lower()
    name = (product.get("name") or "").lower()
    description = (product.get("description") or "").lower()
    return needle in name or needle in description


def matches_categories(product: Dict[str, Any], categories: Optional[Iterable[str]]) -> bool:
    selected = list(categories or [])
    return not selected or product.get("category") in selected


def matches_price(product: Dict[str, Any], min_price=None, max_price=None) -> bool:
    """Inclusive bounds; a None bound is open."""
    if min_price is None and max_price is None:
        return True
    price = _price(product)
    if price is None:
        return False
    if min_price is not None and price < Decimal(str(min_price)):
        return False
    if max_price is not None and price > Decimal(str(max_price)):
        return False
    return True


def filter_products(
    products: Iterable[Dict[str, Any]],
    query: Optional[str] = None,
    categories: Optional[Iterable[str]] = None,
    min_price=None,
    max_price=None,
) -> List[Dict[str, Any]]:
    categories = list(categories or [])
    return [
        p
        for p in products
        if matches_search(p, query) and matches_categories(p, categories) and matches_price(p, min_price, max_price)
    ]


def categories(products: Iterable[Dict[str, Any]]) -> List[str]:
    """Distinct categories, in the order they first appear."""
    seen: List[str] = []
    for p in products:
        category = p.get("category")
        if category and category not in seen:
            seen.append(category)
    return seen


def featured(products: List[Dict[str, Any]], limit: int = FEATURED_LIMIT) -> List[Dict[str, Any]]:
    return products[:limit]
