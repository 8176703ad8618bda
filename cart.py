"""Shopping cart.

Client-held list of (product, quantity) pairs. Nothing here is persisted;
`to_order_items` produces the line items sent to POST /api/orders.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional


@dataclass
class CartItem:
    """A product and the quantity wanted. Quantity is always >= 1."""

    product: Dict[str, Any]
    quantity: int = 1

    @property
    def product_id(self) -> str:
        return self.product["id"]

    @property
    def line_total(self) -> Decimal:
        return Decimal(str(self.product["price"])) * self.quantity


class Cart:
    def __init__(self):
        self.items: List[CartItem] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def _find(self, product_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add(self, product: Dict[str, Any]) -> CartItem:
        existing = self._find(product["id"])
        if existing:
            existing.quantity += 1
            return existing
        item = CartItem(product=product, quantity=1)
        self.items.append(item)
        return item

    def update_quantity(self, product_id: str, quantity: int) -> None:
        item = self._find(product_id)
        if item:
            item.quantity = max(1, int(quantity))

    def remove(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def clear(self) -> None:
        self.items = []

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> Decimal:
        total = sum((item.line_total for item in self.items), Decimal("0"))
        return total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def to_order_items(self) -> List[Dict[str, Any]]:
        return [
            {
                "product_id": item.product_id,
                "product_name": item.product["name"],
                "quantity": item.quantity,
                "price": str(item.product["price"]),
            }
            for item in self.items
        ]
