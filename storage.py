import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

from database import create_document, get_documents
from schemas import Order as OrderSchema, OrderIn, OrderItem as OrderItemSchema, Product as ProductSchema, ProductUpdate

logger = logging.getLogger(__name__)

PRODUCTS = "products"
ORDERS = "orders"
ORDER_ITEMS = "order_items"


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return doc
    doc = dict(doc)
    _id = doc.get("_id")
    if isinstance(_id, ObjectId):
        doc["id"] = str(_id)
        del doc["_id"]
    for k, v in list(doc.items()):
        if isinstance(v, ObjectId):
            doc[k] = str(v)
    return doc


def to_object_id(value: str) -> Optional[ObjectId]:
    """Return an ObjectId, or None when the string is not a valid id."""
    if not ObjectId.is_valid(value or ""):
        return None
    return ObjectId(value)


def items_total(items) -> Decimal:
    total = sum((Decimal(item.price) * item.quantity for item in items), Decimal("0"))
    return total.quantize(Decimal("0.01"))


class Storage:
    """Reads and writes for products, orders and order items."""

    def __init__(self, db: Database):
        self.db = db

    # Products

    def get_all_products(self) -> List[Dict[str, Any]]:
        return [serialize_doc(d) for d in get_documents(PRODUCTS, database=self.db)]

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        obj_id = to_object_id(product_id)
        if obj_id is None:
            return None
        return serialize_doc(self.db[PRODUCTS].find_one({"_id": obj_id}))

    def create_product(self, data: ProductSchema) -> Dict[str, Any]:
        product_id = create_document(PRODUCTS, data, database=self.db)
        return self.get_product(product_id)

    def update_product(self, product_id: str, data: ProductUpdate) -> Optional[Dict[str, Any]]:
        obj_id = to_object_id(product_id)
        if obj_id is None:
            return None
        update_dict = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        update_dict["updated_at"] = datetime.now(timezone.utc)
        res = self.db[PRODUCTS].update_one({"_id": obj_id}, {"$set": update_dict})
        if res.matched_count == 0:
            return None
        return self.get_product(product_id)

    def delete_product(self, product_id: str) -> bool:
        obj_id = to_object_id(product_id)
        if obj_id is None:
            return False
        res = self.db[PRODUCTS].delete_one({"_id": obj_id})
        return res.deleted_count > 0

    def decrement_stock(self, product_id: str, quantity: int) -> Optional[int]:
        """Lower stock by quantity, floored at zero. Returns the new stock.

        Read-then-write: concurrent orders for the same product can race.
        """
        obj_id = to_object_id(product_id)
        product = self.db[PRODUCTS].find_one({"_id": obj_id}) if obj_id is not None else None
        if not product:
            logger.warning("Product %s not found, stock not decremented", product_id)
            return None
        new_stock = max(0, int(product.get("stock", 0)) - quantity)
        self.db[PRODUCTS].update_one({"_id": obj_id}, {"$set": {"stock": new_stock}})
        logger.debug("Stock for %s: %s -> %s", product_id, product.get("stock"), new_stock)
        return new_stock

    # Orders

    def get_all_orders(self) -> List[Dict[str, Any]]:
        cursor = self.db[ORDERS].find().sort("created_at", DESCENDING)
        return [serialize_doc(d) for d in cursor]

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        obj_id = to_object_id(order_id)
        if obj_id is None:
            return None
        return serialize_doc(self.db[ORDERS].find_one({"_id": obj_id}))

    def create_order(self, data: OrderIn) -> Dict[str, Any]:
        """Store the order header, its items, then decrement stock per item.

        Nothing is rolled back if a later step fails.
        """
        computed = items_total(data.items)
        total = data.total
        if total is None:
            total = str(computed)
        elif Decimal(total) != computed:
            logger.warning("Order total %s does not match items total %s", total, computed)

        order = OrderSchema(
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            delivery_address=data.delivery_address,
            delivery_city=data.delivery_city,
            delivery_postal_code=data.delivery_postal_code,
            total=total,
        )
        order_id = create_document(ORDERS, order, database=self.db)

        for item in data.items:
            self.create_order_item(OrderItemSchema(order_id=order_id, **item.model_dump()))
        for item in data.items:
            self.decrement_stock(item.product_id, item.quantity)

        logger.info("Order %s created with %d items, total %s", order_id, len(data.items), total)
        return self.get_order(order_id)

    # Order items

    def get_order_items(self, order_id: str) -> List[Dict[str, Any]]:
        docs = get_documents(ORDER_ITEMS, {"order_id": order_id}, database=self.db)
        return [serialize_doc(d) for d in docs]

    def create_order_item(self, data: OrderItemSchema) -> Dict[str, Any]:
        item_id = create_document(ORDER_ITEMS, data, database=self.db)
        return serialize_doc(self.db[ORDER_ITEMS].find_one({"_id": ObjectId(item_id)}))
