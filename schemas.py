"""
Database Schemas

Pydantic models for the MongoDB collections and the API request bodies.
Collections: products, orders, order_items.
Prices and totals are stored as decimal strings, e.g. "24.99".
"""

import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

PRICE_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")


def normalize_price(value: Any) -> Any:
    """Coerce numbers to strings and check the decimal format."""
    if value is None:
        return value
    if isinstance(value, bool):
        raise ValueError("Price must be a valid number (e.g. 24.99)")
    if isinstance(value, (int, float, Decimal)):
        value = str(value)
    if not isinstance(value, str) or not PRICE_PATTERN.match(value.strip()):
        raise ValueError("Price must be a valid number (e.g. 24.99)")
    return value.strip()


class Product(BaseModel):
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field(..., description="Product description")
    price: str = Field(..., description="Unit price as a decimal string")
    category: str = Field(..., min_length=1, description="Category name")
    image_url: str = Field(..., description="Primary image URL")
    image_urls: List[str] = Field(default_factory=list, description="Gallery image URLs")
    requires_prescription: bool = Field(False, description="Whether a prescription is required")
    stock: int = Field(100, ge=0, description="Units in stock")

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, value):
        return normalize_price(value)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None
    requires_prescription: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, value):
        return normalize_price(value)


class OrderItemIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: str

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, value):
        return normalize_price(value)


class OrderIn(BaseModel):
    customer_name: str = Field(..., min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(..., min_length=1)
    delivery_address: str = Field(..., min_length=1)
    delivery_city: str = Field(..., min_length=1)
    delivery_postal_code: str = Field(..., min_length=1)
    total: Optional[str] = Field(None, description="Client computed total; derived from items when omitted")
    items: List[OrderItemIn] = Field(..., min_length=1)

    @field_validator("total", mode="before")
    @classmethod
    def check_total(cls, value):
        return normalize_price(value)


class Order(BaseModel):
    customer_name: str
    customer_email: EmailStr
    customer_phone: str
    delivery_address: str
    delivery_city: str
    delivery_postal_code: str
    total: str
    status: str = Field("pending", description="pending | paid | shipped | delivered | cancelled")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class OrderItem(BaseModel):
    order_id: str
    product_id: str
    product_name: str = Field(..., description="Product name at purchase time")
    quantity: int = Field(..., ge=1)
    price: str = Field(..., description="Unit price at purchase time")


class AdminLoginInput(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
