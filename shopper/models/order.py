"""Vendor order models for the shopper client"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class OrderLine(BaseModel):
    """Line of a vendor order, priced from the cart snapshot"""
    order_id: str
    product_id: str
    quantity: int = Field(gt=0)
    unit_price: Decimal
    size: Optional[str] = None


class VendorOrder(BaseModel):
    """Order created for one vendor at checkout"""
    id: str
    vendor_name: str
    customer_display_name: str
    encrypted_contact: str
    total: Decimal
    status: OrderStatus = OrderStatus.PENDING
    lines: list[OrderLine] = []
