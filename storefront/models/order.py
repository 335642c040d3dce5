"""Order ledger models for the storefront"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from vault import ContactBundle


class OrderStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class OrderItem(BaseModel):
    """Line of an order, priced at the time of purchase"""
    id: str
    order_id: str
    product_id: str
    quantity: int = Field(gt=0)
    price: Decimal
    size: Optional[str] = None
    created_at: datetime


class Order(BaseModel):
    """Order placed with a single store"""
    id: str
    store_name: str
    customer: str
    customer_details: str
    total: Decimal
    status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItem] = []
    created_at: datetime
    updated_at: datetime


class CreateOrderRequest(BaseModel):
    """Request to insert an order"""
    store_name: str
    customer: str
    customer_details: str
    total: Decimal = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING


class CreateOrderItemRequest(BaseModel):
    """Request to insert an order line"""
    product_id: str
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)
    size: Optional[str] = None


class UpdateOrderStatusRequest(BaseModel):
    """Request to change an order's status"""
    status: OrderStatus


class StoreOrderView(BaseModel):
    """Order as seen by one store's admin, contact details decrypted"""
    id: str
    customer: str
    customer_details: Optional[ContactBundle] = None
    total: Decimal
    status: OrderStatus
    items: list[OrderItem]
    created_at: datetime
