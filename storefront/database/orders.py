"""Order ledger storage for the storefront"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from ..models.order import (
    Order,
    OrderItem,
    OrderStatus,
    CreateOrderRequest,
    CreateOrderItemRequest,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderDatabase:
    """In-memory orders and order items"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def insert_order(self, request: CreateOrderRequest) -> Order:
        """Insert an order without items"""
        now = _now()
        order = Order(
            id=str(uuid.uuid4()),
            store_name=request.store_name,
            customer=request.customer,
            customer_details=request.customer_details,
            total=request.total,
            status=request.status,
            items=[],
            created_at=now,
            updated_at=now,
        )
        self.orders[order.id] = order
        return order

    def insert_item(
        self,
        order_id: str,
        request: CreateOrderItemRequest,
    ) -> Optional[OrderItem]:
        """Insert an order item, None if the order does not exist"""
        order = self.get_order(order_id)
        if not order:
            return None

        item = OrderItem(
            id=str(uuid.uuid4()),
            order_id=order_id,
            product_id=request.product_id,
            quantity=request.quantity,
            price=request.price,
            size=request.size,
            created_at=_now(),
        )
        order.items.append(item)
        return item

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Update order status"""
        order = self.get_order(order_id)
        if not order:
            return None

        order.status = status
        order.updated_at = _now()
        return order

    def list_orders(
        self,
        store_name: Optional[str] = None,
        limit: int = 50,
    ) -> list[Order]:
        """List recent orders, optionally only those of one store"""
        orders = list(self.orders.values())
        if store_name:
            orders = [o for o in orders if o.store_name == store_name]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[:limit]


# Singleton instance
order_db = OrderDatabase()
