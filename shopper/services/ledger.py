"""Order ledger collaborator used by checkout"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ..models.order import OrderStatus
from .storefront_client import StorefrontClient


class OrderLedger(ABC):
    """Write path into the persisted orders and order items"""

    @abstractmethod
    async def insert_order(
        self,
        vendor_name: str,
        customer: str,
        encrypted_contact: str,
        total: Decimal,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> str:
        """Insert an order and return its ID"""
        raise NotImplementedError

    @abstractmethod
    async def insert_order_line(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        unit_price: Decimal,
        size: Optional[str] = None,
    ) -> None:
        """Insert one line of an order"""
        raise NotImplementedError


class StorefrontLedger(OrderLedger):
    """Ledger kept by the storefront's order endpoints"""

    def __init__(self, client: StorefrontClient):
        self.client = client

    async def insert_order(
        self,
        vendor_name: str,
        customer: str,
        encrypted_contact: str,
        total: Decimal,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> str:
        order = await self.client.create_order(
            store_name=vendor_name,
            customer=customer,
            customer_details=encrypted_contact,
            total=total,
            status=status.value,
        )
        return order["id"]

    async def insert_order_line(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        unit_price: Decimal,
        size: Optional[str] = None,
    ) -> None:
        await self.client.create_order_item(
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
            price=unit_price,
            size=size,
        )
