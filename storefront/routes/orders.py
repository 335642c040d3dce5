"""Order ledger API routes for the storefront"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from vault import DecryptionError

from ..core.config import settings
from ..models.order import (
    Order,
    OrderItem,
    CreateOrderRequest,
    CreateOrderItemRequest,
    UpdateOrderStatusRequest,
    StoreOrderView,
)
from ..database.orders import order_db
from ..models.admin import StoreAdmin
from ..security.identity import require_store_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=Order, status_code=201)
async def create_order(request: CreateOrderRequest):
    """Insert an order for one store"""
    order = order_db.insert_order(request)
    logger.info(f"Order {order.id} created for {order.store_name}: ${order.total}")
    return order


@router.post("/{order_id}/items", response_model=OrderItem, status_code=201)
async def create_order_item(order_id: str, request: CreateOrderItemRequest):
    """Insert a line into an existing order"""
    item = order_db.insert_item(order_id, request)
    if not item:
        raise HTTPException(status_code=404, detail="Order not found")
    return item


@router.get("", response_model=list[StoreOrderView])
async def list_store_orders(
    limit: int = Query(50, ge=1, le=200),
    admin: StoreAdmin = Depends(require_store_admin),
):
    """
    List the caller's store orders with contact details decrypted.

    Orders whose contact details cannot be decrypted are still listed,
    with `customer_details` set to null.
    """
    codec = settings.get_codec()
    if codec is None:
        raise HTTPException(
            status_code=503,
            detail="Contact decryption is not configured",
        )

    views = []
    for order in order_db.list_orders(store_name=admin.store_name, limit=limit):
        details = None
        try:
            details = codec.decrypt_contact(order.customer_details)
        except DecryptionError:
            logger.warning(f"Could not decrypt customer details of order {order.id}")

        views.append(
            StoreOrderView(
                id=order.id,
                customer=order.customer,
                customer_details=details,
                total=order.total,
                status=order.status,
                items=order.items,
                created_at=order.created_at,
            )
        )
    return views


@router.patch("/{order_id}", response_model=Order)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    admin: StoreAdmin = Depends(require_store_admin),
):
    """Change the status of one of the caller's store orders"""
    order: Optional[Order] = order_db.get_order(order_id)
    if not order or order.store_name != admin.store_name:
        raise HTTPException(status_code=404, detail="Order not found")

    order = order_db.update_status(order_id, request.status)
    logger.info(f"Order {order_id} status set to {request.status.value}")
    return order
