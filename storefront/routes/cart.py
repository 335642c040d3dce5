"""Cart row API routes for the storefront"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import StreamingResponse

from ..models.cart import (
    CartRow,
    InsertCartRowRequest,
    UpdateCartRowRequest,
    SetCartQuantityRequest,
)
from ..database.carts import cart_db, DuplicateRowError
from ..database.feed import change_feed
from ..security.identity import require_identity, VerifiedIdentity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("", response_model=list[CartRow])
async def list_cart_rows(identity: VerifiedIdentity = Depends(require_identity)):
    """Get every cart row of the caller"""
    return cart_db.list_rows(identity.user_id)


@router.get("/items", response_model=list[CartRow])
async def find_cart_rows(
    product_id: str,
    size: Optional[str] = Query(None),
    identity: VerifiedIdentity = Depends(require_identity),
):
    """Get the rows matching a (product, size) key"""
    return cart_db.find_rows(identity.user_id, product_id, size)


@router.post("/items", response_model=CartRow, status_code=201)
async def insert_cart_row(
    request: InsertCartRowRequest,
    identity: VerifiedIdentity = Depends(require_identity),
):
    """Insert a cart row"""
    try:
        return cart_db.insert_row(
            identity.user_id,
            request.product_id,
            request.quantity,
            request.size,
        )
    except DuplicateRowError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/items/{row_id}", response_model=CartRow)
async def update_cart_row(
    row_id: str,
    request: UpdateCartRowRequest,
    identity: VerifiedIdentity = Depends(require_identity),
):
    """Overwrite the quantity of one row"""
    row = cart_db.update_row(identity.user_id, row_id, request.quantity)
    if not row:
        raise HTTPException(status_code=404, detail="Cart row not found")
    return row


@router.put("/items", response_model=list[CartRow])
async def set_cart_quantity(
    request: SetCartQuantityRequest,
    identity: VerifiedIdentity = Depends(require_identity),
):
    """Overwrite the quantity of the rows matching a (product, size) key"""
    return cart_db.set_quantity(
        identity.user_id,
        request.product_id,
        request.quantity,
        request.size,
    )


@router.delete("/items")
async def delete_cart_rows(
    product_id: str,
    size: Optional[str] = Query(None),
    identity: VerifiedIdentity = Depends(require_identity),
):
    """Delete the rows matching a (product, size) key"""
    deleted = cart_db.delete_rows(identity.user_id, product_id, size)
    return {"deleted": deleted}


@router.delete("")
async def clear_cart(identity: VerifiedIdentity = Depends(require_identity)):
    """Delete every cart row of the caller"""
    deleted = cart_db.delete_all(identity.user_id)
    return {"deleted": deleted}


@router.get("/events")
async def cart_events(identity: VerifiedIdentity = Depends(require_identity)):
    """
    Stream row changes of the caller's cart as server-sent events.

    Every insert, update and delete is pushed as one `data:` line holding
    a CartChange document.
    """
    user_id = identity.user_id
    logger.info(f"Cart event stream opened for user {user_id}")

    async def stream():
        yield ": connected\n\n"
        async for change in change_feed.listen(user_id):
            yield f"data: {change.model_dump_json()}\n\n"

    return StreamingResponse(stream(), media_type="text/event-stream")
