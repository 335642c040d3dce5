"""Store administrator API routes for the storefront"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..models.admin import StoreAdmin, SetupStoreRequest
from ..database.admins import admin_db, StoreTakenError
from ..security.identity import require_identity, require_store_admin, VerifiedIdentity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/store", response_model=StoreAdmin)
async def get_store(admin: StoreAdmin = Depends(require_store_admin)):
    """Get the store managed by the caller"""
    return admin


@router.put("/store", response_model=StoreAdmin)
async def setup_store(
    request: SetupStoreRequest,
    identity: VerifiedIdentity = Depends(require_identity),
):
    """Claim a store for the caller, or rename the caller's store"""
    store_name = request.store_name.strip()
    if not store_name:
        raise HTTPException(status_code=422, detail="Store name must not be blank")

    try:
        admin = admin_db.upsert_admin(
            identity.user_id,
            store_name,
            email=identity.claims.get("email"),
        )
    except StoreTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))

    logger.info(f"User {identity.user_id} now manages {store_name}")
    return admin
