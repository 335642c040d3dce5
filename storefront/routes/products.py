"""Product API routes for the storefront"""

from fastapi import APIRouter, HTTPException, Query

from ..models.product import Product
from ..database.products import product_db

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=list[Product])
async def get_products(
    ids: list[str] = Query(default=[], description="Product IDs to look up"),
):
    """
    Batch lookup of products by ID.

    IDs that are not in the catalog are left out of the response.
    """
    return product_db.get_products(ids)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str):
    """Get a product by ID"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
