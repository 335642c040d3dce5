"""Cart row models for the storefront"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CartRow(BaseModel):
    """One persisted cart row, unique per (user, product, size)"""
    id: str
    user_id: str
    product_id: str
    quantity: int = Field(gt=0)
    size: Optional[str] = None


class InsertCartRowRequest(BaseModel):
    """Request to insert a cart row"""
    product_id: str
    quantity: int = Field(default=1, gt=0)
    size: Optional[str] = None


class UpdateCartRowRequest(BaseModel):
    """Request to overwrite the quantity of one row"""
    quantity: int = Field(gt=0)


class SetCartQuantityRequest(BaseModel):
    """Request to overwrite the quantity of a (product, size) row"""
    product_id: str
    quantity: int = Field(gt=0)
    size: Optional[str] = None


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class CartChange(BaseModel):
    """Change event published for a cart row"""
    event: ChangeType
    user_id: str
    row: CartRow
