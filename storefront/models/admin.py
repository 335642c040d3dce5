"""Store administrator models for the storefront"""

from typing import Optional

from pydantic import BaseModel, Field


class StoreAdmin(BaseModel):
    """A signed-in user who manages the orders of one store"""
    id: str
    email: Optional[str] = None
    store_name: str


class SetupStoreRequest(BaseModel):
    """Request to claim or rename the caller's store"""
    store_name: str = Field(min_length=1, max_length=120)
