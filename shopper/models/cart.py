"""Cart models for the shopper client"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ProductRef(BaseModel):
    """Snapshot of the catalog fields a cart line needs"""
    id: str
    name: str
    price: Decimal = Field(ge=0)
    images: list[str] = []
    store_name: str
    sizes: list[str] = []
    free_shipping: bool = False
    category: Optional[str] = None
    description: Optional[str] = None

    class Config:
        frozen = True
        extra = "ignore"


class CartLine(BaseModel):
    """One cart entry, keyed by (product.id, size)"""
    product: ProductRef
    quantity: int = Field(gt=0)
    size: Optional[str] = None

    @property
    def key(self) -> tuple[str, Optional[str]]:
        return (self.product.id, self.size)

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity

    def matches(self, product_id: str, size: Optional[str]) -> bool:
        return self.product.id == product_id and self.size == size


class MutationKind(str, Enum):
    ADD = "add"
    SET = "set"
    REMOVE = "remove"
    CLEAR = "clear"


class CartMutation(BaseModel):
    """An optimistic change, handed to the store that must persist it"""
    kind: MutationKind
    product_id: Optional[str] = None
    size: Optional[str] = None
    quantity: int = 0

    @classmethod
    def add(cls, product_id: str, quantity: int, size: Optional[str] = None) -> "CartMutation":
        return cls(kind=MutationKind.ADD, product_id=product_id, quantity=quantity, size=size)

    @classmethod
    def set(cls, product_id: str, quantity: int, size: Optional[str] = None) -> "CartMutation":
        return cls(kind=MutationKind.SET, product_id=product_id, quantity=quantity, size=size)

    @classmethod
    def remove(cls, product_id: str, size: Optional[str] = None) -> "CartMutation":
        return cls(kind=MutationKind.REMOVE, product_id=product_id, size=size)

    @classmethod
    def clear(cls) -> "CartMutation":
        return cls(kind=MutationKind.CLEAR)
