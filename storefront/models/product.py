"""Product models for the storefront"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class ProductCategory(str, Enum):
    CLOTHING = "clothing"
    FOOTWEAR = "footwear"
    ACCESSORIES = "accessories"
    HOME = "home"
    BOOKS = "books"


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str
    description: str = ""
    price: Decimal = Field(gt=0)
    category: ProductCategory
    images: list[str] = []
    sizes: list[str] = []
    store_name: str
    free_shipping: bool = False

    class Config:
        from_attributes = True
