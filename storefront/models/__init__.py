# Storefront Models

from .product import Product, ProductCategory
from .cart import (
    CartRow,
    CartChange,
    ChangeType,
    InsertCartRowRequest,
    UpdateCartRowRequest,
    SetCartQuantityRequest,
)
from .order import (
    Order,
    OrderItem,
    OrderStatus,
    CreateOrderRequest,
    CreateOrderItemRequest,
    UpdateOrderStatusRequest,
    StoreOrderView,
)
from .admin import StoreAdmin, SetupStoreRequest

__all__ = [
    "Product",
    "ProductCategory",
    "CartRow",
    "CartChange",
    "ChangeType",
    "InsertCartRowRequest",
    "UpdateCartRowRequest",
    "SetCartQuantityRequest",
    "Order",
    "OrderItem",
    "OrderStatus",
    "CreateOrderRequest",
    "CreateOrderItemRequest",
    "UpdateOrderStatusRequest",
    "StoreOrderView",
    "StoreAdmin",
    "SetupStoreRequest",
]
