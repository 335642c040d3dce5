# Shopper Models

from .cart import ProductRef, CartLine, CartMutation, MutationKind
from .order import OrderLine, OrderStatus, VendorOrder

__all__ = [
    "ProductRef",
    "CartLine",
    "CartMutation",
    "MutationKind",
    "OrderLine",
    "OrderStatus",
    "VendorOrder",
]
