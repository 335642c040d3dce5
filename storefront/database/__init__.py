# Database modules

from .feed import change_feed, ChangeFeed
from .products import product_db, ProductDatabase
from .carts import cart_db, CartRowDatabase, DuplicateRowError
from .orders import order_db, OrderDatabase
from .admins import admin_db, AdminDatabase, StoreTakenError

__all__ = [
    "change_feed",
    "ChangeFeed",
    "product_db",
    "ProductDatabase",
    "cart_db",
    "CartRowDatabase",
    "DuplicateRowError",
    "order_db",
    "OrderDatabase",
    "admin_db",
    "AdminDatabase",
    "StoreTakenError",
]
