# Shopper services

from .storefront_client import StorefrontClient, StorefrontError, StorefrontRequestError
from .persistence import CartPersistence, PersistenceFailure, Subscription
from .local_store import LocalCartStore, CART_STORAGE_KEY
from .remote_store import RemoteCartStore
from .cart_engine import CartEngine, store_selector
from .ledger import OrderLedger, StorefrontLedger
from .checkout import (
    CheckoutDecomposer,
    CheckoutError,
    CheckoutSummary,
    IncompleteContact,
    IncompleteSelection,
    PartialCheckoutFailure,
    PricingRules,
    group_by_vendor,
    summarize,
)
from .payment import CheckoutSession

__all__ = [
    "StorefrontClient",
    "StorefrontError",
    "StorefrontRequestError",
    "CartPersistence",
    "PersistenceFailure",
    "Subscription",
    "LocalCartStore",
    "CART_STORAGE_KEY",
    "RemoteCartStore",
    "CartEngine",
    "store_selector",
    "OrderLedger",
    "StorefrontLedger",
    "CheckoutDecomposer",
    "CheckoutError",
    "CheckoutSummary",
    "IncompleteContact",
    "IncompleteSelection",
    "PartialCheckoutFailure",
    "PricingRules",
    "group_by_vendor",
    "summarize",
    "CheckoutSession",
]
