"""Payment provider callbacks for the checkout flow"""

import logging
from typing import Optional

from vault import ContactBundle

from ..models.order import VendorOrder
from .cart_engine import CartEngine
from .checkout import CheckoutDecomposer, PricingRules, summarize

logger = logging.getLogger(__name__)


class CheckoutSession:
    """
    Binds the payment widget's callbacks to the cart and the decomposer.

    The payment provider calls on_order_requested() when the shopper hits
    pay, then exactly one of on_approved() or on_failed().
    """

    def __init__(
        self,
        engine: CartEngine,
        decomposer: CheckoutDecomposer,
        contact: ContactBundle,
        pricing: Optional[PricingRules] = None,
    ):
        self.engine = engine
        self.decomposer = decomposer
        self.contact = contact
        self.pricing = pricing or PricingRules()
        self.orders: list[VendorOrder] = []

    async def on_order_requested(self) -> str:
        """
        Write the vendor orders and return the amount to charge.

        Any exception raised here aborts the payment.
        """
        lines = list(self.engine.lines)
        summary = summarize(lines, self.pricing)
        self.orders = await self.decomposer.decompose(lines, self.contact)
        logger.info(
            f"Requesting payment of {summary.charge_amount} for {len(self.orders)} vendor orders"
        )
        return summary.charge_amount

    async def on_approved(self) -> None:
        """Payment captured: empty the cart"""
        logger.info(f"Payment approved for orders {[o.id for o in self.orders]}")
        await self.engine.clear()

    async def on_failed(self, error: Optional[BaseException] = None) -> None:
        """Payment failed: keep the cart and any orders already written"""
        logger.error(f"Payment failed: {error}")
