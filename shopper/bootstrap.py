"""Wires the shopper's cart engine and checkout to their collaborators"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from vault import ContactBundle

from .core.config import Settings, settings as default_settings
from .core.identity import IdentityProvider
from .services.cart_engine import CartEngine, store_selector
from .services.checkout import CheckoutDecomposer, PricingRules
from .services.ledger import StorefrontLedger
from .services.local_store import LocalCartStore
from .services.payment import CheckoutSession
from .services.storefront_client import StorefrontClient

logger = logging.getLogger(__name__)


@dataclass
class Shopper:
    """Everything one shopper process needs"""
    settings: Settings
    client: StorefrontClient
    identity: IdentityProvider
    cart: CartEngine
    decomposer: Optional[CheckoutDecomposer] = None

    def get_decomposer(self) -> CheckoutDecomposer:
        """
        Build the checkout decomposer on first use.

        Raises:
            ValueError: if no PII secret is configured
        """
        if self.decomposer is None:
            self.decomposer = CheckoutDecomposer(
                StorefrontLedger(self.client),
                self.settings.get_codec(),
            )
        return self.decomposer

    def checkout(self, contact: ContactBundle) -> CheckoutSession:
        """Start a payment for the current cart"""
        return CheckoutSession(
            engine=self.cart,
            decomposer=self.get_decomposer(),
            contact=contact,
            pricing=PricingRules.from_settings(self.settings),
        )

    async def close(self) -> None:
        await self.cart.close()
        await self.client.close()


async def create_shopper(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Shopper:
    """
    Build a shopper, load the anonymous cart and follow identity changes.

    The PII secret is only needed once the shopper checks out.
    """
    settings = settings or default_settings
    client = StorefrontClient(
        settings.storefront_base_url,
        timeout=settings.request_timeout,
        http_client=http_client,
    )
    provider = IdentityProvider(settings.device_id)
    engine = CartEngine(
        store_selector(LocalCartStore(settings.data_dir), client),
        provider.current,
    )
    await engine.attach(provider)
    logger.info(f"Shopper ready against {settings.storefront_base_url}")

    return Shopper(
        settings=settings,
        client=client,
        identity=provider,
        cart=engine,
    )
