"""Server-side cart storage for signed-in shoppers"""

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from ..core.identity import Identity, IdentityMode
from ..models.cart import CartLine, CartMutation, MutationKind, ProductRef
from .persistence import CartPersistence, ChangeCallback, PersistenceFailure, Subscription
from .storefront_client import StorefrontClient, StorefrontError

logger = logging.getLogger(__name__)


class RemoteCartStore(CartPersistence):
    """
    Cart rows of one user, kept by the storefront.

    Rows are keyed by (user, product, size). Every row change is pushed
    back over the storefront's event stream.
    """

    mode = IdentityMode.AUTHENTICATED

    def __init__(self, client: StorefrontClient, identity: Identity):
        if not identity.is_authenticated or not identity.token:
            raise ValueError("Remote cart store requires an authenticated identity")
        self.identity = identity
        self.client = client.authorized(identity.token)

    async def load(self) -> list[CartLine]:
        """Read all rows and join them to product snapshots"""
        try:
            rows = await self.client.list_cart_rows()
            if not rows:
                return []

            product_ids = list(dict.fromkeys(row["product_id"] for row in rows))
            products = await self.client.get_products(product_ids)
        except StorefrontError as e:
            raise PersistenceFailure(f"Could not load cart for {self.identity.id}: {e}") from e

        snapshots: dict[str, ProductRef] = {}
        for product in products:
            try:
                snapshots[product["id"]] = ProductRef.model_validate(product)
            except (KeyError, ValidationError) as e:
                logger.warning(f"Skipping unreadable product snapshot: {e}")

        lines = []
        for row in rows:
            product = snapshots.get(row["product_id"])
            if product is None:
                logger.debug(f"Dropping cart row for missing product {row['product_id']}")
                continue
            lines.append(
                CartLine(product=product, quantity=row["quantity"], size=row.get("size"))
            )
        return lines

    async def write(self, mutation: CartMutation, snapshot: list[CartLine]) -> None:
        try:
            if mutation.kind == MutationKind.ADD:
                await self._upsert(mutation)
            elif mutation.kind == MutationKind.SET:
                await self.client.set_cart_quantity(
                    mutation.product_id, mutation.quantity, mutation.size
                )
            elif mutation.kind == MutationKind.REMOVE:
                await self.client.delete_cart_rows(mutation.product_id, mutation.size)
            elif mutation.kind == MutationKind.CLEAR:
                await self.client.clear_cart()
        except StorefrontError as e:
            raise PersistenceFailure(f"Cart {mutation.kind.value} failed: {e}") from e

    async def _upsert(self, mutation: CartMutation) -> None:
        """Increment the existing row for the key, or insert one"""
        existing = await self.client.find_cart_rows(mutation.product_id, mutation.size)
        if existing:
            row = existing[0]
            await self.client.update_cart_row(row["id"], row["quantity"] + mutation.quantity)
        else:
            await self.client.insert_cart_row(
                mutation.product_id, mutation.quantity, mutation.size
            )

    def subscribe(self, on_change: ChangeCallback) -> Optional[Subscription]:
        """Follow the user's cart event stream in a background task"""
        task = asyncio.create_task(self._listen(on_change))
        return Subscription(task)

    async def _listen(self, on_change: ChangeCallback) -> None:
        logger.info(f"Listening for cart changes of {self.identity.id}")
        try:
            async for event in self.client.cart_events():
                await on_change(event)
            logger.info(f"Cart change stream of {self.identity.id} closed by the storefront")
        except StorefrontError as e:
            logger.error(f"Cart change stream ended: {e}")
        except ValueError as e:
            logger.error(f"Unreadable cart change event: {e}")
