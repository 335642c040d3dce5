"""
Cart Reconciliation Engine

Owns the shopper's in-memory cart and keeps it converging toward the
durable store selected by the current identity:

- anonymous shoppers: the device-local slot, written within the same call
- signed-in shoppers: the storefront's cart rows, shared across devices

Every mutation is applied to memory first and persisted afterwards. The
in-memory cart is what callers see; stores are never queried by reads.
Persistence failures are not raised to callers. A failed add, quantity
change or clear reloads the authoritative cart; a failed removal waits
for the push channel. Every change event pushed by the remote store
triggers a full reload that replaces in-memory state.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Optional

from ..core.identity import Identity, IdentityProvider
from ..models.cart import CartLine, CartMutation, ProductRef
from .local_store import LocalCartStore
from .persistence import CartPersistence, PersistenceFailure, Subscription
from .remote_store import RemoteCartStore
from .storefront_client import StorefrontClient

logger = logging.getLogger(__name__)

StoreFactory = Callable[[Identity], CartPersistence]
CartListener = Callable[["CartEngine"], None]


def normalize_size(size: Optional[str]) -> Optional[str]:
    """A blank size means the line has no size"""
    return size or None


def store_selector(local_store: LocalCartStore, client: StorefrontClient) -> StoreFactory:
    """Pick the local slot for anonymous identities, the storefront otherwise"""

    def select(identity: Identity) -> CartPersistence:
        if identity.is_authenticated:
            return RemoteCartStore(client, identity)
        return local_store

    return select


class CartEngine:
    """
    In-memory cart for exactly one identity at a time.

    Usage:
        engine = CartEngine(store_selector(local_store, client), identity)
        await engine.start()

        await engine.add_item(product, quantity=2, size="M")
        engine.total_price()
    """

    def __init__(self, store_factory: StoreFactory, identity: Identity):
        self._store_factory = store_factory
        self.identity = identity
        self.store = store_factory(identity)
        self.lines: list[CartLine] = []
        self.is_loading = True
        self.version = 0
        self._subscription: Optional[Subscription] = None
        self._listeners: list[CartListener] = []

    # ==================== Lifecycle ====================

    async def start(self) -> None:
        """Load the cart of the initial identity and follow its changes"""
        await self.load()
        self._subscription = self.store.subscribe(self._on_remote_change)

    async def attach(self, provider: IdentityProvider) -> None:
        """Follow an identity provider, reloading on every transition"""
        provider.subscribe(self.switch_identity)
        await self.switch_identity(provider.current)

    async def switch_identity(self, identity: Identity) -> None:
        """
        Discard the resident cart and load the one of another identity.

        Carts of different identities are never merged.
        """
        await self.close()
        logger.info(f"Switching cart to {identity.mode.value} identity")
        self.identity = identity
        self.store = self._store_factory(identity)
        self._replace([])
        await self.start()

    async def close(self) -> None:
        """Stop following remote changes"""
        if self._subscription is not None:
            await self._subscription.close()
            self._subscription = None

    async def load(self) -> None:
        """Replace the in-memory cart with the store's authoritative state"""
        store = self.store
        self.is_loading = True
        try:
            lines = await store.load()
        except PersistenceFailure as e:
            logger.error(f"Error loading cart: {e}")
            return
        finally:
            if store is self.store:
                self.is_loading = False

        if store is not self.store:
            logger.debug("Discarding cart loaded for a previous identity")
            return

        self._replace(lines)
        logger.debug(f"Loaded cart with {len(lines)} lines")

    async def _on_remote_change(self, event: Any) -> None:
        logger.debug(f"Cart change received: {event}")
        await self.load()

    # ==================== Mutations ====================

    async def add_item(
        self,
        product: ProductRef,
        quantity: int = 1,
        size: Optional[str] = None,
    ) -> None:
        """Add a quantity of a product, merging with an existing line of the same size"""
        size = normalize_size(size)
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        lines = list(self.lines)
        index = self._find(product.id, size)
        if index is not None:
            current = lines[index]
            lines[index] = current.model_copy(update={"quantity": current.quantity + quantity})
        else:
            lines.append(CartLine(product=product, quantity=quantity, size=size))

        logger.debug(f"Adding {quantity}x {product.name} (size {size})")
        self._replace(lines)
        await self._persist(CartMutation.add(product.id, quantity, size), reconcile=True)

    async def remove_item(self, product_id: str, size: Optional[str] = None) -> None:
        """Remove the line for a (product, size) key"""
        size = normalize_size(size)
        self._replace([line for line in self.lines if not line.matches(product_id, size)])
        await self._persist(CartMutation.remove(product_id, size), reconcile=False)

    async def set_quantity(
        self,
        product_id: str,
        quantity: int,
        size: Optional[str] = None,
    ) -> None:
        """Overwrite a line's quantity; zero or less removes the line"""
        size = normalize_size(size)
        if quantity <= 0:
            await self.remove_item(product_id, size)
            return

        index = self._find(product_id, size)
        if index is None:
            logger.debug(f"No cart line for {product_id} (size {size}) to update")
            return

        lines = list(self.lines)
        lines[index] = lines[index].model_copy(update={"quantity": quantity})
        self._replace(lines)
        await self._persist(CartMutation.set(product_id, quantity, size), reconcile=True)

    async def change_size(
        self,
        product_id: str,
        old_size: Optional[str],
        new_size: Optional[str],
    ) -> None:
        """
        Move a line to another size, keeping its quantity.

        Runs as a removal followed by an add. The two writes are not
        atomic: if the add fails after the removal went through, the
        reload that follows shows the line gone.
        """
        old_size = normalize_size(old_size)
        new_size = normalize_size(new_size)
        if old_size == new_size:
            return

        index = self._find(product_id, old_size)
        if index is None:
            return

        line = self.lines[index]
        if line.product.sizes and new_size not in line.product.sizes:
            raise ValueError(f"{line.product.name} is not offered in size {new_size}")

        await self.remove_item(product_id, old_size)
        await self.add_item(line.product, line.quantity, new_size)

    async def clear(self) -> None:
        """Empty the cart"""
        self._replace([])
        await self._persist(CartMutation.clear(), reconcile=True)

    async def _persist(self, mutation: CartMutation, reconcile: bool) -> None:
        store = self.store
        try:
            await store.write(mutation, list(self.lines))
        except PersistenceFailure as e:
            logger.warning(f"Cart {mutation.kind.value} was not persisted: {e}")
            if reconcile and store is self.store:
                await self.load()

    # ==================== Reads ====================

    def get_line(self, product_id: str, size: Optional[str] = None) -> Optional[CartLine]:
        """Get the line for a (product, size) key"""
        size = normalize_size(size)
        index = self._find(product_id, size)
        return self.lines[index] if index is not None else None

    def total_price(self) -> Decimal:
        """Sum of price x quantity over all lines, unrounded"""
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def total_item_count(self) -> int:
        """Sum of quantities over all lines"""
        return sum(line.quantity for line in self.lines)

    # ==================== Change listeners ====================

    def add_listener(self, listener: CartListener) -> None:
        """Call listener after every change of the in-memory cart"""
        self._listeners.append(listener)

    def remove_listener(self, listener: CartListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _find(self, product_id: str, size: Optional[str]) -> Optional[int]:
        for index, line in enumerate(self.lines):
            if line.matches(product_id, size):
                return index
        return None

    def _replace(self, lines: list[CartLine]) -> None:
        self.lines = lines
        self.version += 1
        for listener in list(self._listeners):
            listener(self)
