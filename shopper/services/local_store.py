"""Device-local cart storage for anonymous shoppers"""

import logging
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..core.identity import IdentityMode
from ..models.cart import CartLine, CartMutation, MutationKind
from .persistence import CartPersistence, PersistenceFailure

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "marketplace-cart"

_lines_adapter = TypeAdapter(list[CartLine])


class LocalCartStore(CartPersistence):
    """
    Single named slot holding the cart as a JSON array of lines.

    Reads and writes are synchronous; a write never yields to the event
    loop, so the slot is updated within the call that changed the cart.
    Concurrent writers from other processes overwrite each other.
    """

    mode = IdentityMode.ANONYMOUS

    def __init__(self, data_dir: str, key: str = CART_STORAGE_KEY):
        self.path = Path(data_dir) / f"{key}.json"

    def read(self) -> list[CartLine]:
        """Read the slot; absent or unreadable content is an empty cart"""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading local cart {self.path}: {e}")
            return []

        try:
            return _lines_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Error loading cart from local storage: {e.error_count()} invalid entries")
            return []

    def save(self, lines: list[CartLine]) -> None:
        """Replace the slot with the given lines"""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(".tmp")
            tmp_path.write_bytes(_lines_adapter.dump_json(lines))
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceFailure(f"Could not save local cart: {e}") from e
        logger.debug(f"Saved {len(lines)} lines to local cart")

    def remove(self) -> None:
        """Delete the slot"""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceFailure(f"Could not clear local cart: {e}") from e

    async def load(self) -> list[CartLine]:
        return self.read()

    async def write(self, mutation: CartMutation, snapshot: list[CartLine]) -> None:
        if mutation.kind == MutationKind.CLEAR:
            self.remove()
        else:
            self.save(snapshot)
