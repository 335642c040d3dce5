"""
Cart Persistence

Common interface of the two cart storage tiers. The engine picks the
tier from the identity mode and never talks to a store in any other way.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

from ..core.identity import IdentityMode
from ..models.cart import CartLine, CartMutation

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Any], Awaitable[None]]


class PersistenceFailure(Exception):
    """A cart store read or write did not go through"""
    pass


class Subscription:
    """Handle on a running push-channel listener"""

    def __init__(self, task: asyncio.Task):
        self._task = task

    @property
    def active(self) -> bool:
        return not self._task.done()

    async def wait(self) -> None:
        """Wait until the listener stops on its own"""
        await self._task

    async def close(self) -> None:
        """Stop listening"""
        if self._task.done():
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass


class CartPersistence(ABC):
    """A durable home for one identity's cart"""

    mode: IdentityMode

    @abstractmethod
    async def load(self) -> list[CartLine]:
        """Read the authoritative cart"""
        raise NotImplementedError

    @abstractmethod
    async def write(self, mutation: CartMutation, snapshot: list[CartLine]) -> None:
        """
        Persist an optimistic change.

        Args:
            mutation: The change that was applied in memory
            snapshot: The in-memory cart after the change

        Raises:
            PersistenceFailure: if the store rejected or never received the write
        """
        raise NotImplementedError

    def subscribe(self, on_change: ChangeCallback) -> Optional[Subscription]:
        """Start delivering external change events, if this tier has any"""
        return None
