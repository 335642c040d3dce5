"""Cart change feed for the storefront"""

import asyncio
import logging
from collections import defaultdict
from typing import AsyncIterator

from ..models.cart import CartChange

logger = logging.getLogger(__name__)


class ChangeFeed:
    """In-process publish/subscribe of cart row changes, scoped by user"""

    def __init__(self):
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)

    def subscribe(self, user_id: str) -> asyncio.Queue:
        """Register a new subscriber queue for a user"""
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers[user_id].add(queue)
        logger.debug(f"Subscriber added for user {user_id}")
        return queue

    def unsubscribe(self, user_id: str, queue: asyncio.Queue) -> None:
        """Remove a subscriber queue"""
        queues = self._subscribers.get(user_id)
        if not queues:
            return
        queues.discard(queue)
        if not queues:
            del self._subscribers[user_id]

    def subscriber_count(self, user_id: str) -> int:
        """Number of live subscribers for a user"""
        return len(self._subscribers.get(user_id, ()))

    def publish(self, change: CartChange) -> None:
        """Deliver a change to every subscriber of the row's user"""
        for queue in self._subscribers.get(change.user_id, ()):
            queue.put_nowait(change)

    async def listen(self, user_id: str) -> AsyncIterator[CartChange]:
        """Yield changes for a user until the consumer stops iterating"""
        queue = self.subscribe(user_id)
        try:
            while True:
                yield await queue.get()
        finally:
            self.unsubscribe(user_id, queue)


# Singleton instance
change_feed = ChangeFeed()
