"""Tests for the cart change feed."""

import asyncio

from storefront.database.carts import CartRowDatabase
from storefront.database.feed import ChangeFeed
from storefront.models.cart import ChangeType


class TestChangeFeed:

    def test_changes_are_scoped_by_user(self):
        feed = ChangeFeed()
        db = CartRowDatabase(feed)

        async def scenario():
            mine = feed.subscribe("user-1")
            theirs = feed.subscribe("user-2")
            row = db.insert_row("user-1", "prod-001", 1, "M")
            db.update_row("user-1", row.id, 3)
            db.delete_rows("user-1", "prod-001", "M")
            return mine, theirs

        mine, theirs = asyncio.run(scenario())

        events = [mine.get_nowait() for _ in range(mine.qsize())]
        assert [e.event for e in events] == [ChangeType.INSERT, ChangeType.UPDATE, ChangeType.DELETE]
        assert [e.row.quantity for e in events] == [1, 3, 3]
        assert theirs.empty()

    def test_event_rows_are_snapshots(self):
        feed = ChangeFeed()
        db = CartRowDatabase(feed)

        async def scenario():
            queue = feed.subscribe("user-1")
            db.insert_row("user-1", "prod-005", 1)
            db.set_quantity("user-1", "prod-005", 9)
            return queue

        queue = asyncio.run(scenario())
        assert queue.get_nowait().row.quantity == 1
        assert queue.get_nowait().row.quantity == 9

    def test_listen_unsubscribes_when_closed(self):
        feed = ChangeFeed()
        db = CartRowDatabase(feed)

        async def scenario():
            stream = feed.listen("user-1")
            pending = asyncio.ensure_future(stream.__anext__())
            await asyncio.sleep(0)
            subscribed = feed.subscriber_count("user-1")

            db.insert_row("user-1", "prod-007", 2)
            change = await pending
            await stream.aclose()
            return subscribed, change, feed.subscriber_count("user-1")

        subscribed, change, remaining = asyncio.run(scenario())
        assert subscribed == 1
        assert change.row.product_id == "prod-007"
        assert remaining == 0

    def test_publish_without_subscribers_is_noop(self):
        feed = ChangeFeed()
        db = CartRowDatabase(feed)
        db.insert_row("user-1", "prod-007")
        assert feed.subscriber_count("user-1") == 0
