"""Cart row storage for the storefront"""

import uuid
from typing import Optional

from ..models.cart import CartRow, CartChange, ChangeType
from .feed import ChangeFeed, change_feed


class DuplicateRowError(Exception):
    """A row already exists for the (user, product, size) key"""
    pass


class CartRowDatabase:
    """In-memory cart rows, one per (user, product, size)"""

    def __init__(self, feed: ChangeFeed):
        self.rows: dict[str, CartRow] = {}
        self.feed = feed

    def list_rows(self, user_id: str) -> list[CartRow]:
        """Get all rows for a user"""
        return [row for row in self.rows.values() if row.user_id == user_id]

    def find_rows(
        self,
        user_id: str,
        product_id: str,
        size: Optional[str] = None,
    ) -> list[CartRow]:
        """Get rows matching a (product, size) key"""
        return [
            row for row in self.rows.values()
            if row.user_id == user_id
            and row.product_id == product_id
            and row.size == size
        ]

    def insert_row(
        self,
        user_id: str,
        product_id: str,
        quantity: int = 1,
        size: Optional[str] = None,
    ) -> CartRow:
        """Insert a new row"""
        if self.find_rows(user_id, product_id, size):
            raise DuplicateRowError(
                f"Row already exists for product {product_id} size {size}"
            )

        row = CartRow(
            id=str(uuid.uuid4()),
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            size=size,
        )
        self.rows[row.id] = row
        self._publish(ChangeType.INSERT, row)
        return row

    def update_row(self, user_id: str, row_id: str, quantity: int) -> Optional[CartRow]:
        """Overwrite the quantity of one row owned by the user"""
        row = self.rows.get(row_id)
        if not row or row.user_id != user_id:
            return None

        row.quantity = quantity
        self._publish(ChangeType.UPDATE, row)
        return row

    def set_quantity(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        size: Optional[str] = None,
    ) -> list[CartRow]:
        """Overwrite the quantity of every row matching the key"""
        rows = self.find_rows(user_id, product_id, size)
        for row in rows:
            row.quantity = quantity
            self._publish(ChangeType.UPDATE, row)
        return rows

    def delete_rows(
        self,
        user_id: str,
        product_id: str,
        size: Optional[str] = None,
    ) -> int:
        """Delete rows matching the key, returns count deleted"""
        rows = self.find_rows(user_id, product_id, size)
        for row in rows:
            del self.rows[row.id]
            self._publish(ChangeType.DELETE, row)
        return len(rows)

    def delete_all(self, user_id: str) -> int:
        """Delete every row for a user"""
        rows = self.list_rows(user_id)
        for row in rows:
            del self.rows[row.id]
            self._publish(ChangeType.DELETE, row)
        return len(rows)

    def _publish(self, event: ChangeType, row: CartRow) -> None:
        self.feed.publish(
            CartChange(event=event, user_id=row.user_id, row=row.model_copy())
        )


# Singleton instance
cart_db = CartRowDatabase(change_feed)
