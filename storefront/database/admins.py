"""Store administrator storage for the storefront"""

from typing import Optional

from ..models.admin import StoreAdmin


class StoreTakenError(Exception):
    """Another administrator already manages the store"""
    pass


class AdminDatabase:
    """In-memory store administrators, keyed by user ID"""

    def __init__(self):
        self.admins: dict[str, StoreAdmin] = {}

    def get_admin(self, user_id: str) -> Optional[StoreAdmin]:
        """Get the administrator record of a user"""
        return self.admins.get(user_id)

    def find_by_store(self, store_name: str) -> Optional[StoreAdmin]:
        """Get the administrator of a store"""
        for admin in self.admins.values():
            if admin.store_name == store_name:
                return admin
        return None

    def upsert_admin(
        self,
        user_id: str,
        store_name: str,
        email: Optional[str] = None,
    ) -> StoreAdmin:
        """Create or update the user's administrator record"""
        owner = self.find_by_store(store_name)
        if owner and owner.id != user_id:
            raise StoreTakenError(f"Store {store_name} already has an administrator")

        admin = StoreAdmin(id=user_id, email=email, store_name=store_name)
        self.admins[user_id] = admin
        return admin


# Singleton instance
admin_db = AdminDatabase()
