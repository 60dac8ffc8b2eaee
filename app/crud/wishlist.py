"""
Opérations CRUD pour les listes de souhaits
"""
from typing import List
from supabase import Client
import logging

logger = logging.getLogger(__name__)


class WishlistCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "wishlists"

    def get_property_ids(self, user_id: str) -> List[str]:
        try:
            result = self.db.table(self.table)\
                .select("property_id")\
                .eq("user_id", user_id)\
                .execute()
            return [row["property_id"] for row in result.data or []]
        except Exception as e:
            logger.error(f"✗ Erreur lecture liste de souhaits {user_id}: {e}")
            raise

    def exists(self, user_id: str, property_id: str) -> bool:
        result = self.db.table(self.table)\
            .select("property_id")\
            .eq("user_id", user_id)\
            .eq("property_id", property_id)\
            .execute()
        return bool(result.data)

    def add(self, user_id: str, property_id: str) -> None:
        self.db.table(self.table)\
            .insert({"user_id": user_id, "property_id": property_id})\
            .execute()

    def remove(self, user_id: str, property_id: str) -> None:
        self.db.table(self.table)\
            .delete()\
            .eq("user_id", user_id)\
            .eq("property_id", property_id)\
            .execute()


def get_wishlist_crud(db: Client) -> WishlistCRUD:
    return WishlistCRUD(db)
