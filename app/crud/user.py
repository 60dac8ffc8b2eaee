"""
Lecture des rôles utilisateurs (table user_roles)
"""
from typing import Optional
from supabase import Client
from app.models import UserRole
from app.models.user import ROLE_RANK
import logging

logger = logging.getLogger(__name__)


class UserCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "user_roles"

    def get_role(self, user_id: str) -> UserRole:
        """Rôle le plus élevé de l'utilisateur (user par défaut)"""
        try:
            result = self.db.table(self.table)\
                .select("role")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur lecture du rôle de {user_id}: {e}")
            raise

        best: Optional[UserRole] = None
        for row in result.data or []:
            try:
                role = UserRole(row.get("role"))
            except ValueError:
                continue
            if best is None or ROLE_RANK[role] > ROLE_RANK[best]:
                best = role
        return best or UserRole.USER


def get_user_crud(db: Client) -> UserCRUD:
    return UserCRUD(db)
