"""
Opérations CRUD pour les notifications
"""
from typing import Optional
from supabase import Client
from app.models import NotificationCreate
import logging

logger = logging.getLogger(__name__)


class NotificationCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "notifications"

    def create(self, notification: NotificationCreate) -> dict:
        try:
            result = self.db.table(self.table)\
                .insert(notification.model_dump(mode="json"))\
                .execute()
            if not result.data:
                raise Exception("Aucune donnée retournée")
            return result.data[0]
        except Exception as e:
            logger.error(f"✗ Erreur création notification pour {notification.user_id}: {e}")
            raise

    def notify_best_effort(self, notification: NotificationCreate) -> Optional[str]:
        """
        Envoie une notification sans jamais lever d'exception.

        Retourne None si tout va bien, sinon le message d'avertissement.
        """
        try:
            self.create(notification)
            return None
        except Exception as e:
            logger.warning(f"⚠ Notification '{notification.type.value}' non envoyée: {e}")
            return str(e) or "notification non envoyée"


def get_notification_crud(db: Client) -> NotificationCRUD:
    return NotificationCRUD(db)
