"""
Opérations CRUD pour la table platform_settings
"""
from typing import Any, Callable, Dict, List, Optional
from supabase import Client
from app.crud.base import utcnow_iso
from app.models import SettingKey
import logging

logger = logging.getLogger(__name__)

CHANNEL_NAME = "platform_settings_changes"


class SettingsCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "platform_settings"

    def get_all(self) -> List[Dict[str, Any]]:
        """Toutes les lignes (setting_key, setting_value)"""
        try:
            result = self.db.table(self.table)\
                .select("setting_key,setting_value")\
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"✗ Erreur lecture des paramètres: {e}")
            raise

    def get(self, key: SettingKey) -> Optional[Any]:
        try:
            result = self.db.table(self.table)\
                .select("setting_value")\
                .eq("setting_key", key.value)\
                .execute()
            if result.data:
                return result.data[0].get("setting_value")
            return None
        except Exception as e:
            logger.error(f"✗ Erreur lecture du paramètre {key.value}: {e}")
            raise

    def upsert(self, key: SettingKey, value: Dict[str, Any], updated_by: Optional[str] = None) -> Dict[str, Any]:
        try:
            data = {
                "setting_key": key.value,
                "setting_value": value,
                "updated_at": utcnow_iso()
            }
            if updated_by:
                data["updated_by"] = updated_by

            result = self.db.table(self.table)\
                .upsert(data, on_conflict="setting_key")\
                .execute()
            if not result.data:
                raise Exception("Aucune donnée retournée")

            logger.info(f"✓ Paramètre {key.value} enregistré")
            return result.data[0]
        except Exception as e:
            logger.error(f"✗ Erreur enregistrement du paramètre {key.value}: {e}")
            raise

    def subscribe_to_changes(self, callback: Callable[[Any], None]):
        """
        S'abonne aux changements de la table via un canal temps réel.

        Retourne le canal, à passer à unsubscribe().
        """
        channel = self.db.channel(CHANNEL_NAME)
        channel.on_postgres_changes(
            "*",
            schema="public",
            table=self.table,
            callback=callback
        )
        channel.subscribe()
        logger.info(f"✓ Abonné au canal {CHANNEL_NAME}")
        return channel

    def unsubscribe(self, channel) -> None:
        self.db.remove_channel(channel)
        logger.info(f"Désabonné du canal {CHANNEL_NAME}")


def get_settings_crud(db: Client) -> SettingsCRUD:
    return SettingsCRUD(db)
