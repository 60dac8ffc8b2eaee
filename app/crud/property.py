"""
Opérations CRUD pour Properties
"""
from typing import Any, Dict, List, Optional
from supabase import Client
from app.crud.base import update_entity_status, utcnow_iso
from app.models import Property, PropertyCreate, PropertyStatus, PropertyUpdate
import logging

logger = logging.getLogger(__name__)


class PropertyCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "properties"

    def create(self, property_data: PropertyCreate, owner_id: str) -> Property:
        """Créer une annonce (brouillon, ou en attente si publiée)"""
        try:
            data = property_data.model_dump(mode="json", exclude={"publish"})
            data["owner_id"] = owner_id
            data["status"] = (
                PropertyStatus.pending.value if property_data.publish else PropertyStatus.draft.value
            )

            result = self.db.table(self.table).insert(data).execute()

            if result.data:
                logger.info(f"✓ Propriété créée: {result.data[0]['id']} ({data['status']})")
                return Property(**result.data[0])
            else:
                raise Exception("Erreur lors de la création")

        except Exception as e:
            logger.error(f"✗ Erreur création propriété: {e}")
            raise

    def get_by_id(self, property_id: str) -> Optional[Property]:
        """Récupérer une annonce par ID"""
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .eq("id", property_id)\
                .execute()

            if result.data and len(result.data) > 0:
                return Property(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"✗ Erreur récupération propriété {property_id}: {e}")
            raise

    def get_all(
        self,
        skip: int = 0,
        limit: int = 20,
        status: Optional[PropertyStatus] = None,
        category: Optional[str] = None,
        city: Optional[str] = None,
        owner_id: Optional[str] = None
    ) -> List[Property]:
        """Liste des annonces avec filtres"""
        try:
            query = self.db.table(self.table).select("*")

            if status:
                query = query.eq("status", status.value)
            if category:
                query = query.eq("category", category)
            if city:
                query = query.eq("city", city)
            if owner_id:
                query = query.eq("owner_id", owner_id)

            result = query\
                .order("created_at", desc=True)\
                .range(skip, skip + limit - 1)\
                .execute()

            return [Property(**item) for item in result.data or []]

        except Exception as e:
            logger.error(f"✗ Erreur récupération propriétés: {e}")
            raise

    def update(self, property_id: str, property_data: PropertyUpdate) -> Optional[Property]:
        """Mettre à jour le contenu d'une annonce (jamais son statut)"""
        data = property_data.model_dump(mode="json", exclude_unset=True, exclude={"submit"})
        if not data:
            raise ValueError("Aucune donnée à mettre à jour")
        data["updated_at"] = utcnow_iso()

        try:
            result = self.db.table(self.table)\
                .update(data)\
                .eq("id", property_id)\
                .execute()

            if result.data:
                logger.info(f"✓ Propriété mise à jour: {property_id}")
                return Property(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"✗ Erreur mise à jour propriété {property_id}: {e}")
            raise

    def update_status(
        self,
        property_id: str,
        new_status: PropertyStatus,
        expected_status: PropertyStatus,
        extra: Optional[Dict[str, Any]] = None
    ) -> Optional[Property]:
        row = update_entity_status(
            self.db, self.table, property_id, new_status.value, expected_status.value, extra
        )
        return Property(**row) if row else None

    def delete(self, property_id: str) -> bool:
        """Supprimer une annonce"""
        try:
            self.db.table(self.table).delete().eq("id", property_id).execute()
            logger.info(f"✓ Propriété supprimée: {property_id}")
            return True
        except Exception as e:
            logger.error(f"✗ Erreur suppression propriété {property_id}: {e}")
            raise


def get_property_crud(db: Client) -> PropertyCRUD:
    return PropertyCRUD(db)
