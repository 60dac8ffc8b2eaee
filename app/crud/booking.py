"""
Opérations CRUD pour les réservations
"""
from typing import Any, Dict, List, Optional
from supabase import Client
from app.crud.base import update_entity_status
from app.models import Booking, BookingStatus
import logging

logger = logging.getLogger(__name__)


class BookingCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "bookings"

    def create(self, data: Dict[str, Any]) -> Booking:
        try:
            payload = dict(data)
            payload["status"] = BookingStatus.pending.value
            result = self.db.table(self.table).insert(payload).execute()

            if not result.data:
                raise Exception("Aucune donnée retournée après insertion")

            logger.info(f"✓ Réservation créée: {result.data[0]['id']}")
            return Booking(**result.data[0])

        except Exception as e:
            logger.error(f"✗ Erreur création réservation: {e}")
            raise

    def get_by_id(self, booking_id: str) -> Optional[Booking]:
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .eq("id", booking_id)\
                .execute()

            if result.data:
                return Booking(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"✗ Erreur récupération réservation {booking_id}: {e}")
            raise

    def get_for_guest(self, user_id: str) -> List[Booking]:
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("check_in_date", desc=False)\
                .execute()
            return [Booking(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"✗ Erreur récupération réservations voyageur {user_id}: {e}")
            raise

    def get_for_properties(self, property_ids: List[str]) -> List[Booking]:
        """Réservations des annonces d'un hôte"""
        if not property_ids:
            return []
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .in_("property_id", property_ids)\
                .order("check_in_date", desc=False)\
                .execute()
            return [Booking(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"✗ Erreur récupération réservations hôte: {e}")
            raise

    def update_status(
        self,
        booking_id: str,
        new_status: BookingStatus,
        expected_status: BookingStatus
    ) -> Optional[Booking]:
        row = update_entity_status(
            self.db, self.table, booking_id, new_status.value, expected_status.value
        )
        return Booking(**row) if row else None


def get_booking_crud(db: Client) -> BookingCRUD:
    return BookingCRUD(db)
