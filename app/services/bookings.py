"""
Réservations : création par le voyageur, confirmation / clôture par l'hôte,
annulation par le voyageur, l'hôte ou un admin.
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from supabase import Client
import logging

from app.crud import get_booking_crud, get_notification_crud, get_property_crud
from app.domain.currency import PriceType
from app.domain.lifecycle import BOOKING_MACHINE, InvalidTransition, booking_bucket
from app.domain.results import ErrorKind, Result
from app.models import (
    Booking, BookingBucket, BookingCreate, CurrentUser,
    NotificationCreate, NotificationType, Property,
    PropertyCategory, PropertyStatus
)

logger = logging.getLogger(__name__)

# Nombre de nuits couvertes par un prix hebdomadaire / mensuel
NIGHTS_PER_UNIT = {
    PriceType.daily: Decimal(1),
    PriceType.weekly: Decimal(7),
    PriceType.monthly: Decimal("30.44"),
}

NOTIFICATIONS = {
    "confirm": (NotificationType.booking_confirmed, "Booking Confirmed", "Your booking for \"{title}\" has been confirmed."),
    "complete": (NotificationType.booking_completed, "Stay Completed", "Your stay at \"{title}\" is complete. Thank you!"),
    "cancel": (NotificationType.booking_cancelled, "Booking Cancelled", "Your booking for \"{title}\" has been cancelled."),
}


def compute_total(prop: Property, check_in: date, check_out: date) -> float:
    """Montant total en DZD pour un séjour"""
    nights = (check_out - check_in).days
    price = Decimal(str(prop.price))
    unit = NIGHTS_PER_UNIT.get(prop.price_type)
    if unit is None:
        return float(price)
    total = price / unit * nights
    return float(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class BookingService:
    def __init__(self, db: Client):
        self.bookings = get_booking_crud(db)
        self.properties = get_property_crud(db)
        self.notifications = get_notification_crud(db)

    def create(self, guest: CurrentUser, data: BookingCreate) -> Result:
        try:
            prop = self.properties.get_by_id(data.property_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

        if prop is None or prop.status != PropertyStatus.active:
            return Result.failure(ErrorKind.not_found, f"Annonce {data.property_id} non disponible")
        if prop.category == PropertyCategory.sale:
            return Result.failure(ErrorKind.validation, "Une annonce de vente ne se réserve pas")
        if prop.owner_id == guest.id:
            return Result.failure(ErrorKind.validation, "Impossible de réserver sa propre annonce")

        payload = data.model_dump(mode="json")
        payload["user_id"] = guest.id
        payload["total_amount"] = compute_total(prop, data.check_in_date, data.check_out_date)
        try:
            return Result.success(self.bookings.create(payload))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def list_for_guest(self, guest: CurrentUser, bucket: Optional[BookingBucket] = None,
                       today: Optional[date] = None) -> Result:
        try:
            items = self.bookings.get_for_guest(guest.id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        return Result.success(self._filter(items, bucket, today))

    def list_for_host(self, host: CurrentUser, bucket: Optional[BookingBucket] = None,
                      today: Optional[date] = None) -> Result:
        try:
            property_ids = [p.id for p in self.properties.get_all(owner_id=host.id, limit=1000)]
            items = self.bookings.get_for_properties(property_ids)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        return Result.success(self._filter(items, bucket, today))

    @staticmethod
    def _filter(items: List[Booking], bucket: Optional[BookingBucket], today: Optional[date]) -> List[Booking]:
        if bucket is None:
            return items
        return [b for b in items if booking_bucket(b.status, b.check_in_date, b.check_out_date, today) == bucket]

    def confirm(self, user: CurrentUser, booking_id: str) -> Result:
        return self._transition(user, booking_id, "confirm")

    def complete(self, user: CurrentUser, booking_id: str) -> Result:
        return self._transition(user, booking_id, "complete")

    def cancel(self, user: CurrentUser, booking_id: str) -> Result:
        return self._transition(user, booking_id, "cancel")

    def _transition(self, user: CurrentUser, booking_id: str, action: str) -> Result:
        try:
            booking = self.bookings.get_by_id(booking_id)
            prop = self.properties.get_by_id(booking.property_id) if booking else None
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if booking is None:
            return Result.failure(ErrorKind.not_found, f"Réservation {booking_id} non trouvée")

        is_owner = prop is not None and prop.owner_id == user.id
        allowed = user.is_admin or is_owner or (action == "cancel" and booking.user_id == user.id)
        if not allowed:
            return Result.failure(ErrorKind.forbidden, "Réservation d'un autre utilisateur")

        try:
            target = BOOKING_MACHINE.next_state(booking.status, action)
        except InvalidTransition as e:
            return Result.failure(ErrorKind.invalid_transition, str(e))

        try:
            updated = self.bookings.update_status(booking_id, target, booking.status)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if updated is None:
            return Result.failure(ErrorKind.conflict, "Statut modifié entre-temps")

        kind, title, message = NOTIFICATIONS[action]
        warning = self.notifications.notify_best_effort(NotificationCreate(
            user_id=booking.user_id,
            title=title,
            message=message.format(title=prop.title if prop else booking.property_id),
            type=kind,
            related_id=booking.id,
        ))
        return Result.success(updated, warning=warning)


def get_booking_service(db: Client) -> BookingService:
    return BookingService(db)
