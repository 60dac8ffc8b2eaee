"""
Publication et modération des annonces.

Flux hôte : brouillon → soumission (pending).
Flux admin : approve (pending/suspended → active), reject (pending/active → suspended).
Le statut change sous condition de l'état lu ; la notification au
propriétaire est envoyée ensuite et son échec ne remet pas en cause l'action.
"""
from datetime import datetime, timezone
from typing import List, Optional
from supabase import Client
import logging

from app.crud import get_notification_crud, get_property_crud
from app.domain.lifecycle import PROPERTY_MACHINE, InvalidTransition
from app.domain.results import ErrorKind, Result
from app.models import (
    CurrentUser, NotificationCreate, NotificationType,
    Property, PropertyCreate, PropertyStatus, PropertyUpdate
)

logger = logging.getLogger(__name__)


class PropertyService:
    def __init__(self, db: Client):
        self.properties = get_property_crud(db)
        self.notifications = get_notification_crud(db)

    # ==================== Lecture ====================

    def get(self, property_id: str, viewer: Optional[CurrentUser] = None) -> Result:
        """Une annonce non publiée n'est visible que par son propriétaire ou un admin"""
        try:
            prop = self.properties.get_by_id(property_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

        if prop is None:
            return Result.failure(ErrorKind.not_found, f"Annonce {property_id} non trouvée")
        if prop.status != PropertyStatus.active and not self._can_manage(viewer, prop):
            return Result.failure(ErrorKind.not_found, f"Annonce {property_id} non trouvée")
        return Result.success(prop)

    def list(
        self,
        viewer: Optional[CurrentUser] = None,
        status: Optional[PropertyStatus] = None,
        mine: bool = False,
        **filters
    ) -> Result:
        """Les visiteurs ne voient que les annonces actives"""
        owner_id = None
        if mine:
            if viewer is None:
                return Result.failure(ErrorKind.forbidden, "Connexion requise")
            owner_id = viewer.id
        elif viewer is None or not viewer.is_admin:
            status = PropertyStatus.active

        try:
            items: List[Property] = self.properties.get_all(status=status, owner_id=owner_id, **filters)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        return Result.success(items)

    # ==================== Hôte ====================

    def create(self, host: CurrentUser, data: PropertyCreate) -> Result:
        if not host.is_host:
            return Result.failure(ErrorKind.forbidden, "Seuls les hôtes peuvent publier une annonce")
        try:
            return Result.success(self.properties.create(data, owner_id=host.id))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def update(self, user: CurrentUser, property_id: str, data: PropertyUpdate) -> Result:
        """Modifier une annonce ; submit=True soumet un brouillon à la modération"""
        try:
            prop = self.properties.get_by_id(property_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if prop is None:
            return Result.failure(ErrorKind.not_found, f"Annonce {property_id} non trouvée")
        if not self._can_manage(user, prop):
            return Result.failure(ErrorKind.forbidden, "Annonce d'un autre hôte")

        target = None
        if data.submit:
            try:
                target = PROPERTY_MACHINE.next_state(prop.status, "submit")
            except InvalidTransition as e:
                return Result.failure(ErrorKind.invalid_transition, str(e))

        fields = data.model_dump(mode="json", exclude_unset=True, exclude={"submit"})
        try:
            if target is not None:
                # Contenu et statut dans une seule écriture conditionnée par l'état lu
                updated = self.properties.update_status(property_id, target, prop.status, fields)
                if updated is None:
                    return Result.failure(ErrorKind.conflict, "Statut modifié entre-temps")
                prop = updated
            elif fields:
                prop = self.properties.update(property_id, data) or prop
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

        return Result.success(prop)

    def delete(self, user: CurrentUser, property_id: str) -> Result:
        """Suppression définitive, par le propriétaire ou un admin, quel que soit le statut"""
        try:
            prop = self.properties.get_by_id(property_id)
            if prop is None:
                return Result.failure(ErrorKind.not_found, f"Annonce {property_id} non trouvée")
            if not self._can_manage(user, prop):
                return Result.failure(ErrorKind.forbidden, "Annonce d'un autre hôte")
            self.properties.delete(property_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        return Result.success(True)

    # ==================== Admin ====================

    def approve(self, admin: CurrentUser, property_id: str) -> Result:
        return self._moderate(admin, property_id, "approve")

    def reject(self, admin: CurrentUser, property_id: str, reason: str) -> Result:
        if not reason or not reason.strip():
            return Result.failure(ErrorKind.validation, "Le motif de refus est obligatoire")
        return self._moderate(admin, property_id, "reject", reason.strip())

    def _moderate(self, admin: CurrentUser, property_id: str, action: str, reason: Optional[str] = None) -> Result:
        if not admin.is_admin:
            return Result.failure(ErrorKind.forbidden, "Action réservée aux administrateurs")

        try:
            prop = self.properties.get_by_id(property_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if prop is None:
            return Result.failure(ErrorKind.not_found, f"Annonce {property_id} non trouvée")

        try:
            target = PROPERTY_MACHINE.next_state(prop.status, action)
        except InvalidTransition as e:
            logger.info(f"Transition refusée: {e}")
            return Result.failure(ErrorKind.invalid_transition, str(e))

        extra = {
            "reviewed_by": admin.id,
            "reviewed_at": datetime.now(timezone.utc).isoformat(),
            "rejection_reason": reason,
        }
        try:
            updated = self.properties.update_status(property_id, target, prop.status, extra)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if updated is None:
            return Result.failure(ErrorKind.conflict, "Statut modifié entre-temps")

        if action == "approve":
            notification = NotificationCreate(
                user_id=prop.owner_id,
                title="Property Approved",
                message=f"Your property \"{prop.title}\" has been approved and is now live.",
                type=NotificationType.property_approved,
                related_id=prop.id,
            )
        else:
            notification = NotificationCreate(
                user_id=prop.owner_id,
                title="Property Rejected",
                message=f"Your property \"{prop.title}\" has been rejected. Reason: {reason}",
                type=NotificationType.property_rejected,
                related_id=prop.id,
            )
        warning = self.notifications.notify_best_effort(notification)
        return Result.success(updated, warning=warning)

    @staticmethod
    def _can_manage(user: Optional[CurrentUser], prop: Property) -> bool:
        return user is not None and (user.is_admin or user.id == prop.owner_id)


def get_property_service(db: Client) -> PropertyService:
    return PropertyService(db)
