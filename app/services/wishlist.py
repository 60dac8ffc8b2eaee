"""
Liste de souhaits : bascule idempotente d'un couple (utilisateur, annonce).

La base fait foi. Un second appel pour le même couple pendant qu'une
bascule est en cours est refusé (busy) sans toucher à la base.
"""
from threading import Lock
from typing import Optional, Set, Tuple
from supabase import Client
import logging

from app.crud import get_wishlist_crud
from app.domain.results import ErrorKind, Result
from app.models import CurrentUser

logger = logging.getLogger(__name__)

_in_flight: Set[Tuple[str, str]] = set()
_in_flight_lock = Lock()


class WishlistService:
    def __init__(self, db: Client):
        self.wishlist = get_wishlist_crud(db)

    def list(self, user: Optional[CurrentUser]) -> Result:
        if user is None:
            return Result.failure(ErrorKind.forbidden, "Please login to view your wishlist")
        try:
            return Result.success(self.wishlist.get_property_ids(user.id))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def toggle(self, user: Optional[CurrentUser], property_id: str) -> Result:
        """Retourne la nouvelle appartenance : True si ajoutée, False si retirée"""
        if user is None:
            return Result.failure(ErrorKind.forbidden, "Please login to add to wishlist")

        key = (user.id, property_id)
        with _in_flight_lock:
            if key in _in_flight:
                return Result.failure(ErrorKind.busy, "Bascule déjà en cours")
            _in_flight.add(key)

        try:
            if self.wishlist.exists(user.id, property_id):
                self.wishlist.remove(user.id, property_id)
                logger.info(f"✓ {property_id} retiré de la liste de {user.id}")
                return Result.success(False)
            self.wishlist.add(user.id, property_id)
            logger.info(f"✓ {property_id} ajouté à la liste de {user.id}")
            return Result.success(True)
        except Exception as e:
            logger.error(f"✗ Erreur bascule liste de souhaits: {e}")
            return Result.failure(ErrorKind.store, str(e))
        finally:
            with _in_flight_lock:
                _in_flight.discard(key)


def get_wishlist_service(db: Client) -> WishlistService:
    return WishlistService(db)
