# app/crud/__init__.py
"""
Couche CRUD pour l'API Holibayt

Modules CRUD:
- Property: Annonces
- Booking: Réservations
- Withdrawal: Retraits, comptes de paiement, transactions
- Conversation: Conversations et messages
- Notification, Settings, Wishlist, User
"""

from .property import PropertyCRUD, get_property_crud
from .booking import BookingCRUD, get_booking_crud
from .withdrawal import WithdrawalCRUD, get_withdrawal_crud
from .conversation import ConversationCRUD, get_conversation_crud
from .notification import NotificationCRUD, get_notification_crud
from .settings import SettingsCRUD, get_settings_crud
from .wishlist import WishlistCRUD, get_wishlist_crud
from .user import UserCRUD, get_user_crud

__all__ = [
    "PropertyCRUD",
    "get_property_crud",
    "BookingCRUD",
    "get_booking_crud",
    "WithdrawalCRUD",
    "get_withdrawal_crud",
    "ConversationCRUD",
    "get_conversation_crud",
    "NotificationCRUD",
    "get_notification_crud",
    "SettingsCRUD",
    "get_settings_crud",
    "WishlistCRUD",
    "get_wishlist_crud",
    "UserCRUD",
    "get_user_crud",
]
