"""
Services métier : orchestrent les CRUD et les règles du domaine.
Chaque opération de mutation retourne un Result.
"""

from .properties import PropertyService, get_property_service
from .bookings import BookingService, get_booking_service
from .payouts import PayoutService, get_payout_service
from .conversations import ConversationService, get_conversation_service
from .wishlist import WishlistService, get_wishlist_service
from .platform_settings import PlatformSettingsService

__all__ = [
    "PropertyService",
    "get_property_service",
    "BookingService",
    "get_booking_service",
    "PayoutService",
    "get_payout_service",
    "ConversationService",
    "get_conversation_service",
    "WishlistService",
    "get_wishlist_service",
    "PlatformSettingsService",
]
