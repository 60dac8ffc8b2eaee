"""Endpoints API"""
from app.api.v1.endpoints import properties
from app.api.v1.endpoints import bookings
from app.api.v1.endpoints import payouts
from app.api.v1.endpoints import conversations
from app.api.v1.endpoints import wishlist
from app.api.v1.endpoints import settings
from app.api.v1.endpoints import locale
from app.api.v1.endpoints import maintenance

__all__ = [
    "properties", "bookings", "payouts", "conversations",
    "wishlist", "settings", "locale", "maintenance"
]
