"""Router API principal v1"""
from fastapi import APIRouter, Depends
from app.api.deps import maintenance_gate
from app.api.v1.endpoints import (
    properties, bookings, payouts, conversations,
    wishlist, settings, locale, maintenance
)

# Créer le router principal
api_router = APIRouter()

# Routes bloquées pendant la maintenance (sauf admins)
gated = [Depends(maintenance_gate)]

# ==================== PROPERTIES ====================
api_router.include_router(
    properties.router,
    prefix="/properties",
    tags=["Properties"],
    dependencies=gated
)

# ==================== BOOKINGS ====================
api_router.include_router(
    bookings.router,
    prefix="/bookings",
    tags=["Bookings"],
    dependencies=gated
)

# ==================== PAYOUTS ====================
api_router.include_router(
    payouts.router,
    prefix="/payouts",
    tags=["Payouts"],
    dependencies=gated
)

# ==================== CONVERSATIONS ====================
api_router.include_router(
    conversations.router,
    prefix="/conversations",
    tags=["Conversations"],
    dependencies=gated
)

# ==================== WISHLIST ====================
api_router.include_router(
    wishlist.router,
    prefix="/wishlist",
    tags=["Wishlist"],
    dependencies=gated
)

# ==================== LOCALE ====================
api_router.include_router(
    locale.router,
    prefix="/locale",
    tags=["Locale"],
    dependencies=gated
)

# ==================== SETTINGS / MAINTENANCE ====================
# Toujours joignables : le client en a besoin pour afficher l'écran de maintenance
api_router.include_router(
    settings.router,
    prefix="/settings",
    tags=["Settings"]
)
api_router.include_router(
    maintenance.router,
    prefix="/maintenance",
    tags=["Maintenance"]
)
