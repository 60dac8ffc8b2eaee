"""
Routes API pour les réservations
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from supabase import Client

from app.api.deps import get_current_user, get_formatter, get_language, notice_of, unwrap
from app.db import get_supabase
from app.domain.currency import DisplayLanguage, PriceFormatter
from app.domain.lifecycle import booking_bucket
from app.models import ActionResponse, Booking, BookingBucket, BookingCreate, BookingView, CurrentUser
from app.services import get_booking_service

router = APIRouter()


def to_view(booking: Booking, formatter: PriceFormatter) -> BookingView:
    # L'onglet est recalculé avec la date du jour à chaque réponse
    return BookingView(
        **booking.model_dump(),
        bucket=booking_bucket(booking.status, booking.check_in_date, booking.check_out_date),
        formatted_total=formatter.format_price(booking.total_amount),
    )


@router.post("/", response_model=BookingView, status_code=201)
def create_booking(
    booking_data: BookingCreate,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    booking = unwrap(get_booking_service(db).create(user, booking_data), lang)
    return to_view(booking, formatter)


@router.get("/", response_model=List[BookingView])
def list_my_bookings(
    bucket: Optional[BookingBucket] = None,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Réservations du voyageur connecté, filtrables par onglet"""
    bookings = unwrap(get_booking_service(db).list_for_guest(user, bucket), lang)
    return [to_view(b, formatter) for b in bookings]


@router.get("/host", response_model=List[BookingView])
def list_host_bookings(
    bucket: Optional[BookingBucket] = Query(None),
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Réservations reçues sur les annonces de l'hôte connecté"""
    bookings = unwrap(get_booking_service(db).list_for_host(user, bucket), lang)
    return [to_view(b, formatter) for b in bookings]


@router.post("/{booking_id}/{action}", response_model=ActionResponse)
def change_booking_status(
    booking_id: str,
    action: str,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Actions : confirm, complete, cancel"""
    service = get_booking_service(db)
    handlers = {
        "confirm": service.confirm,
        "complete": service.complete,
        "cancel": service.cancel,
    }
    if action not in handlers:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Action inconnue: {action}")

    result = handlers[action](user, booking_id)
    booking = unwrap(result, lang)
    return ActionResponse(data=to_view(booking, formatter), warning=notice_of(result, lang))
