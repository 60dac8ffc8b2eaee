# app/models/booking.py
"""
Modèles Pydantic pour les réservations.
Le montant total est en DZD. Les vues "à venir" / "passées" ne sont pas
stockées : elles se calculent à partir des dates (voir app.domain.lifecycle).
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import date, datetime
from enum import Enum


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class BookingBucket(str, Enum):
    """Onglet d'affichage calculé"""
    upcoming = "upcoming"
    ongoing = "ongoing"
    past = "past"
    cancelled = "cancelled"


class BookingCreate(BaseModel):
    property_id: str = Field(..., min_length=1)
    check_in_date: date
    check_out_date: date
    guests_count: int = Field(1, ge=1)

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_out_date <= self.check_in_date:
            raise ValueError("La date de départ doit suivre la date d'arrivée")
        return self


class Booking(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    property_id: str
    user_id: str  # Voyageur
    check_in_date: date
    check_out_date: date
    guests_count: int = 1
    total_amount: float
    status: BookingStatus = BookingStatus.pending
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingView(Booking):
    bucket: BookingBucket
    formatted_total: str
