# app/models/notification.py

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class NotificationType(str, Enum):
    property_approved = "property_approved"
    property_rejected = "property_rejected"
    booking_confirmed = "booking_confirmed"
    booking_completed = "booking_completed"
    booking_cancelled = "booking_cancelled"
    withdrawal_approved = "withdrawal_approved"
    withdrawal_completed = "withdrawal_completed"
    withdrawal_rejected = "withdrawal_rejected"


class NotificationCreate(BaseModel):
    user_id: str
    title: str = Field(..., max_length=200)
    message: str = Field(..., max_length=2000)
    type: NotificationType
    related_id: Optional[str] = None
