# app/models/conversation.py
"""
Modèles Pydantic pour la messagerie (demandes sur une annonce,
échanges entre hôtes, support).
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class ConversationStatus(str, Enum):
    """Statut d'une conversation"""
    active = "active"
    closed = "closed"


class ConversationType(str, Enum):
    property_inquiry = "property_inquiry"
    host_to_host = "host_to_host"
    support = "support"


class MessageAdd(BaseModel):
    """Modèle pour ajouter un message à une conversation"""
    content: str = Field(..., min_length=1, max_length=5000)


class Message(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    conversation_id: str
    sender_id: str
    content: str
    message_type: str = "text"
    created_at: Optional[datetime] = None


class ConversationStatusUpdate(BaseModel):
    status: ConversationStatus


class Conversation(BaseModel):
    """Modèle complet d'une conversation"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[str] = None
    other_user_id: Optional[str] = None
    property_id: Optional[str] = None
    admin_id: Optional[str] = None
    subject: Optional[str] = None
    conversation_type: ConversationType = ConversationType.support
    status: ConversationStatus = ConversationStatus.active
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None  # Dernière activité
