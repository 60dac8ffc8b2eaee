"""
Endpoints API pour la messagerie.
Les admins listent les conversations (dernière activité en tête) et
changent leur statut ; les participants échangent des messages.
"""
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from supabase import Client

from app.api.deps import get_current_user, get_language, require_admin, unwrap
from app.db import get_supabase
from app.domain.currency import DisplayLanguage
from app.models import (
    Conversation, ConversationStatus, ConversationStatusUpdate,
    CurrentUser, Message, MessageAdd
)
from app.services import get_conversation_service

router = APIRouter()


@router.get("/", response_model=List[Conversation])
def list_conversations(
    status_filter: Optional[ConversationStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_conversation_service(db).list(admin, status_filter, skip, limit), lang)


@router.patch("/{conversation_id}/status", response_model=Conversation)
def update_conversation_status(
    conversation_id: str,
    body: ConversationStatusUpdate,
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    """Ouvrir ou fermer une conversation"""
    return unwrap(get_conversation_service(db).set_status(admin, conversation_id, body.status), lang)


@router.get("/{conversation_id}/messages", response_model=List[Message])
def list_messages(
    conversation_id: str,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_conversation_service(db).get_messages(user, conversation_id), lang)


@router.post("/{conversation_id}/messages", response_model=Message, status_code=status.HTTP_201_CREATED)
def send_message(
    conversation_id: str,
    body: MessageAdd,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_conversation_service(db).send_message(user, conversation_id, body.content), lang)
