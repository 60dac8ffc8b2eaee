"""
Messagerie : statut des conversations (admin) et envoi de messages
"""
from typing import Optional
from supabase import Client
import logging

from app.crud import get_conversation_crud
from app.domain.lifecycle import CONVERSATION_MACHINE, InvalidTransition
from app.domain.results import ErrorKind, Result
from app.models import Conversation, ConversationStatus, CurrentUser

logger = logging.getLogger(__name__)

STATUS_ACTIONS = {
    ConversationStatus.closed: "close",
    ConversationStatus.active: "reopen",
}


class ConversationService:
    def __init__(self, db: Client):
        self.conversations = get_conversation_crud(db)

    def list(self, admin: CurrentUser, status: Optional[ConversationStatus] = None,
             skip: int = 0, limit: int = 50) -> Result:
        if not admin.is_admin:
            return Result.failure(ErrorKind.forbidden, "Action réservée aux administrateurs")
        try:
            return Result.success(self.conversations.get_all(skip=skip, limit=limit, status=status))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def set_status(self, admin: CurrentUser, conversation_id: str, status: ConversationStatus) -> Result:
        if not admin.is_admin:
            return Result.failure(ErrorKind.forbidden, "Action réservée aux administrateurs")
        try:
            conversation = self.conversations.get_by_id(conversation_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if conversation is None:
            return Result.failure(ErrorKind.not_found, f"Conversation {conversation_id} introuvable")

        try:
            target = CONVERSATION_MACHINE.next_state(conversation.status, STATUS_ACTIONS[status])
        except InvalidTransition as e:
            return Result.failure(ErrorKind.invalid_transition, str(e))

        try:
            updated = self.conversations.update_status(conversation_id, target, conversation.status)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if updated is None:
            return Result.failure(ErrorKind.conflict, "Statut modifié entre-temps")
        return Result.success(updated)

    def get_messages(self, user: CurrentUser, conversation_id: str) -> Result:
        try:
            conversation = self.conversations.get_by_id(conversation_id)
            if conversation is None:
                return Result.failure(ErrorKind.not_found, f"Conversation {conversation_id} introuvable")
            if not self._is_member(user, conversation):
                return Result.failure(ErrorKind.forbidden, "Conversation d'autres utilisateurs")
            return Result.success(self.conversations.get_messages(conversation_id))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def send_message(self, user: CurrentUser, conversation_id: str, content: str) -> Result:
        """
        Ajoute un message. Le statut ne change pas ; seule la date de
        dernière activité est rafraîchie.
        """
        if not content or not content.strip():
            return Result.failure(ErrorKind.validation, "Message vide")
        try:
            conversation = self.conversations.get_by_id(conversation_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if conversation is None:
            return Result.failure(ErrorKind.not_found, f"Conversation {conversation_id} introuvable")
        if not self._is_member(user, conversation):
            return Result.failure(ErrorKind.forbidden, "Conversation d'autres utilisateurs")
        # Les admins répondent aussi sur une conversation fermée
        if conversation.status == ConversationStatus.closed and not user.is_admin:
            return Result.failure(ErrorKind.invalid_transition, "Conversation fermée")

        try:
            return Result.success(self.conversations.add_message(conversation_id, user.id, content.strip()))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    @staticmethod
    def _is_member(user: CurrentUser, conversation: Conversation) -> bool:
        return user.is_admin or user.id in (conversation.user_id, conversation.other_user_id)


def get_conversation_service(db: Client) -> ConversationService:
    return ConversationService(db)
