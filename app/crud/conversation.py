# app/crud/conversation.py
"""
Opérations CRUD pour les conversations et messages
"""

from typing import Optional, List
from supabase import Client
import logging

from app.crud.base import update_entity_status, utcnow_iso
from app.models import Conversation, ConversationStatus, Message

logger = logging.getLogger(__name__)


class ConversationCRUD:
    """Classe pour gérer les opérations CRUD sur les conversations"""

    def __init__(self, db: Client):
        self.db = db
        self.conversations_table = "conversations"
        self.messages_table = "messages"

    def get_by_id(self, conversation_id: str) -> Optional[Conversation]:
        """Récupérer une conversation par ID"""
        try:
            response = self.db.table(self.conversations_table)\
                .select("*")\
                .eq("id", conversation_id)\
                .execute()

            if response.data:
                return Conversation(**response.data[0])
            return None

        except Exception as e:
            logger.error(f"Erreur récupération conversation {conversation_id}: {e}")
            raise

    def get_all(
        self,
        skip: int = 0,
        limit: int = 50,
        status: Optional[ConversationStatus] = None
    ) -> List[Conversation]:
        """Conversations triées par dernière activité (la plus récente d'abord)"""
        try:
            query = self.db.table(self.conversations_table).select("*")

            if status:
                query = query.eq("status", status.value)

            query = query.order("updated_at", desc=True)
            query = query.range(skip, skip + limit - 1)

            response = query.execute()

            return [Conversation(**conv) for conv in response.data or []]

        except Exception as e:
            logger.error(f"Erreur récupération conversations: {e}")
            raise

    def update_status(
        self,
        conversation_id: str,
        new_status: ConversationStatus,
        expected_status: ConversationStatus
    ) -> Optional[Conversation]:
        row = update_entity_status(
            self.db, self.conversations_table, conversation_id,
            new_status.value, expected_status.value
        )
        return Conversation(**row) if row else None

    # ========================================
    # Gestion des messages
    # ========================================

    def add_message(self, conversation_id: str, sender_id: str, content: str) -> Message:
        """
        Ajouter un message et rafraîchir la dernière activité de la conversation

        Le statut de la conversation n'est pas modifié.
        """
        try:
            response = self.db.table(self.messages_table)\
                .insert({
                    "conversation_id": conversation_id,
                    "sender_id": sender_id,
                    "content": content,
                    "message_type": "text"
                })\
                .execute()

            if not response.data:
                raise Exception("Erreur insertion message")

            self.db.table(self.conversations_table)\
                .update({"updated_at": utcnow_iso()})\
                .eq("id", conversation_id)\
                .execute()

            logger.info(f"Message ajouté à conversation {conversation_id}")
            return Message(**response.data[0])

        except Exception as e:
            logger.error(f"Erreur ajout message: {e}")
            raise

    def get_messages(self, conversation_id: str, limit: Optional[int] = None) -> List[Message]:
        """Messages d'une conversation, du plus ancien au plus récent"""
        try:
            query = self.db.table(self.messages_table)\
                .select("*")\
                .eq("conversation_id", conversation_id)\
                .order("created_at", desc=False)

            if limit:
                query = query.limit(limit)

            response = query.execute()

            return [Message(**msg) for msg in response.data or []]

        except Exception as e:
            logger.error(f"Erreur récupération messages: {e}")
            raise


def get_conversation_crud(db: Client) -> ConversationCRUD:
    """Factory function pour créer une instance ConversationCRUD"""
    return ConversationCRUD(db)
