"""
Opérations CRUD pour les versements aux hôtes :
comptes de paiement, demandes de retrait, transactions de commission (lecture seule)
"""

from typing import Any, Dict, List, Optional
from supabase import Client
import logging

from app.crud.base import update_entity_status, utcnow_iso
from app.models import (
    PaymentAccount, PaymentAccountCreate,
    WithdrawalRequest, WithdrawalStatus
)

logger = logging.getLogger(__name__)


class WithdrawalCRUD:
    """Classe pour gérer les retraits et comptes de paiement des hôtes"""

    def __init__(self, db: Client):
        self.db = db
        self.withdrawals_table = "withdrawal_requests"
        self.accounts_table = "host_payment_accounts"
        self.transactions_table = "commission_transactions"

    # ========================================
    # Demandes de retrait
    # ========================================

    def create(self, host_user_id: str, payment_account_id: str, amount: float) -> WithdrawalRequest:
        """
        Insérer une demande de retrait (statut pending)

        La validation du montant est faite par le service avant l'appel.
        """
        try:
            data = {
                "host_user_id": host_user_id,
                "payment_account_id": payment_account_id,
                "amount": amount,
                "status": WithdrawalStatus.pending.value
            }

            response = self.db.table(self.withdrawals_table)\
                .insert(data)\
                .execute()

            if not response.data:
                raise Exception("Aucune donnée retournée")

            logger.info(f"✓ Demande de retrait créée: {response.data[0]['id']} ({amount} DZD)")
            return WithdrawalRequest(**response.data[0])

        except Exception as e:
            logger.error(f"✗ Erreur création demande de retrait: {e}")
            raise

    def get_by_id(self, withdrawal_id: str) -> Optional[WithdrawalRequest]:
        try:
            response = self.db.table(self.withdrawals_table)\
                .select("*")\
                .eq("id", withdrawal_id)\
                .execute()

            if response.data:
                return WithdrawalRequest(**response.data[0])
            return None

        except Exception as e:
            logger.error(f"✗ Erreur récupération retrait {withdrawal_id}: {e}")
            raise

    def get_all(
        self,
        host_user_id: Optional[str] = None,
        status: Optional[WithdrawalStatus] = None
    ) -> List[WithdrawalRequest]:
        try:
            query = self.db.table(self.withdrawals_table).select("*")

            if host_user_id:
                query = query.eq("host_user_id", host_user_id)
            if status:
                query = query.eq("status", status.value)

            response = query.order("created_at", desc=True).execute()
            return [WithdrawalRequest(**row) for row in response.data or []]

        except Exception as e:
            logger.error(f"✗ Erreur récupération retraits: {e}")
            raise

    def update_status(
        self,
        withdrawal_id: str,
        new_status: WithdrawalStatus,
        expected_status: WithdrawalStatus,
        rejection_reason: Optional[str] = None
    ) -> Optional[WithdrawalRequest]:
        extra: Dict[str, Any] = {"processed_at": utcnow_iso()}
        if rejection_reason:
            extra["rejection_reason"] = rejection_reason

        row = update_entity_status(
            self.db, self.withdrawals_table, withdrawal_id,
            new_status.value, expected_status.value, extra
        )
        return WithdrawalRequest(**row) if row else None

    # ========================================
    # Transactions (produites par le backend de paiement)
    # ========================================

    def get_host_transactions(self, host_user_id: str) -> List[Dict[str, Any]]:
        try:
            response = self.db.table(self.transactions_table)\
                .select("host_amount,status")\
                .eq("host_user_id", host_user_id)\
                .execute()
            return response.data or []
        except Exception as e:
            logger.error(f"✗ Erreur récupération transactions hôte {host_user_id}: {e}")
            raise

    # ========================================
    # Comptes de paiement
    # ========================================

    def get_accounts(self, user_id: str) -> List[PaymentAccount]:
        try:
            response = self.db.table(self.accounts_table)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [PaymentAccount(**row) for row in response.data or []]
        except Exception as e:
            logger.error(f"✗ Erreur récupération comptes {user_id}: {e}")
            raise

    def get_account(self, account_id: str) -> Optional[PaymentAccount]:
        try:
            response = self.db.table(self.accounts_table)\
                .select("*")\
                .eq("id", account_id)\
                .execute()
            if response.data:
                return PaymentAccount(**response.data[0])
            return None
        except Exception as e:
            logger.error(f"✗ Erreur récupération compte {account_id}: {e}")
            raise

    def add_account(self, user_id: str, account_data: PaymentAccountCreate) -> PaymentAccount:
        try:
            data = account_data.model_dump()
            data["user_id"] = user_id

            response = self.db.table(self.accounts_table).insert(data).execute()
            if not response.data:
                raise Exception("Aucune donnée retournée")

            logger.info(f"✓ Compte de paiement ajouté pour {user_id}")
            return PaymentAccount(**response.data[0])
        except Exception as e:
            logger.error(f"✗ Erreur ajout compte de paiement: {e}")
            raise

    def delete_account(self, user_id: str, account_id: str) -> bool:
        try:
            response = self.db.table(self.accounts_table)\
                .delete()\
                .eq("id", account_id)\
                .eq("user_id", user_id)\
                .execute()
            deleted = bool(response.data)
            if deleted:
                logger.info(f"✓ Compte de paiement supprimé: {account_id}")
            return deleted
        except Exception as e:
            logger.error(f"✗ Erreur suppression compte {account_id}: {e}")
            raise


def get_withdrawal_crud(db: Client) -> WithdrawalCRUD:
    """Factory function pour créer une instance WithdrawalCRUD"""
    return WithdrawalCRUD(db)
